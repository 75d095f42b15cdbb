"""Transport protocol consumed by the client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status and raw body of one HTTP exchange."""

    status: int
    body: bytes = b""


class Transport(Protocol):
    """Blocking HTTP sender.

    Implementations raise `TransportError` when no HTTP response could be
    obtained (DNS failure, refused connection, timeout, ...). Any HTTP status,
    including errors, is returned as a `TransportResponse`.
    """

    def get(self, url: str) -> TransportResponse:
        """Send a GET request."""
        raise NotImplementedError

    def post(self, url: str, body: bytes | None) -> TransportResponse:
        """Send a POST request.

        Args:
            url: Fully rendered request URL.
            body: JSON bytes sent as `application/json`, or None for an
                empty POST without content type.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release pooled resources."""
        raise NotImplementedError
