"""Error taxonomy raised by the client.

Every failure of `Client.run` / `get_response` is a `SolrError` whose `kind`
is one of five values. Each kind also has its own subclass so callers can
branch either with `except SolrNotFoundError:` or on `error.kind`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Finite classification of request failures."""

    NETWORK = "network"
    NOT_FOUND = "not_found"
    SYNTAX = "syntax"
    OTHER = "other"
    SERIALIZATION = "serialization"


class SolrError(Exception):
    """Base error for failed search server round trips.

    Attributes:
        kind: Taxonomy kind of the failure.
        status: HTTP status code when a response was received.
        message: Human-readable message (server `error.msg` for SYNTAX).
        body_text: Raw response body for OTHER failures.
    """

    kind: ErrorKind = ErrorKind.OTHER

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        body_text: str | None = None,
    ) -> None:
        self.message = message
        self.status = status
        self.body_text = body_text
        super().__init__(self._describe())

    @property
    def source(self) -> BaseException | None:
        """Underlying cause, if the error wraps another exception."""
        return self.__cause__

    def _describe(self) -> str:
        parts = [self.kind.value]
        if self.status is not None:
            parts.append(f"status={self.status}")
        if self.message:
            parts.append(" ".join(str(self.message).split()))
        return ": ".join(parts)


class SolrNetworkError(SolrError):
    """Transport failed before or during the HTTP exchange."""

    kind = ErrorKind.NETWORK


class SolrNotFoundError(SolrError):
    """The server answered 404 (unknown collection or handler)."""

    kind = ErrorKind.NOT_FOUND


class SolrSyntaxError(SolrError):
    """The server rejected the request and explained why in `error.msg`."""

    kind = ErrorKind.SYNTAX


class SolrServerError(SolrError):
    """Non-success status without a parseable server message."""

    kind = ErrorKind.OTHER


class SolrSerializationError(SolrError):
    """A payload or response could not be (de)serialized."""

    kind = ErrorKind.SERIALIZATION


class TransportError(Exception):
    """Raised by transports when no HTTP response could be obtained."""


class InvalidStateError(RuntimeError):
    """Builder operation requires state that is not present."""
