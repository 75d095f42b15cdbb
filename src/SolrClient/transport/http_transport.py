"""Default transport built on a reusable `requests` session."""

from __future__ import annotations

from typing import Mapping

import requests

from SolrClient.core.errors import TransportError
from SolrClient.transport.base import TransportResponse
from SolrClient.utils.log import log

DEFAULT_TIMEOUT = 30.0

HEADERS = {
    "User-Agent": "solr-client/0.1",
    "Accept": "application/json",
}

JSON_CONTENT_TYPE = "application/json"


class RequestsTransport:
    """Blocking HTTP transport for the search server.

    Responsible only for moving bytes: it neither interprets status codes nor
    retries. Connection-level failures become `TransportError`.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the transport with a reusable HTTP session.

        Args:
            timeout: Request timeout in seconds (default 30).
            headers: Extra headers merged over the defaults.
            session: Optional pre-configured session (proxies, TLS, ...).
        """
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._session = session or requests.Session()
        self._headers = {**HEADERS, **dict(headers or {})}

    @property
    def timeout(self) -> float:
        return self._timeout

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections.
        """
        self._session.close()

    def __enter__(self) -> RequestsTransport:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def get(self, url: str) -> TransportResponse:
        return self._send("GET", url, None)

    def post(self, url: str, body: bytes | None) -> TransportResponse:
        return self._send("POST", url, body)

    def _send(self, method: str, url: str, body: bytes | None) -> TransportResponse:
        headers = dict(self._headers)
        if body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        try:
            response = self._session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as error:
            log.debug("HTTP %s %s failed: %s", method, url, error)
            raise TransportError(f"{method} {url} failed: {error}") from error
        log.debug("HTTP %s %s -> status=%s bytes=%s", method, url, response.status_code, len(response.content))
        return TransportResponse(status=response.status_code, body=response.content)
