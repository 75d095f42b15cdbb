"""Search server client.

Orchestrates builder -> transport -> decoder for one request at a time:

    client = Client("http://localhost:8983", "books")
    client.select("*:*").rows(10).run()
    page = client.get_response()

A successful `run` stores the decoded reply and clears the query parameters;
a failed `run` leaves parameters and payload untouched so the caller may
inspect or retry.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from SolrClient.core.errors import SolrNetworkError, SolrSerializationError, TransportError
from SolrClient.core.models import Payload, PayloadKind, SolrResponse
from SolrClient.core.query import QueryNode
from SolrClient.request.builder import CURSOR_PARAM, RequestBuilder, RequestHandlers
from SolrClient.response.decoder import decode_response
from SolrClient.response.parser import DocType, parse_envelope
from SolrClient.transport.base import Transport
from SolrClient.utils.log import log

if TYPE_CHECKING:
    from SolrClient.cursor import Cursor


class Client(RequestBuilder):
    """Fluent client for one collection of the search server.

    All `RequestBuilder` mutators are available and return the client, so
    requests read as one chain ending in `run()`. A client is meant for one
    thread; calls are processed strictly in program order.
    """

    def __init__(
        self,
        base_url: str,
        collection: str,
        *,
        transport: Transport | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Server origin, e.g. `http://localhost:8983`.
            collection: Collection (core) name.
            transport: HTTP transport; defaults to a `RequestsTransport`.
            timeout: Timeout in seconds for the default transport.

        Raises:
            ValueError: If base_url is not absolute or collection is empty.
        """
        super().__init__(base_url, collection)
        if transport is None:
            from SolrClient.transport.http_transport import RequestsTransport

            transport = RequestsTransport(timeout=timeout)
            self._owns_transport = True
        else:
            self._owns_transport = False
        self._transport = transport
        self._last_response: Any = None

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> Client:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close the transport."""
        self.close()

    def select(self, q: QueryNode | str) -> Client:
        """Query documents with the `select` handler."""
        return self.handler(RequestHandlers.QUERY).query(q)

    def upload(self, document: Any) -> Client:
        """Index a document (mapping, dataclass, or a list of them)."""
        return self.handler(RequestHandlers.CREATE).payload_body(document)

    def delete(self, q: QueryNode | str) -> Client:
        """Delete all documents matching a query."""
        return self.handler(RequestHandlers.DELETE).payload_body({"delete": {"query": str(q)}})

    def commit(self) -> Client:
        """Commit pending index changes with an empty POST."""
        return self.handler(RequestHandlers.DELETE).auto_commit().payload_empty()

    def request_handler(self, name: str) -> Client:
        """Target any request handler, e.g. `mlt` or `admin/ping`."""
        return self.handler(name)

    def run(self) -> Cursor | None:
        """Send the prepared request.

        Returns:
            A `Cursor` when the request asked for a cursor and the reply
            carries `nextCursorMark`; otherwise None.

        Raises:
            SolrError: Classified failure; request state is left untouched.
        """
        sent = self.copy()
        payload = self.execute()
        if not sent.has_cursor():
            return None
        next_mark = payload.get("nextCursorMark") if isinstance(payload, dict) else None
        if not isinstance(next_mark, str):
            return None

        from SolrClient.cursor import Cursor

        sent._last_response = payload
        sent._owns_transport = False
        sent_mark = next(value for key, value in sent.params if key == CURSOR_PARAM)
        log.debug("Cursor opened: sent=%s next=%s", sent_mark, next_mark)
        return Cursor(sent, next_mark, previous_mark=sent_mark)

    def execute(self) -> Any:
        """Send the prepared request without cursor handling.

        Returns:
            The reply decoded as generic JSON.

        Raises:
            SolrError: Classified failure; request state is left untouched.
        """
        url = self.url_str()
        payload = self.payload
        self._last_response = None
        body = _encode_payload(payload)

        log.debug("Solr request: %s %s", payload.method, url)
        try:
            if payload.kind is PayloadKind.NONE:
                reply = self._transport.get(url)
            else:
                reply = self._transport.post(url, body)
        except TransportError as error:
            raise SolrNetworkError(str(error)) from error

        decoded = decode_response(reply.status, reply.body)
        self._last_response = decoded
        self.clear_params()
        return decoded

    def get_response(self, doc_type: DocType | None = None) -> SolrResponse[Any]:
        """Convert the last successful reply into a typed envelope.

        Args:
            doc_type: Optional document type (dataclass or callable).

        Returns:
            The envelope; an empty one if no call has succeeded yet.

        Raises:
            SolrSerializationError: If the reply does not fit the requested shape.
        """
        return parse_envelope(self._last_response, doc_type)

    @property
    def last_response(self) -> Any:
        """Raw JSON of the last successful reply."""
        return self._last_response


def _encode_payload(payload: Payload) -> bytes | None:
    if payload.kind is not PayloadKind.BODY:
        return None
    try:
        return json.dumps(payload.body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as error:
        raise SolrSerializationError(f"payload is not JSON serializable: {error}") from error
