"""SolrClient: a synchronous client for the Solr search server.

Provides a fluent request builder, a typed query-expression builder, a
response decoder with a finite error taxonomy, and cursor-based deep
pagination, plus a factory wiring a client from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SolrClient.client import Client
from SolrClient.core.errors import (
    ErrorKind,
    InvalidStateError,
    SolrError,
    SolrNetworkError,
    SolrNotFoundError,
    SolrSerializationError,
    SolrServerError,
    SolrSyntaxError,
    TransportError,
)
from SolrClient.core.models import FacetCounts, Payload, PayloadKind, ResultPage, SolrResponse
from SolrClient.core.query import (
    Connector,
    Date,
    Query,
    Range,
    Term,
    compose,
    date,
    range_exclusive,
    range_inclusive,
    term,
)
from SolrClient.cursor import Cursor, CursorState
from SolrClient.request.builder import RequestBuilder, RequestHandlers
from SolrClient.transport.base import Transport, TransportResponse

if TYPE_CHECKING:
    from SolrClient.config import AppConfig
    from SolrClient.config.solr import SolrConfig


def create_client(config: AppConfig | SolrConfig, *, transport: Transport | None = None) -> Client:
    """Create a client from parsed configuration.

    Args:
        config: Application configuration or its `solr` section.
        transport: Optional transport; defaults to `RequestsTransport` with
            the configured timeout.

    Returns:
        Configured Client instance.
    """
    solr = getattr(config, "solr", config)
    return Client(solr.base_url, solr.collection, transport=transport, timeout=solr.timeout)


__all__ = [
    "Client",
    "Connector",
    "Cursor",
    "CursorState",
    "Date",
    "ErrorKind",
    "FacetCounts",
    "InvalidStateError",
    "Payload",
    "PayloadKind",
    "Query",
    "Range",
    "RequestBuilder",
    "RequestHandlers",
    "ResultPage",
    "SolrError",
    "SolrNetworkError",
    "SolrNotFoundError",
    "SolrResponse",
    "SolrSerializationError",
    "SolrServerError",
    "SolrSyntaxError",
    "Term",
    "Transport",
    "TransportError",
    "TransportResponse",
    "compose",
    "create_client",
    "date",
    "range_exclusive",
    "range_inclusive",
    "term",
]
