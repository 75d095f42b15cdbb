"""Transports moving requests to the search server.

The client depends only on the `Transport` protocol; `RequestsTransport` is
the default implementation.
"""

from __future__ import annotations

from SolrClient.transport.base import Transport, TransportResponse
from SolrClient.transport.http_transport import RequestsTransport

__all__ = [
    "RequestsTransport",
    "Transport",
    "TransportResponse",
]
