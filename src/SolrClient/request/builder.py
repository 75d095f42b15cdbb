"""Request builder.

Accumulates the target handler, query parameters and payload of one request
and renders the final URL:

    <base>/solr/<collection>/<handler>?<params>

Path segments are percent-encoded one by one, so a handler such as
`update/json/docs` stays a single segment (`update%2Fjson%2Fdocs`).
Parameters keep their append order and may repeat.
"""

from __future__ import annotations

import copy
import dataclasses
from typing import Any, Sequence, TypeVar
from urllib.parse import quote, urlencode, urlsplit

from SolrClient.core.errors import InvalidStateError
from SolrClient.core.models import Payload
from SolrClient.core.query import QueryNode

# Characters the WHATWG path-segment encode set leaves alone, minus "/".
_SEGMENT_SAFE = "!$&'()*+,;=:@"
_FORM_SAFE = "*"

_B = TypeVar("_B", bound="RequestBuilder")

CURSOR_PARAM = "cursorMark"
CURSOR_START = "*"


class RequestHandlers:
    """Well-known request handler names; any other string works too."""

    QUERY = "select"
    CREATE = "update/json/docs"
    DELETE = "update"


def normalize_base_url(base_url: str) -> str:
    """Reduce a base URL to `scheme://host[:port]`.

    Raises:
        ValueError: If scheme or host is missing.
    """
    if not base_url or not base_url.strip():
        raise ValueError("base_url cannot be empty")
    parts = urlsplit(base_url.strip())
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"base_url must be an absolute URL with scheme and host: {base_url!r}")
    return f"{parts.scheme}://{parts.netloc}"


def _to_json_value(document: Any) -> Any:
    if dataclasses.is_dataclass(document) and not isinstance(document, type):
        return dataclasses.asdict(document)
    if isinstance(document, (list, tuple)):
        return [_to_json_value(item) for item in document]
    return document


def _to_param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class RequestBuilder:
    """Fluent, in-place builder for one search server request.

    Every mutator returns `self`. `base_url` and `collection` are fixed at
    construction; the handler, parameters and payload change between calls.
    """

    def __init__(self, base_url: str, collection: str) -> None:
        """Initialize the builder.

        Args:
            base_url: Server origin, e.g. `http://localhost:8983`.
            collection: Collection (core) name.

        Raises:
            ValueError: If base_url is not absolute or collection is empty.
        """
        if not collection:
            raise ValueError("collection cannot be empty")
        self._base_url = normalize_base_url(base_url)
        self._collection = collection
        self._handler = ""
        self._params: list[tuple[str, str]] = []
        self._payload = Payload.none()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def handler_name(self) -> str:
        return self._handler

    @property
    def params(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._params)

    @property
    def payload(self) -> Payload:
        return self._payload

    @property
    def method(self) -> str:
        return self._payload.method

    def copy(self: _B) -> _B:
        """Return an independent copy of the current request state."""
        clone = copy.copy(self)
        clone._params = list(self._params)
        return clone

    def handler(self: _B, name: str) -> _B:
        """Set the request handler; resets the payload so the verb is GET again."""
        self._handler = name
        self._payload = Payload.none()
        return self

    def add_param(self: _B, key: str, value: Any) -> _B:
        self._params.append((key, _to_param_value(value)))
        return self

    def query(self: _B, q: QueryNode | str) -> _B:
        return self.add_param("q", q)

    def start(self: _B, offset: int) -> _B:
        return self.add_param("start", offset)

    def rows(self: _B, count: int) -> _B:
        return self.add_param("rows", count)

    def default_field(self: _B, name: str) -> _B:
        return self.add_param("df", name)

    def sort(self: _B, clause: str) -> _B:
        return self.add_param("sort", clause)

    def filter_query(self: _B, fq: QueryNode | str) -> _B:
        return self.add_param("fq", fq)

    def fields(self: _B, *names: str) -> _B:
        return self.add_param("fl", ",".join(names))

    def auto_commit(self: _B) -> _B:
        """Shorthand for commit=true: write operations become visible at once."""
        return self.add_param("commit", "true")

    def dismax(self: _B) -> _B:
        return self.add_param("defType", "dismax")

    def edismax(self: _B) -> _B:
        return self.add_param("defType", "edismax")

    def facet_field(self: _B, name: str) -> _B:
        self._ensure_facet_on()
        return self.add_param("facet_field", name)

    def facet_query(self: _B, q: QueryNode | str) -> _B:
        self._ensure_facet_on()
        return self.add_param("facet_query", q)

    def cursor(self: _B) -> _B:
        """Start deep pagination; the server needs a sort on the unique key too."""
        return self.add_param(CURSOR_PARAM, CURSOR_START)

    def update_cursor_mark(self: _B, mark: str) -> _B:
        """Replace the value of the cursor parameter.

        Raises:
            InvalidStateError: If `cursor()` was not requested.
        """
        if not self.has_cursor():
            raise InvalidStateError("request has no cursorMark parameter; call cursor() first")
        self._params = [
            (key, mark if key == CURSOR_PARAM else value) for key, value in self._params
        ]
        return self

    def has_cursor(self) -> bool:
        return any(key == CURSOR_PARAM for key, _ in self._params)

    def payload_body(self: _B, document: Any) -> _B:
        self._payload = Payload.of(_to_json_value(document))
        return self

    def payload_empty(self: _B) -> _B:
        self._payload = Payload.empty()
        return self

    def payload_none(self: _B) -> _B:
        self._payload = Payload.none()
        return self

    def clear_params(self: _B) -> _B:
        self._params.clear()
        return self

    def restore_params(self: _B, params: Sequence[tuple[str, str]]) -> _B:
        self._params = list(params)
        return self

    def path(self) -> str:
        segments = ("solr", self._collection, self._handler)
        return "/" + "/".join(quote(segment, safe=_SEGMENT_SAFE) for segment in segments)

    def url_str(self) -> str:
        """Render the request URL without changing any state."""
        url = self._base_url + self.path()
        if self._params:
            url = f"{url}?{urlencode(self._params, safe=_FORM_SAFE)}"
        return url

    def _ensure_facet_on(self) -> None:
        if ("facet", "on") not in self._params:
            self._params.append(("facet", "on"))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._payload.method} {self.url_str()})"
