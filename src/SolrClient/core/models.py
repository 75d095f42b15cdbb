from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")


class PayloadKind(str, Enum):
    """Request body variants; the variant selects the HTTP verb."""

    NONE = "none"
    EMPTY = "empty"
    BODY = "body"


@dataclass(frozen=True, slots=True)
class Payload:
    """Request payload.

    `NONE` sends a GET; `EMPTY` sends a POST without body (commit);
    `BODY` sends a POST with the JSON-encoded `body`.
    """

    kind: PayloadKind = PayloadKind.NONE
    body: Any = None

    @classmethod
    def none(cls) -> Payload:
        return cls(PayloadKind.NONE)

    @classmethod
    def empty(cls) -> Payload:
        return cls(PayloadKind.EMPTY)

    @classmethod
    def of(cls, body: Any) -> Payload:
        return cls(PayloadKind.BODY, body)

    @property
    def method(self) -> str:
        return "GET" if self.kind is PayloadKind.NONE else "POST"


@dataclass(frozen=True, slots=True)
class ResultPage(Generic[T]):
    """The `response` block of a reply: one page of matching documents.

    Attributes:
        num_found: Total number of matches.
        start: Offset of the first returned document.
        docs: Documents, converted to the caller's type when one was given.
        num_found_exact: Whether `num_found` is exact (older servers omit it).
    """

    num_found: int
    start: int
    docs: Sequence[T] = ()
    num_found_exact: bool = True


@dataclass(frozen=True, slots=True)
class FacetCounts:
    """The `facet_counts` block of a reply.

    Attributes:
        facet_queries: Count per facet query string.
        facet_fields: Raw per-field facet lists, keyed by field name.
        raw: Remaining facet sections (ranges, intervals, heatmaps, ...).
    """

    facet_queries: Mapping[str, int] = field(default_factory=dict)
    facet_fields: Mapping[str, Any] = field(default_factory=dict)
    raw: Mapping[str, Any] = field(default_factory=dict)

    def field_counts(self, name: str) -> list[tuple[str, int]]:
        """Pair a flat `[term, count, term, count, ...]` facet list.

        Args:
            name: Faceted field name.

        Returns:
            `(term, count)` tuples in server order; empty if the field is absent.
        """
        values = self.facet_fields.get(name)
        if not isinstance(values, list):
            return []
        return [(str(values[i]), int(values[i + 1])) for i in range(0, len(values) - 1, 2)]


@dataclass(frozen=True, slots=True)
class SolrResponse(Generic[T]):
    """Typed view of the server's JSON envelope.

    Attributes:
        response: Result page, if the handler returned documents.
        facet_counts: Facet block, if faceting was requested.
        next_cursor_mark: Cursor token for the next page in cursor mode.
        raw: Remaining top-level keys (e.g. `responseHeader`), verbatim.
    """

    response: Optional[ResultPage[T]] = None
    facet_counts: Optional[FacetCounts] = None
    next_cursor_mark: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))

    @property
    def docs(self) -> Sequence[T]:
        """Documents of the page, or an empty sequence without a response block."""
        if self.response is None:
            return ()
        return self.response.docs
