"""Envelope parser: generic JSON reply -> typed `SolrResponse`."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Mapping

from SolrClient.core.errors import SolrSerializationError
from SolrClient.core.models import FacetCounts, ResultPage, SolrResponse

DocType = Callable[..., Any]

_ENVELOPE_KEYS = ("response", "facet_counts", "nextCursorMark")
_FACET_KEYS = ("facet_queries", "facet_fields")


def parse_envelope(payload: Any, doc_type: DocType | None = None) -> SolrResponse[Any]:
    """Parse a decoded reply into a typed envelope.

    Args:
        payload: Generic JSON value returned by the decoder.
        doc_type: Optional document type. A dataclass type is built from the
            document's matching keys (unknown keys are ignored); any other
            callable receives the document mapping. None keeps plain dicts.

    Returns:
        Parsed `SolrResponse`.

    Raises:
        SolrSerializationError: If the envelope or a document has the wrong shape.
    """
    if payload is None:
        return SolrResponse()
    if not isinstance(payload, Mapping):
        raise SolrSerializationError("response envelope must be a JSON object")

    response = None
    if payload.get("response") is not None:
        response = _parse_result_page(payload["response"], doc_type)

    facet_counts = None
    if payload.get("facet_counts") is not None:
        facet_counts = _parse_facet_counts(payload["facet_counts"])

    next_cursor_mark = payload.get("nextCursorMark")
    if next_cursor_mark is not None and not isinstance(next_cursor_mark, str):
        raise SolrSerializationError("nextCursorMark must be a string")

    raw = {key: value for key, value in payload.items() if key not in _ENVELOPE_KEYS}
    return SolrResponse(
        response=response,
        facet_counts=facet_counts,
        next_cursor_mark=next_cursor_mark,
        raw=raw,
    )


def _parse_result_page(section: Any, doc_type: DocType | None) -> ResultPage[Any]:
    if not isinstance(section, Mapping):
        raise SolrSerializationError("response must be a JSON object")

    docs = section.get("docs", [])
    if not isinstance(docs, list):
        raise SolrSerializationError("response.docs must be a list")

    num_found_exact = section.get("numFoundExact", True)
    if not isinstance(num_found_exact, bool):
        raise SolrSerializationError("response.numFoundExact must be a boolean")

    return ResultPage(
        num_found=_expect_count(section.get("numFound"), "response.numFound"),
        start=_expect_count(section.get("start"), "response.start"),
        docs=tuple(_build_doc(doc, doc_type, idx) for idx, doc in enumerate(docs)),
        num_found_exact=num_found_exact,
    )


def _parse_facet_counts(section: Any) -> FacetCounts:
    if not isinstance(section, Mapping):
        raise SolrSerializationError("facet_counts must be a JSON object")

    raw_queries = section.get("facet_queries") or {}
    if not isinstance(raw_queries, Mapping):
        raise SolrSerializationError("facet_counts.facet_queries must be a JSON object")
    facet_queries = {
        str(key): _expect_count(value, f"facet_counts.facet_queries[{key}]")
        for key, value in raw_queries.items()
    }

    facet_fields = section.get("facet_fields") or {}
    if not isinstance(facet_fields, Mapping):
        raise SolrSerializationError("facet_counts.facet_fields must be a JSON object")

    return FacetCounts(
        facet_queries=facet_queries,
        facet_fields=dict(facet_fields),
        raw={key: value for key, value in section.items() if key not in _FACET_KEYS},
    )


def _build_doc(doc: Any, doc_type: DocType | None, idx: int) -> Any:
    if doc_type is None:
        return doc
    name = getattr(doc_type, "__name__", repr(doc_type))
    try:
        if isinstance(doc_type, type) and dataclasses.is_dataclass(doc_type):
            if not isinstance(doc, Mapping):
                raise TypeError("document is not a JSON object")
            names = {f.name for f in dataclasses.fields(doc_type) if f.init}
            return doc_type(**{key: value for key, value in doc.items() if key in names})
        return doc_type(doc)
    except (TypeError, ValueError, KeyError) as error:
        raise SolrSerializationError(f"cannot build {name} from docs[{idx}]: {error}") from error


def _expect_count(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SolrSerializationError(f"{key} must be a non-negative integer")
    return value
