"""Query expression builder.

Builds search server query strings from typed fragments so callers never
concatenate raw strings.

Node types
- Term     -> [+|-][field: ]text[^boost][~fuzz]
- Date     -> date math such as NOW-2YEARS/DAY
- Range    -> [a TO b] (inclusive) or {a TO b} (exclusive)
- Query    -> parts joined by single spaces; nested queries in parentheses

All nodes are immutable: every modifier returns a new node.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Union

from dateutil import parser as dt_parser


_RE_NEEDS_QUOTE = re.compile(r"\s")
_SOLR_TIMESTAMP = "%Y-%m-%dT%H:%M:%S"


def _quote(text: str) -> str:
    if len(text) >= 2 and text.startswith('"') and text.endswith('"') and '"' not in text[1:-1]:
        return text
    if _RE_NEEDS_QUOTE.search(text):
        return '"' + text.replace('"', '\\"') + '"'
    return text


def _format_number(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


@dataclass(frozen=True, slots=True)
class Term:
    """A single search term with optional field and modifiers.

    Attributes:
        text: Raw term text; quoted on rendering when it contains whitespace.
        field: Field the term is searched in, if any.
        prefix: `+` (required), `-` (prohibited) or empty.
        boost_factor: Relevance boost rendered as `^n`.
        fuzz: Fuzzy/proximity distance rendered as `~n`.
    """

    text: str
    field: str | None = None
    prefix: str = ""
    boost_factor: float | None = None
    fuzz: int | None = None

    def in_field(self, name: str) -> Term:
        return replace(self, field=name)

    def boost(self, value: float) -> Term:
        return replace(self, boost_factor=value)

    def fuzzy(self, distance: int) -> Term:
        return replace(self, fuzz=distance)

    def required(self) -> Term:
        return replace(self, prefix="+")

    def prohibit(self) -> Term:
        return replace(self, prefix="-")

    def as_str(self) -> str:
        rendered = _quote(self.text)
        if self.boost_factor is not None:
            rendered = f"{rendered}^{_format_number(self.boost_factor)}"
        if self.fuzz is not None:
            rendered = f"{rendered}~{self.fuzz}"
        if self.field:
            rendered = f"{self.field}: {rendered}"
        return f"{self.prefix}{rendered}"

    def __str__(self) -> str:
        return self.as_str()


@dataclass(frozen=True, slots=True)
class Date:
    """Date math expression, e.g. `NOW-2YEARS` or `2024-01-01T00:00:00Z+1DAYS`."""

    expr: str

    @staticmethod
    def now() -> Date:
        return Date("NOW")

    @staticmethod
    def at(value: datetime | str) -> Date:
        """Build a Date anchored at an absolute point in time.

        Args:
            value: A datetime, or an ISO-8601 string. Naive values are UTC.

        Returns:
            Date rendering as `YYYY-MM-DDTHH:MM:SS[.mmm]Z`.

        Raises:
            ValueError: If the string is not a valid ISO-8601 timestamp.
        """
        moment = dt_parser.isoparse(value) if isinstance(value, str) else value
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        moment = moment.astimezone(timezone.utc)
        text = moment.strftime(_SOLR_TIMESTAMP)
        if moment.microsecond:
            text = f"{text}.{moment.microsecond // 1000:03d}"
        return Date(f"{text}Z")

    @staticmethod
    def years(count: int) -> str:
        return f"{count}YEARS"

    @staticmethod
    def months(count: int) -> str:
        return f"{count}MONTHS"

    @staticmethod
    def days(count: int) -> str:
        return f"{count}DAYS"

    @staticmethod
    def hours(count: int) -> str:
        return f"{count}HOURS"

    @staticmethod
    def minutes(count: int) -> str:
        return f"{count}MINUTES"

    @staticmethod
    def seconds(count: int) -> str:
        return f"{count}SECONDS"

    def plus(self, duration: str) -> Date:
        return Date(f"{self.expr}+{duration}")

    def minus(self, duration: str) -> Date:
        return Date(f"{self.expr}-{duration}")

    def round(self, unit: str) -> Date:
        """Round down to a unit, e.g. `round("DAY")` -> `NOW/DAY`."""
        return Date(f"{self.expr}/{unit.upper()}")

    def as_str(self) -> str:
        return self.expr

    def __str__(self) -> str:
        return self.expr


RangeBound = Union[str, int, float, Date]


def _render_bound(value: RangeBound) -> str:
    if isinstance(value, Date):
        return value.as_str()
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return _format_number(value)
    return str(value)


@dataclass(frozen=True, slots=True)
class Range:
    """Range query between two bounds; `*` means open ended."""

    lower: RangeBound
    upper: RangeBound
    is_inclusive: bool = True

    @classmethod
    def inclusive(cls, lower: RangeBound, upper: RangeBound) -> Range:
        return cls(lower, upper, True)

    @classmethod
    def exclusive(cls, lower: RangeBound, upper: RangeBound) -> Range:
        return cls(lower, upper, False)

    def as_str(self) -> str:
        body = f"{_render_bound(self.lower)} TO {_render_bound(self.upper)}"
        if self.is_inclusive:
            return f"[{body}]"
        return "{" + body + "}"

    def __str__(self) -> str:
        return self.as_str()


class Connector(str, Enum):
    """Boolean operator placed between query parts."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


@dataclass(frozen=True, slots=True)
class Query:
    """Composite query: an ordered sequence of nodes and connectors."""

    parts: tuple[QueryPart, ...] = ()

    def _append(self, part: QueryPart) -> Query:
        return Query(self.parts + (part,))

    def term(self, value: Term | str) -> Query:
        return self._append(value if isinstance(value, Term) else Term(value))

    def date(self, value: Date) -> Query:
        return self._append(value)

    def range(self, value: Range) -> Query:
        return self._append(value)

    def subquery(self, other: Query) -> Query:
        return self._append(other)

    def and_(self) -> Query:
        return self._append(Connector.AND)

    def or_(self) -> Query:
        return self._append(Connector.OR)

    def not_(self) -> Query:
        return self._append(Connector.NOT)

    def as_str(self) -> str:
        rendered: list[str] = []
        for part in self.parts:
            if isinstance(part, Connector):
                rendered.append(part.value)
            elif isinstance(part, Query):
                rendered.append(f"({part.as_str()})")
            else:
                rendered.append(part.as_str())
        return " ".join(rendered)

    def __str__(self) -> str:
        return self.as_str()


QueryNode = Union[Term, Date, Range, Query]
QueryPart = Union[Term, Date, Range, Query, Connector]


def term(text: str) -> Term:
    """Create a Term without field or modifiers."""
    return Term(text)


def date(expr: str) -> Date:
    return Date(expr)


def range_inclusive(lower: RangeBound, upper: RangeBound) -> Range:
    return Range.inclusive(lower, upper)


def range_exclusive(lower: RangeBound, upper: RangeBound) -> Range:
    return Range.exclusive(lower, upper)


def compose(first: QueryNode | str) -> Query:
    """Start a composite query with its first node.

    Example:
        >>> compose(term("a")).and_().term("b").or_().subquery(compose(term("c"))).as_str()
        'a AND b OR (c)'
    """
    if isinstance(first, str):
        first = Term(first)
    return Query((first,))
