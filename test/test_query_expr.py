"""Tests for query expression rendering."""

from __future__ import annotations

import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

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


class TestTerm(unittest.TestCase):
    def test_all_modifiers_render_in_fixed_order(self) -> None:
        rendered = term("a b").in_field("f").boost(2.0).fuzzy(3).required().as_str()
        self.assertEqual(rendered, '+f: "a b"^2~3')

    def test_plain_term(self) -> None:
        self.assertEqual(term("rust").as_str(), "rust")
        self.assertEqual(str(term("rust").in_field("lang")), "lang: rust")

    def test_fractional_boost_keeps_decimals(self) -> None:
        self.assertEqual(term("x").boost(3.2).as_str(), "x^3.2")

    def test_prohibit_prefix(self) -> None:
        self.assertEqual(term("spam").prohibit().as_str(), "-spam")

    def test_already_quoted_text_is_not_quoted_again(self) -> None:
        self.assertEqual(Term('"exact phrase"').as_str(), '"exact phrase"')

    def test_inner_quotes_are_escaped_inside_phrase(self) -> None:
        self.assertEqual(Term('"a" b "c"').as_str(), '"\\"a\\" b \\"c\\""')
        self.assertEqual(term('say "hi" now').as_str(), '"say \\"hi\\" now"')

    def test_modifiers_return_new_terms(self) -> None:
        base = term("a")
        boosted = base.boost(5)

        self.assertIsNone(base.boost_factor)
        self.assertEqual(boosted.as_str(), "a^5")


class TestDate(unittest.TestCase):
    def test_date_math(self) -> None:
        expr = Date.now().minus(Date.years(2)).round("day")
        self.assertEqual(expr.as_str(), "NOW-2YEARS/DAY")

    def test_duration_factories(self) -> None:
        self.assertEqual(
            [Date.months(1), Date.days(3), Date.hours(4), Date.minutes(5), Date.seconds(6)],
            ["1MONTHS", "3DAYS", "4HOURS", "5MINUTES", "6SECONDS"],
        )
        self.assertEqual(str(date("NOW").plus(Date.days(1))), "NOW+1DAYS")

    def test_at_naive_datetime_is_utc(self) -> None:
        self.assertEqual(Date.at(datetime(2024, 1, 2, 3, 4, 5)).as_str(), "2024-01-02T03:04:05Z")

    def test_at_converts_offsets_to_utc(self) -> None:
        aware = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(Date.at(aware).as_str(), "2024-01-02T03:04:05Z")
        self.assertEqual(Date.at("2024-01-02T05:04:05+02:00").as_str(), "2024-01-02T03:04:05Z")

    def test_at_keeps_milliseconds(self) -> None:
        moment = datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc)
        self.assertEqual(Date.at(moment).as_str(), "2024-01-02T03:04:05.123Z")

    def test_at_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            Date.at("not a date")


class TestRange(unittest.TestCase):
    def test_inclusive_and_exclusive_brackets(self) -> None:
        self.assertEqual(range_inclusive(1, 10).as_str(), "[1 TO 10]")
        self.assertEqual(range_exclusive("*", Date.now()).as_str(), "{* TO NOW}")

    def test_numeric_bounds(self) -> None:
        self.assertEqual(str(Range.inclusive(1.5, "*")), "[1.5 TO *]")
        self.assertEqual(str(Range.exclusive(2.0, 4)), "{2 TO 4}")


class TestCompose(unittest.TestCase):
    def test_connectors_and_subquery(self) -> None:
        inner = compose("c").not_().term("d")
        query = compose(term("a")).and_().term("b").or_().subquery(inner)

        self.assertEqual(query.as_str(), "a AND b OR (c NOT d)")

    def test_mixed_nodes(self) -> None:
        query = (
            compose(term("solr").in_field("title"))
            .and_()
            .range(range_inclusive(Date.now().minus(Date.days(7)), Date.now()))
        )
        self.assertEqual(str(query), "title: solr AND [NOW-7DAYS TO NOW]")

    def test_date_part(self) -> None:
        self.assertEqual(compose("x").and_().date(Date.now()).as_str(), "x AND NOW")

    def test_query_is_immutable(self) -> None:
        base = compose("a")
        extended = base.and_().term("b")

        self.assertEqual(base.parts, (Term("a"),))
        self.assertEqual(extended.parts[1], Connector.AND)
        self.assertIsInstance(extended, Query)


if __name__ == "__main__":
    unittest.main()
