"""Tests for request URL, parameter and payload construction."""

from __future__ import annotations

import sys
import unittest
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SolrClient.core.errors import InvalidStateError
from SolrClient.core.models import PayloadKind
from SolrClient.core.query import compose, term
from SolrClient.request.builder import RequestBuilder, RequestHandlers


@dataclass
class _Book:
    id: str
    title: str


def _builder() -> RequestBuilder:
    return RequestBuilder("http://h:8983", "c")


class TestRequestBuilderUrl(unittest.TestCase):
    def test_plain_select(self) -> None:
        url = _builder().handler(RequestHandlers.QUERY).query("*:*").url_str()
        self.assertEqual(url, "http://h:8983/solr/c/select?q=*%3A*")

    def test_base_url_is_reduced_to_origin(self) -> None:
        builder = RequestBuilder("http://h:8983/solr/", "c").handler("select")
        self.assertEqual(builder.base_url, "http://h:8983")
        self.assertEqual(builder.url_str(), "http://h:8983/solr/c/select")

    def test_handler_is_one_encoded_segment(self) -> None:
        url = _builder().handler(RequestHandlers.CREATE).url_str()
        self.assertEqual(url, "http://h:8983/solr/c/update%2Fjson%2Fdocs")
        self.assertEqual(urlsplit(url).path, "/solr/c/update%2Fjson%2Fdocs")

    def test_collection_is_one_encoded_segment(self) -> None:
        url = RequestBuilder("http://h:8983", "a/b").handler("select").url_str()
        self.assertEqual(url, "http://h:8983/solr/a%2Fb/select")

    def test_empty_handler_and_params(self) -> None:
        self.assertEqual(_builder().url_str(), "http://h:8983/solr/c/")

    def test_query_node_is_rendered_and_encoded(self) -> None:
        url = _builder().handler("select").query(compose(term("a b").in_field("t"))).url_str()
        self.assertEqual(url, "http://h:8983/solr/c/select?q=t%3A+%22a+b%22")

    def test_params_keep_order_and_repeat(self) -> None:
        builder = (
            _builder()
            .handler("select")
            .query("*:*")
            .filter_query("type:book")
            .filter_query("lang:en")
            .fields("id", "title")
            .start(20)
            .rows(10)
            .sort("id asc")
            .default_field("title")
            .edismax()
            .add_param("indent", True)
        )
        self.assertEqual(
            builder.params,
            (
                ("q", "*:*"),
                ("fq", "type:book"),
                ("fq", "lang:en"),
                ("fl", "id,title"),
                ("start", "20"),
                ("rows", "10"),
                ("sort", "id asc"),
                ("df", "title"),
                ("defType", "edismax"),
                ("indent", "true"),
            ),
        )
        self.assertIn("fl=id%2Ctitle", builder.url_str())
        self.assertIn("sort=id+asc", builder.url_str())

    def test_url_str_does_not_mutate(self) -> None:
        builder = _builder().handler("select").query("x")
        first = builder.url_str()
        self.assertEqual(builder.url_str(), first)
        self.assertEqual(builder.params, (("q", "x"),))

    def test_invalid_construction(self) -> None:
        with self.assertRaises(ValueError):
            RequestBuilder("localhost:8983", "c")
        with self.assertRaises(ValueError):
            RequestBuilder("", "c")
        with self.assertRaises(ValueError):
            RequestBuilder("http://h:8983", "")


class TestFacets(unittest.TestCase):
    def test_single_facet_switch(self) -> None:
        url = _builder().handler("select").query("*:*").facet_field("f1").facet_query("g:1").url_str()
        self.assertEqual(
            url,
            "http://h:8983/solr/c/select?q=*%3A*&facet=on&facet_field=f1&facet_query=g%3A1",
        )

    def test_facet_on_appears_once(self) -> None:
        builder = _builder().facet_query("a:1").facet_field("x").facet_field("y").facet_query("b:2")
        self.assertEqual(builder.params.count(("facet", "on")), 1)


class TestPayload(unittest.TestCase):
    def test_commit_shortcut(self) -> None:
        builder = _builder().handler("update").auto_commit()
        self.assertEqual(builder.url_str(), "http://h:8983/solr/c/update?commit=true")
        self.assertIs(builder.payload.kind, PayloadKind.NONE)
        self.assertEqual(builder.method, "GET")

        builder.payload_empty()
        self.assertEqual(builder.method, "POST")
        self.assertIsNone(builder.payload.body)

    def test_handler_switch_resets_payload(self) -> None:
        builder = _builder().handler("update").payload_body({"a": 1})
        self.assertIs(builder.payload.kind, PayloadKind.BODY)

        builder.handler("select")
        self.assertIs(builder.payload.kind, PayloadKind.NONE)

    def test_dataclass_documents_become_dicts(self) -> None:
        builder = _builder().payload_body([_Book("1", "Dune"), {"id": "2"}])
        self.assertEqual(builder.payload.body, [{"id": "1", "title": "Dune"}, {"id": "2"}])

        builder.payload_none()
        self.assertEqual(builder.method, "GET")


class TestCursorParams(unittest.TestCase):
    def test_cursor_mark_update(self) -> None:
        builder = _builder().handler("select").query("*:*").sort("id asc").cursor()
        self.assertIn("cursorMark=*", builder.url_str())

        builder.update_cursor_mark("AoE=")
        self.assertEqual(builder.params[-1], ("cursorMark", "AoE="))
        self.assertTrue(builder.url_str().endswith("cursorMark=AoE%3D"))

    def test_update_without_cursor_is_invalid_state(self) -> None:
        with self.assertRaises(InvalidStateError):
            _builder().query("x").update_cursor_mark("B")
        self.assertTrue(issubclass(InvalidStateError, RuntimeError))


class TestCopy(unittest.TestCase):
    def test_copy_is_independent(self) -> None:
        builder = _builder().handler("select").query("a")
        clone = builder.copy()
        builder.clear_params().rows(1)

        self.assertEqual(clone.params, (("q", "a"),))
        self.assertEqual(builder.params, (("rows", "1"),))

    def test_restore_params(self) -> None:
        builder = _builder().query("a")
        saved = builder.params
        builder.clear_params()
        builder.restore_params(saved)
        self.assertEqual(builder.params, (("q", "a"),))


if __name__ == "__main__":
    unittest.main()
