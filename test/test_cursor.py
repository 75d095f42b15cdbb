"""Tests for cursor-based deep pagination."""

from __future__ import annotations

import json
import sys
import unittest
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SolrClient import Client, CursorState
from SolrClient.core.errors import SolrServerError
from SolrClient.transport.base import TransportResponse

BASE = "http://h:8983"


def _page(ids: list[str], next_mark: str | None) -> TransportResponse:
    payload: dict = {"response": {"numFound": 3, "start": 0, "docs": [{"id": i} for i in ids]}}
    if next_mark is not None:
        payload["nextCursorMark"] = next_mark
    return TransportResponse(status=200, body=json.dumps(payload).encode("utf-8"))


class _MarkServer:
    """Answers each request by the cursorMark it carries."""

    def __init__(self, pages: dict[str, TransportResponse]) -> None:
        self.pages = pages
        self.urls: list[str] = []
        self.fail_next = False

    def get(self, url: str) -> TransportResponse:
        self.urls.append(url)
        if self.fail_next:
            self.fail_next = False
            return TransportResponse(status=503, body=b"busy")
        mark = parse_qs(urlsplit(url).query).get("cursorMark", [""])[0]
        return self.pages[mark]

    def post(self, url: str, body: bytes | None) -> TransportResponse:
        raise AssertionError("cursor requests must be GET")

    def close(self) -> None:
        return


def _ids(envelope) -> list[str]:
    return [doc["id"] for doc in envelope.docs]


class TestCursor(unittest.TestCase):
    def setUp(self) -> None:
        self.server = _MarkServer(
            {
                "*": _page(["1", "2"], "B"),
                "B": _page(["3"], "C"),
                "C": _page([], "C"),
            }
        )
        self.client = Client(BASE, "c", transport=self.server)

    def _open(self):
        return self.client.select("*:*").rows(2).sort("id asc").cursor().run()

    def test_iteration_stops_when_mark_repeats(self) -> None:
        cursor = self._open()
        self.assertIsNotNone(cursor)
        self.assertIs(cursor.state, CursorState.FRESH)

        first = cursor.next()
        second = cursor.next()
        third = cursor.next()

        self.assertEqual(_ids(first), ["1", "2"])
        self.assertEqual(_ids(second), ["3"])
        self.assertIsNone(third)
        self.assertIs(cursor.state, CursorState.EXHAUSTED)
        self.assertEqual(len(self.server.urls), 3)

    def test_follow_up_requests_keep_original_params(self) -> None:
        cursor = self._open()
        self.client.select("other").rows(99)

        list(cursor.pages())

        query = parse_qs(urlsplit(self.server.urls[1]).query)
        self.assertEqual(query["q"], ["*:*"])
        self.assertEqual(query["sort"], ["id asc"])
        self.assertEqual(query["cursorMark"], ["B"])
        self.assertEqual(parse_qs(urlsplit(self.server.urls[2]).query)["cursorMark"], ["C"])

    def test_exhausted_cursor_stays_exhausted(self) -> None:
        cursor = self._open()
        list(cursor)
        calls = len(self.server.urls)

        self.assertIsNone(cursor.next())
        self.assertIsNone(cursor.next())
        self.assertEqual(len(self.server.urls), calls)

    def test_failed_page_can_be_retried(self) -> None:
        cursor = self._open()
        cursor.next()
        self.server.fail_next = True

        with self.assertRaises(SolrServerError):
            cursor.next()
        self.assertIs(cursor.state, CursorState.PAGING)

        retried = cursor.next()
        self.assertEqual(_ids(retried), ["3"])
        self.assertEqual(parse_qs(urlsplit(self.server.urls[-1]).query)["cursorMark"], ["B"])

    def test_pages_with_doc_type(self) -> None:
        cursor = self._open()
        pages = list(cursor.pages(lambda doc: int(doc["id"])))

        self.assertEqual([list(page.docs) for page in pages], [[1, 2], [3]])
        self.assertEqual(cursor.get_response().next_cursor_mark, "C")

    def test_single_page_result(self) -> None:
        self.server.pages["*"] = _page(["1"], "*")
        cursor = self._open()

        self.assertIsNone(cursor.next())
        self.assertIs(cursor.state, CursorState.EXHAUSTED)

    def test_missing_next_mark_ends_iteration(self) -> None:
        self.server.pages["B"] = _page(["3"], None)
        cursor = self._open()

        pages = list(cursor.pages())

        self.assertEqual([_ids(page) for page in pages], [["1", "2"], ["3"]])
        self.assertIs(cursor.state, CursorState.EXHAUSTED)


class TestNoCursor(unittest.TestCase):
    def test_run_without_cursor_param(self) -> None:
        server = _MarkServer({"": _page(["1"], "B")})
        client = Client(BASE, "c", transport=server)

        self.assertIsNone(client.select("*:*").run())

    def test_reply_without_next_mark(self) -> None:
        server = _MarkServer({"*": _page(["1"], None)})
        client = Client(BASE, "c", transport=server)

        self.assertIsNone(client.select("*:*").sort("id asc").cursor().run())
        self.assertEqual(_ids(client.get_response()), ["1"])


if __name__ == "__main__":
    unittest.main()
