"""Cursor-based deep pagination.

The server returns `nextCursorMark` with every page; sending it back yields
the following page, and iteration is complete when the server echoes the
mark it was sent.

State machine: FRESH -> PAGING -> EXHAUSTED. A failed page request keeps the
cursor in PAGING, so calling `next` again retries the same mark.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

from SolrClient.core.models import SolrResponse
from SolrClient.response.parser import DocType
from SolrClient.utils.log import log

if TYPE_CHECKING:
    from SolrClient.client import Client


class CursorState(str, Enum):
    FRESH = "fresh"
    PAGING = "paging"
    EXHAUSTED = "exhausted"


class Cursor:
    """Pages through a sorted result set with evolving cursor marks.

    The cursor owns a copy of the client taken when the request was sent, so
    later calls on the original client do not disturb pagination. The first
    page is the reply of the `run()` that opened the cursor.
    """

    def __init__(self, client: Client, cursor_mark: str, *, previous_mark: str | None = None) -> None:
        """Initialize the cursor.

        Args:
            client: Client copy holding the request as it was sent.
            cursor_mark: Mark to send for the next page.
            previous_mark: Mark the client's last reply answered. When given,
                that reply is returned by the first `next` call.
        """
        self._client = client
        self._cursor_mark = cursor_mark
        self._previous_mark = previous_mark
        self._pending = previous_mark is not None
        self._snapshot: tuple[tuple[str, str], ...] | None = None
        self._state = CursorState.FRESH

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def cursor_mark(self) -> str:
        return self._cursor_mark

    def next(self, doc_type: DocType | None = None) -> SolrResponse[Any] | None:
        """Fetch the next page.

        Args:
            doc_type: Optional document type (dataclass or callable).

        Returns:
            The page envelope, or None once the server repeats the cursor mark.

        Raises:
            SolrError: If the page request fails; the cursor stays usable.
        """
        if self._state is CursorState.EXHAUSTED:
            return None

        if self._pending:
            return self._take_pending(doc_type)

        if self._snapshot is None:
            self._snapshot = self._client.params
        else:
            self._client.restore_params(self._snapshot)
        self._client.update_cursor_mark(self._cursor_mark)
        self._state = CursorState.PAGING

        self._client.execute()
        envelope = self._client.get_response(doc_type)
        next_mark = envelope.next_cursor_mark

        if next_mark is None:
            log.debug("Cursor exhausted: reply for %s has no nextCursorMark", self._cursor_mark)
            self._state = CursorState.EXHAUSTED
            return envelope
        if next_mark == self._cursor_mark:
            log.debug("Cursor exhausted at mark %s", next_mark)
            self._state = CursorState.EXHAUSTED
            return None

        log.debug("Cursor advanced: %s -> %s", self._cursor_mark, next_mark)
        self._cursor_mark = next_mark
        return envelope

    def pages(self, doc_type: DocType | None = None) -> Iterator[SolrResponse[Any]]:
        """Yield every remaining page until the cursor is exhausted."""
        while True:
            page = self.next(doc_type)
            if page is None:
                return
            yield page

    def __iter__(self) -> Iterator[SolrResponse[Any]]:
        return self.pages()

    def get_response(self, doc_type: DocType | None = None) -> SolrResponse[Any]:
        """Return the envelope of the last page fetched."""
        return self._client.get_response(doc_type)

    def _take_pending(self, doc_type: DocType | None) -> SolrResponse[Any] | None:
        self._state = CursorState.PAGING
        if self._cursor_mark == self._previous_mark:
            self._pending = False
            self._state = CursorState.EXHAUSTED
            return None
        envelope = self._client.get_response(doc_type)
        self._pending = False
        return envelope
