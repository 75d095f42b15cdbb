"""Command implementations for the solr-client CLI.

Each command configures a `Client`, runs it, and yields JSON-serializable
chunks for the runner to print. CLI option parsing lives in `ui`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Protocol, Sequence

from SolrClient.client import Client
from SolrClient.utils.log import log

DEFAULT_CURSOR_SORT = "id asc"


class Command(Protocol):
    """A CLI action executed against one client."""

    def execute(self, client: Client) -> Iterator[Any]:
        """Run the action and yield printable JSON values."""
        raise NotImplementedError


@dataclass(slots=True)
class SelectCommand:
    """Query documents, optionally paging through all of them with a cursor."""

    query: str
    rows: int
    start: int | None = None
    sort: str | None = None
    filter_queries: Sequence[str] = ()
    fields: Sequence[str] = ()
    facet_fields: Sequence[str] = ()
    use_cursor: bool = False

    def execute(self, client: Client) -> Iterator[Any]:
        client.select(self.query).rows(self.rows)
        for fq in self.filter_queries:
            client.filter_query(fq)
        if self.fields:
            client.fields(*self.fields)
        for name in self.facet_fields:
            client.facet_field(name)

        if not self.use_cursor:
            if self.start is not None:
                client.start(self.start)
            if self.sort:
                client.sort(self.sort)
            client.run()
            envelope = client.get_response()
            if envelope.response is not None:
                log.info(
                    "Fetched %d of %d documents",
                    len(envelope.response.docs),
                    envelope.response.num_found,
                )
            yield client.last_response
            return

        client.sort(self.sort or DEFAULT_CURSOR_SORT).cursor()
        cursor = client.run()
        if cursor is None:
            log.warning("Server did not return nextCursorMark; printing the single page")
            yield from client.get_response().docs
            return

        total = 0
        for page_number, page in enumerate(cursor.pages(), start=1):
            total += len(page.docs)
            log.info("Page %d: %d documents (total %d)", page_number, len(page.docs), total)
            yield from page.docs


@dataclass(slots=True)
class UploadCommand:
    """Index the JSON document(s) stored in a file."""

    path: Path
    commit: bool = False

    def execute(self, client: Client) -> Iterator[Any]:
        document = json.loads(self.path.read_text(encoding="utf-8"))
        count = len(document) if isinstance(document, list) else 1
        log.info("Uploading %d document(s) from %s", count, self.path)
        client.upload(document)
        if self.commit:
            client.auto_commit()
        client.run()
        yield client.last_response


@dataclass(slots=True)
class DeleteCommand:
    """Delete documents matching a query."""

    query: str
    commit: bool = False

    def execute(self, client: Client) -> Iterator[Any]:
        client.delete(self.query)
        if self.commit:
            client.auto_commit()
        client.run()
        log.info("Deleted documents matching %s", self.query)
        yield client.last_response


@dataclass(slots=True)
class CommitCommand:
    """Commit pending index changes."""

    def execute(self, client: Client) -> Iterator[Any]:
        client.commit().run()
        yield client.last_response


@dataclass(slots=True)
class HandlerCommand:
    """Call an arbitrary request handler with raw parameters."""

    name: str
    params: Sequence[tuple[str, str]] = ()
    post: bool = False

    def execute(self, client: Client) -> Iterator[Any]:
        client.request_handler(self.name)
        for key, value in self.params:
            client.add_param(key, value)
        if self.post:
            client.payload_empty()
        client.run()
        yield client.last_response
