"""Composition of the content stream stages around one set of collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contentstream.config.stream import get_stream_config
from contentstream.domain.model import StreamOptions

from .extraction import ContentResolver
from .merger import DependencyFirstMerger
from .publish import ContentPublisher
from .reconciliation import ReconciliationHandler, ReconciliationResult

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from contentstream.domain.model import Entry, StreamItem
    from contentstream.domain.ports.blobs import BlobStore
    from contentstream.domain.ports.history import LogAppend, LogHistorySource
    from contentstream.domain.ports.persistence import ContentStore

type CompletionCallback = Callable[[ReconciliationResult], None]


class ContentStream:
    def __init__(
        self,
        history: LogHistorySource,
        content_store: ContentStore,
        *,
        blob_store: BlobStore | None = None,
        max_size: int | None = None,
    ) -> None:
        self.content_store = content_store
        self.blob_store = blob_store
        self.max_size = max_size if max_size is not None else get_stream_config().max_size
        self._merger = DependencyFirstMerger(history, content_store, blob_store=blob_store)

    def create_source(self, options: StreamOptions | None = None) -> AsyncIterator[StreamItem]:
        """Payloads first, then the entries of the selected history slice."""

        return self._merger.stream(options or StreamOptions(max_size=self.max_size))

    def create_handler(
        self,
        *,
        on_complete: CompletionCallback | None = None,
        resolve: bool = False,
    ) -> ReconciliationHandler:
        return ReconciliationHandler(
            self.content_store,
            blob_store=self.blob_store,
            resolve=resolve,
            on_complete=on_complete,
        )

    def create_handler_source(
        self,
        options: StreamOptions | None = None,
        *,
        on_complete: CompletionCallback | None = None,
        resolve: bool = False,
    ) -> AsyncIterator[Entry]:
        """Reconciled entries of a history slice, content stored before each entry."""

        handler = self.create_handler(on_complete=on_complete, resolve=resolve)
        return handler(self.create_source(options))

    def resolver(self, *, strict: bool = False) -> ContentResolver:
        return ContentResolver(self.content_store, strict=strict)

    def publisher(self, append: LogAppend) -> ContentPublisher:
        return ContentPublisher(self.content_store, append)
