"""Dependency-first merging of feed history with the payloads it references."""

from __future__ import annotations

from contextlib import aclosing
from logging import getLogger
from typing import TYPE_CHECKING

from contentstream.config.stream import DEFAULT_MAX_SIZE
from contentstream.domain.digest import is_address
from contentstream.domain.errors import DependencyFetchError, PayloadTooLargeError
from contentstream.domain.model import StreamOptions
from contentstream.domain.references import ReferenceExtractor

from .streams import close_upstream

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, AsyncIterable, AsyncIterator

    from contentstream.domain.model import Entry, StreamItem
    from contentstream.domain.ports.blobs import BlobStore
    from contentstream.domain.ports.history import LogHistorySource
    from contentstream.domain.ports.persistence import ContentStore

log = getLogger(__name__)


class DependencyFirstMerger:
    """Emit every resolvable dependency of a history slice, then the entries.

    Payloads come out as ``bytes`` in first-seen order, each reference at most once
    per pass. References that cannot be fetched are skipped. Entries follow
    unmodified and in source order.
    """

    def __init__(
        self,
        history: LogHistorySource,
        content_store: ContentStore,
        *,
        blob_store: BlobStore | None = None,
    ) -> None:
        self._history = history
        self._content_store = content_store
        self._blob_store = blob_store
        predicates = [is_address]
        if blob_store is not None:
            predicates.append(blob_store.is_reference)
        self._extract = ReferenceExtractor(predicates)

    async def stream(self, options: StreamOptions | None = None) -> AsyncIterator[StreamItem]:
        """Replay history twice: once for dependencies, once for the entries.

        ``history`` must replay identically for equal options.
        """

        opts = options or StreamOptions()
        seen: set[str] = set()
        async with aclosing(self._history(opts)) as history:
            async for entry in history:
                async with aclosing(
                    self._dependencies_of(entry, seen, max_size=opts.max_size)
                ) as payloads:
                    async for payload in payloads:
                        yield payload

        log.debug("Resolved %d distinct references, replaying entries", len(seen))
        async with aclosing(self._history(opts)) as history:
            async for entry in history:
                yield entry

    async def stream_buffered(
        self,
        entries: AsyncIterable[Entry],
        *,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> AsyncIterator[StreamItem]:
        """Single-pass variant for sources that cannot be replayed.

        Entries are held in memory until every dependency has been emitted.
        """

        seen: set[str] = set()
        buffered: list[Entry] = []
        try:
            async for entry in entries:
                buffered.append(entry)
                async with aclosing(
                    self._dependencies_of(entry, seen, max_size=max_size)
                ) as payloads:
                    async for payload in payloads:
                        yield payload
        finally:
            await close_upstream(entries)

        for entry in buffered:
            yield entry

    async def _dependencies_of(
        self, entry: Entry, seen: set[str], *, max_size: int
    ) -> AsyncGenerator[bytes, None]:
        references = self._extract.entry_references(entry)
        if references:
            log.debug("Entry %s references %s", entry.key, references)
        for reference in references:
            if reference in seen:
                continue
            seen.add(reference)
            payload = await self._fetch(reference, max_size=max_size)
            if payload is not None:
                yield payload

    async def _fetch(self, reference: str, *, max_size: int) -> bytes | None:
        try:
            if is_address(reference):
                payload = self._content_store.get(reference)
                if len(payload) > max_size:
                    raise PayloadTooLargeError(reference, len(payload), max_size)
                return payload
            if self._blob_store is None:
                return None
            return await self._blob_store.get(reference, max_size=max_size)
        except (DependencyFetchError, OSError) as exc:
            log.debug("Harmless error fetching %s: %s", reference, exc)
            return None
