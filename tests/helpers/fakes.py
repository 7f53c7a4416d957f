"""Reusable fakes for collaborator ports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contentstream.adapters.memory import InMemoryBlobStore, InMemoryFeed

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from contentstream.domain.model import Entry, StreamOptions


class CountingFeed:
    """Wrap a feed and count how often its history was replayed."""

    def __init__(self, feed: InMemoryFeed) -> None:
        self.feed = feed
        self.replays = 0
        self.closed = 0

    async def __call__(self, options: StreamOptions) -> AsyncGenerator[Entry, None]:
        self.replays += 1
        try:
            async for entry in self.feed(options):
                yield entry
        finally:
            self.closed += 1


class FlakyBlobStore(InMemoryBlobStore):
    """Blob store whose reads fail with an I/O error."""

    async def get(self, reference: str, *, max_size: int | None = None) -> bytes:
        raise OSError(f"connection reset while reading {reference}")
