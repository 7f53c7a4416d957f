"""Drive async stream stages from synchronous tests."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from contentstream.domain.digest import address_of, canonical_bytes
from contentstream.domain.model import Entry

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, AsyncIterator, Iterable

    from contentstream.domain.model import JSONValue, StreamItem


def collect[T](source: AsyncIterable[T]) -> list[T]:
    """Drain ``source`` and return every item."""

    async def _drain() -> list[T]:
        return [item async for item in source]

    return asyncio.run(_drain())


def collect_until_error[T](source: AsyncIterable[T]) -> tuple[list[T], Exception | None]:
    """Drain ``source`` and return the items emitted before it failed."""

    items: list[T] = []

    async def _drain() -> Exception | None:
        try:
            async for item in source:
                items.append(item)
        except Exception as exc:  # noqa: BLE001
            return exc
        return None

    error = asyncio.run(_drain())
    return items, error


async def stream_of(items: Iterable[StreamItem]) -> AsyncIterator[StreamItem]:
    for item in items:
        yield item


def payload(content: JSONValue) -> bytes:
    return canonical_bytes(content)


def address(content: JSONValue) -> str:
    return address_of(canonical_bytes(content))


def make_entry(content: JSONValue, *, sequence: int = 1, author: str = "@bob.ed25519") -> Entry:
    return Entry(
        key=f"%entry-{author}-{sequence}.sha256",
        author=author,
        sequence=sequence,
        content=content,
    )
