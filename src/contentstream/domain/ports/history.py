"""Ports for the feed the content stream reads from and writes to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from contentstream.domain.model import Entry, JSONValue, StreamOptions


@runtime_checkable
class LogHistorySource(Protocol):
    """Replayable history of feed entries.

    Calling the source twice with equal options must yield the same entries in
    the same order.
    """

    def __call__(self, options: StreamOptions) -> AsyncGenerator[Entry, None]: ...


@runtime_checkable
class LogAppend(Protocol):
    """Append a new entry whose content is ``body`` and return it."""

    async def __call__(self, body: JSONValue) -> Entry: ...


__all__ = ["LogAppend", "LogHistorySource"]
