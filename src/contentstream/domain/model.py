"""Domain model for feed entries and off-chain content."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from contentstream.config.stream import DEFAULT_MAX_SIZE

if TYPE_CHECKING:
    from collections.abc import Mapping

type JSONScalar = str | int | float | bool | None
type JSONValue = JSONScalar | list[JSONValue] | tuple[JSONValue, ...] | Mapping[str, JSONValue]
type ContentAddress = str

_EMPTY: Final[Mapping[str, JSONValue]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Entry:
    """Immutable record replayed from the feed.

    ``resolved`` is transient: it maps content addresses found in ``content`` to the
    decoded payload and only ever lives on in-memory copies.
    """

    key: str
    author: str
    sequence: int
    content: JSONValue
    previous: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    resolved: Mapping[str, JSONValue] = field(default=_EMPTY, compare=False)

    def with_resolved(self, resolved: Mapping[str, JSONValue]) -> Entry:
        if not resolved:
            return self
        merged = {**self.resolved, **resolved}
        return replace(self, resolved=MappingProxyType(merged))

    @property
    def resolved_content(self) -> JSONValue:
        """Return the decoded body when the body is itself an address, else the body."""

        if isinstance(self.content, str) and self.content in self.resolved:
            return self.resolved[self.content]
        return self.content


type StreamItem = bytes | Entry


@dataclass
class StoredContent:
    """One payload persisted in the content store."""

    address: ContentAddress
    payload: bytes
    size: int
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


@dataclass(frozen=True, slots=True)
class StreamOptions:
    """Selects the slice of feed history a pass replays."""

    author: str | None = None
    sequence_gt: int | None = None
    limit: int | None = None
    max_size: int = DEFAULT_MAX_SIZE
