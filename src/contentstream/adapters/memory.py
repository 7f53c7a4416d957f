"""Dict-backed collaborators for development and testing."""

from __future__ import annotations

import base64
import hashlib
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from contentstream.domain.content_store import check_integrity, check_write_once
from contentstream.domain.digest import canonical_bytes
from contentstream.domain.errors import (
    BlobNotFoundError,
    ContentNotFoundError,
    PayloadTooLargeError,
)
from contentstream.domain.model import Entry, StoredContent

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from contentstream.domain.model import ContentAddress, JSONValue, StreamOptions

_BLOB_PATTERN: Final[re.Pattern[str]] = re.compile(r"&[A-Za-z0-9+/]{43}=\.sha256")


def _sha256_b64(data: bytes) -> str:
    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


class InMemoryContentStore:
    """In-memory content store for development and testing."""

    def __init__(self) -> None:
        self._contents: dict[ContentAddress, StoredContent] = {}

    def get(self, address: ContentAddress) -> bytes:
        stored = self._contents.get(address)
        if stored is None:
            raise ContentNotFoundError(address)
        return check_integrity(address, stored.payload)

    def put(self, address: ContentAddress, payload: bytes) -> None:
        existing = self._contents.get(address)
        if check_write_once(address, existing.payload if existing else None, payload):
            self._contents[address] = StoredContent(
                address=address, payload=payload, size=len(payload)
            )

    def exists(self, address: ContentAddress) -> bool:
        return address in self._contents

    def delete(self, address: ContentAddress) -> bool:
        return self._contents.pop(address, None) is not None

    def list_contents(self) -> tuple[StoredContent, ...]:
        return tuple(
            sorted(self._contents.values(), key=lambda stored: (stored.created_at, stored.address))
        )


class InMemoryBlobStore:
    """Blob store using ``&<base64 sha256>.sha256`` references."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def is_reference(self, token: object) -> bool:
        return isinstance(token, str) and _BLOB_PATTERN.fullmatch(token) is not None

    def reference_for(self, data: bytes) -> str:
        return f"&{_sha256_b64(data)}.sha256"

    async def get(self, reference: str, *, max_size: int | None = None) -> bytes:
        data = self._blobs.get(reference)
        if data is None:
            raise BlobNotFoundError(reference)
        if max_size is not None and len(data) > max_size:
            raise PayloadTooLargeError(reference, len(data), max_size)
        return data

    async def add(self, data: bytes) -> str:
        reference = self.reference_for(data)
        self._blobs.setdefault(reference, data)
        return reference

    def has(self, reference: str) -> bool:
        return reference in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)


class InMemoryFeed:
    """Hash-linked, append-only feed of a single author."""

    def __init__(self, author: str = "@local.ed25519") -> None:
        self.author = author
        self._entries: list[Entry] = []

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    async def append(self, body: JSONValue) -> Entry:
        previous = self._entries[-1].key if self._entries else None
        sequence = len(self._entries) + 1
        timestamp = datetime.now(tz=UTC)
        envelope = {
            "author": self.author,
            "content": body,
            "previous": previous,
            "sequence": sequence,
            "timestamp": timestamp.isoformat(),
        }
        key = f"%{_sha256_b64(canonical_bytes(envelope))}.sha256"
        entry = Entry(
            key=key,
            author=self.author,
            sequence=sequence,
            content=body,
            previous=previous,
            timestamp=timestamp,
        )
        self._entries.append(entry)
        return entry

    async def __call__(self, options: StreamOptions) -> AsyncGenerator[Entry, None]:
        if options.author is not None and options.author != self.author:
            return
        emitted = 0
        for entry in tuple(self._entries):
            if options.sequence_gt is not None and entry.sequence <= options.sequence_gt:
                continue
            if options.limit is not None and emitted >= options.limit:
                return
            emitted += 1
            yield entry
