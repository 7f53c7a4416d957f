"""Match arriving payloads against the entries that reference them."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from contentstream.domain.digest import address_of, decode_content, is_address
from contentstream.domain.errors import MissingDependencyError, UnmatchedPayloadError
from contentstream.domain.references import ReferenceExtractor

from .streams import close_upstream

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, AsyncIterator, Callable

    from contentstream.domain.model import ContentAddress, Entry, JSONValue, StreamItem
    from contentstream.domain.ports.blobs import BlobStore
    from contentstream.domain.ports.persistence import ContentStore

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationResult:
    """Counters for one reconciliation pass."""

    payloads_received: int = 0
    entries: int = 0
    contents_stored: int = 0
    blobs_stored: int = 0
    unmatched: tuple[ContentAddress, ...] = ()


@dataclass(slots=True)
class PendingPayloads:
    """Payloads received in the current pass that no entry has claimed yet."""

    by_address: dict[ContentAddress, bytes] = field(default_factory=dict[str, bytes])
    address_by_blob: dict[str, ContentAddress] = field(default_factory=dict[str, str])
    matched: dict[ContentAddress, bytes] = field(default_factory=dict[str, bytes])

    def add(self, payload: bytes, *, blob_reference: str | None = None) -> ContentAddress:
        address = address_of(payload)
        if address not in self.matched:
            self.by_address[address] = payload
        if blob_reference is not None:
            self.address_by_blob[blob_reference] = address
        return address

    def claim(self, address: ContentAddress) -> bytes | None:
        payload = self.by_address.pop(address, None)
        if payload is not None:
            self.matched[address] = payload
            return payload
        return self.matched.get(address)

    def clear(self) -> None:
        self.by_address.clear()
        self.address_by_blob.clear()
        self.matched.clear()


class ReconciliationHandler:
    """Stream stage persisting payloads only once an entry claims them.

    Consumes the output of ``DependencyFirstMerger`` and yields entries. A content
    reference must be satisfied by a payload seen earlier in the same pass; the
    payload is stored before the entry is passed on.
    """

    def __init__(
        self,
        content_store: ContentStore,
        *,
        blob_store: BlobStore | None = None,
        resolve: bool = False,
        on_complete: Callable[[ReconciliationResult], None] | None = None,
    ) -> None:
        self._content_store = content_store
        self._blob_store = blob_store
        self._resolve = resolve
        self._on_complete = on_complete
        self._extract_contents = ReferenceExtractor([is_address])
        self._extract_blobs = ReferenceExtractor(
            [blob_store.is_reference] if blob_store is not None else []
        )
        self.result: ReconciliationResult | None = None

    async def __call__(self, items: AsyncIterable[StreamItem]) -> AsyncIterator[Entry]:
        result = ReconciliationResult()
        pending = PendingPayloads()
        stored: set[str] = set()
        try:
            async for item in items:
                if isinstance(item, bytes):
                    result.payloads_received += 1
                    blob_reference = (
                        self._blob_store.reference_for(item) if self._blob_store else None
                    )
                    pending.add(item, blob_reference=blob_reference)
                    continue

                result.entries += 1
                yield await self._reconcile(item, pending, stored, result)

            result.unmatched = tuple(pending.by_address)
        finally:
            pending.clear()
            await close_upstream(items)

        self.result = result
        log.info(
            "Reconciled %d entries: %d contents stored, %d blobs stored",
            result.entries,
            result.contents_stored,
            result.blobs_stored,
        )
        if self._on_complete is not None:
            self._on_complete(result)
        if result.unmatched:
            raise UnmatchedPayloadError(result.unmatched)

    async def _reconcile(
        self,
        entry: Entry,
        pending: PendingPayloads,
        stored: set[str],
        result: ReconciliationResult,
    ) -> Entry:
        resolved: dict[str, JSONValue] = {}
        claimed: dict[str, bytes] = {}

        # every content reference must be satisfied before anything is written
        for address in self._extract_contents.entry_references(entry):
            payload = pending.claim(address)
            if payload is None:
                raise MissingDependencyError(address, entry_key=entry.key)
            claimed[address] = payload

        for address, payload in claimed.items():
            if address not in stored:
                self._content_store.put(address, payload)
                stored.add(address)
                result.contents_stored += 1
            if self._resolve:
                resolved[address] = decode_content(payload)

        for reference in self._extract_blobs.entry_references(entry):
            address = pending.address_by_blob.get(reference)
            payload = pending.claim(address) if address is not None else None
            if payload is None:
                log.debug("Blob %s for entry %s was not delivered", reference, entry.key)
                continue
            if reference not in stored and self._blob_store is not None:
                await self._blob_store.add(payload)
                stored.add(reference)
                result.blobs_stored += 1

        return entry.with_resolved(resolved)
