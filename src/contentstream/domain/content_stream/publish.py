"""Write path: store content first, then append its address to the feed."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from contentstream.domain.digest import address_of, canonical_bytes

if TYPE_CHECKING:
    from contentstream.domain.model import Entry, JSONValue
    from contentstream.domain.ports.history import LogAppend
    from contentstream.domain.ports.persistence import ContentStore

log = getLogger(__name__)


class ContentPublisher:
    def __init__(self, content_store: ContentStore, append: LogAppend) -> None:
        self._content_store = content_store
        self._append = append

    async def publish(self, content: JSONValue) -> Entry:
        """Store ``content`` off-chain and append an entry carrying only its address.

        The entry is never appended when storing fails.
        """

        payload = canonical_bytes(content)
        address = address_of(payload)
        self._content_store.put(address, payload)
        log.debug("Stored %d bytes at %s", len(payload), address)
        return await self._append(address)
