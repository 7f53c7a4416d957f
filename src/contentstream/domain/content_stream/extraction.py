"""Map function resolving an entry's off-chain content before delivery."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from contentstream.domain.digest import decode_content, is_address
from contentstream.domain.errors import ContentNotFoundError
from contentstream.domain.references import ReferenceExtractor

if TYPE_CHECKING:
    from contentstream.domain.model import Entry, JSONValue
    from contentstream.domain.ports.persistence import ContentStore

log = getLogger(__name__)


class ContentResolver:
    """Return a copy of an entry with its content addresses decoded into ``resolved``.

    Missing content leaves the address unresolved unless ``strict`` is set.
    """

    def __init__(self, content_store: ContentStore, *, strict: bool = False) -> None:
        self._content_store = content_store
        self._strict = strict
        self._extract = ReferenceExtractor([is_address])

    def __call__(self, entry: Entry) -> Entry:
        resolved: dict[str, JSONValue] = {}
        for address in self._extract.entry_references(entry):
            try:
                payload = self._content_store.get(address)
            except ContentNotFoundError:
                if self._strict:
                    raise
                log.debug("No content for %s in entry %s", address, entry.key)
                continue
            resolved[address] = decode_content(payload)
        return entry.with_resolved(resolved)
