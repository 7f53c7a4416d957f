"""Ports for persisting off-chain content."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from contentstream.domain.model import ContentAddress, StoredContent


@runtime_checkable
class ContentStore(Protocol):
    """Content-addressed, write-once payload store.

    ``put`` must reject payloads that do not hash to ``address`` and must never
    overwrite an existing address with different bytes.
    """

    def get(self, address: ContentAddress) -> bytes: ...

    def put(self, address: ContentAddress, payload: bytes) -> None: ...

    def exists(self, address: ContentAddress) -> bool: ...

    def delete(self, address: ContentAddress) -> bool: ...

    def list_contents(self) -> tuple[StoredContent, ...]: ...
