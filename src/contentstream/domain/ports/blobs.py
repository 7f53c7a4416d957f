"""Port for the external binary blob store."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class BlobStore(Protocol):
    """Blob storage owned outside the content stream.

    The reference format is opaque here; the store recognizes and produces its
    own references.
    """

    def is_reference(self, token: object) -> bool: ...

    def reference_for(self, data: bytes) -> str: ...

    async def get(self, reference: str, *, max_size: int | None = None) -> bytes:
        """Return the blob bytes.

        Raises ``BlobNotFoundError`` or ``PayloadTooLargeError``.
        """
        ...

    async def add(self, data: bytes) -> str: ...
