"""Content addressing for off-chain payloads.

A content address is ``base64(sha256(payload))`` followed by a fixed suffix tag.
The tag distinguishes off-chain JSON content from blob references, whose format
belongs to the blob store.
"""

from __future__ import annotations

import base64
import hashlib
import json
import re
from typing import TYPE_CHECKING, Final

from contentstream.domain.errors import AddressMismatchError, SerializationError

if TYPE_CHECKING:
    from contentstream.domain.model import ContentAddress, JSONValue

CONTENT_SUFFIX: Final[str] = ".content.sha256"

_ADDRESS_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[A-Za-z0-9+/]{43}=" + re.escape(CONTENT_SUFFIX)
)


def canonical_bytes(content: JSONValue) -> bytes:
    """Serialize ``content`` into the byte form that gets addressed and stored."""

    try:
        text = json.dumps(
            content,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Content is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")


def decode_content(payload: bytes) -> JSONValue:
    return json.loads(payload.decode("utf-8"))


def digest_of(payload: bytes) -> str:
    return base64.b64encode(hashlib.sha256(payload).digest()).decode("ascii")


def address_of(payload: bytes) -> ContentAddress:
    """Return the content address for ``payload``. Pure and deterministic."""

    return digest_of(payload) + CONTENT_SUFFIX


def is_address(token: object) -> bool:
    """Return whether ``token`` is formatted as an off-chain content address."""

    return isinstance(token, str) and _ADDRESS_PATTERN.fullmatch(token) is not None


def verify_address(address: str, payload: bytes) -> None:
    """Raise :class:`AddressMismatchError` unless ``payload`` hashes to ``address``."""

    actual = address_of(payload)
    if actual != address:
        raise AddressMismatchError(address, actual)
