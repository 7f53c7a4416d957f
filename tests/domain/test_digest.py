from __future__ import annotations

import base64
import hashlib

import pytest

from contentstream.domain.digest import (
    CONTENT_SUFFIX,
    address_of,
    canonical_bytes,
    decode_content,
    digest_of,
    is_address,
    verify_address,
)
from contentstream.domain.errors import AddressMismatchError, SerializationError


def test_address_is_base64_sha256_with_suffix() -> None:
    payload = b'{"content":"hello","type":"a"}'
    expected = base64.b64encode(hashlib.sha256(payload).digest()).decode("ascii")

    assert digest_of(payload) == expected
    assert address_of(payload) == expected + CONTENT_SUFFIX


def test_address_is_deterministic() -> None:
    assert address_of(b"same bytes") == address_of(b"same bytes")
    assert address_of(b"same bytes") != address_of(b"other bytes")


def test_canonical_bytes_ignore_key_order() -> None:
    first = canonical_bytes({"type": "a", "content": "hello"})
    second = canonical_bytes({"content": "hello", "type": "a"})

    assert first == second == b'{"content":"hello","type":"a"}'


def test_canonical_bytes_keep_unicode() -> None:
    encoded = canonical_bytes({"text": "grüße"})

    assert encoded == '{"text":"grüße"}'.encode()
    assert decode_content(encoded) == {"text": "grüße"}


@pytest.mark.parametrize("content", [{"tags": {"a", "b"}}, {"value": float("nan")}, object()])
def test_canonical_bytes_reject_unencodable_content(content: object) -> None:
    with pytest.raises(SerializationError):
        canonical_bytes(content)  # type: ignore[arg-type]


def test_is_address_accepts_computed_addresses() -> None:
    assert is_address(address_of(b"payload"))


@pytest.mark.parametrize(
    "token",
    [
        None,
        42,
        "",
        "hello",
        "&" + digest_of(b"payload") + ".sha256",
        digest_of(b"payload") + ".sha256",
        digest_of(b"payload") + CONTENT_SUFFIX + "x",
        "%" + digest_of(b"payload") + CONTENT_SUFFIX,
        address_of(b"payload") + "\n",
    ],
)
def test_is_address_rejects_other_tokens(token: object) -> None:
    assert not is_address(token)


def test_verify_address_raises_on_mismatch() -> None:
    address = address_of(b"original")

    verify_address(address, b"original")
    with pytest.raises(AddressMismatchError) as exc:
        verify_address(address, b"tampered")

    assert exc.value.address == address
    assert exc.value.actual == address_of(b"tampered")
