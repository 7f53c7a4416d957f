from __future__ import annotations

import asyncio

import pytest

from contentstream.adapters.memory import InMemoryBlobStore, InMemoryContentStore, InMemoryFeed
from contentstream.domain.errors import (
    AddressMismatchError,
    BlobNotFoundError,
    ContentIntegrityError,
    ContentNotFoundError,
    PayloadTooLargeError,
)
from contentstream.domain.model import StoredContent, StreamOptions
from contentstream.domain.ports import BlobStore, ContentStore
from tests.helpers.streams import address, collect, payload

HELLO = {"content": "hello"}


def test_memory_adapters_satisfy_ports() -> None:
    assert isinstance(InMemoryContentStore(), ContentStore)
    assert isinstance(InMemoryBlobStore(), BlobStore)


def test_content_store_put_get_delete() -> None:
    store = InMemoryContentStore()

    store.put(address(HELLO), payload(HELLO))

    assert store.exists(address(HELLO))
    assert store.get(address(HELLO)) == payload(HELLO)
    assert store.delete(address(HELLO)) is True
    assert store.delete(address(HELLO)) is False
    with pytest.raises(ContentNotFoundError):
        store.get(address(HELLO))


def test_content_store_is_write_once() -> None:
    store = InMemoryContentStore()
    store.put(address(HELLO), payload(HELLO))
    (first,) = store.list_contents()

    store.put(address(HELLO), payload(HELLO))

    assert store.list_contents() == (first,)


def test_content_store_rejects_mismatched_address() -> None:
    store = InMemoryContentStore()

    with pytest.raises(AddressMismatchError):
        store.put(address(HELLO), b"something else")

    assert not store.exists(address(HELLO))


def test_content_store_detects_tampering() -> None:
    store = InMemoryContentStore()
    store._contents[address(HELLO)] = StoredContent(  # noqa: SLF001
        address=address(HELLO), payload=b"tampered", size=8
    )

    with pytest.raises(ContentIntegrityError):
        store.get(address(HELLO))


def test_blob_store_references_and_size_limit() -> None:
    blobs = InMemoryBlobStore()
    reference = asyncio.run(blobs.add(b"0123456789"))

    assert reference == blobs.reference_for(b"0123456789")
    assert blobs.is_reference(reference)
    assert not blobs.is_reference(address(HELLO))
    assert not blobs.is_reference(42)
    assert not blobs.is_reference(reference + "\n")
    assert asyncio.run(blobs.get(reference)) == b"0123456789"
    assert len(blobs) == 1
    with pytest.raises(PayloadTooLargeError):
        asyncio.run(blobs.get(reference, max_size=4))
    with pytest.raises(BlobNotFoundError):
        asyncio.run(blobs.get(blobs.reference_for(b"missing")))


def test_feed_links_entries() -> None:
    feed = InMemoryFeed(author="@carol.ed25519")

    first = asyncio.run(feed.append("one"))
    second = asyncio.run(feed.append("two"))

    assert (first.sequence, second.sequence) == (1, 2)
    assert first.previous is None
    assert second.previous == first.key
    assert first.key != second.key
    assert first.key.startswith("%")


def test_feed_history_filters() -> None:
    feed = InMemoryFeed(author="@carol.ed25519")
    entries = [asyncio.run(feed.append(n)) for n in range(5)]

    assert collect(feed(StreamOptions())) == entries
    assert collect(feed(StreamOptions(sequence_gt=3))) == entries[3:]
    assert collect(feed(StreamOptions(limit=2))) == entries[:2]
    assert collect(feed(StreamOptions(sequence_gt=1, limit=1))) == entries[1:2]
    assert collect(feed(StreamOptions(author="@dave.ed25519"))) == []
