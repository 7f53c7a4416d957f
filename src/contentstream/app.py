"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from contentstream.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyContentUnitOfWork,
    is_started,
    startup,
)
from contentstream.domain.content_store import UnitOfWorkContentStore, verify_contents
from contentstream.domain.digest import address_of, canonical_bytes, decode_content

if TYPE_CHECKING:
    from contentstream.domain.content_store import VerifyReport
    from contentstream.domain.model import ContentAddress, JSONValue
    from contentstream.domain.ports.persistence import ContentStore
    from contentstream.domain.ports.unit_of_work import ContentUnitOfWork

UnitOfWorkFactory = Callable[[], "ContentUnitOfWork"]


log = getLogger(__name__)


def build_content_store(
    *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> UnitOfWorkContentStore:
    """Return the durable content store, initialising the database on first use."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyContentUnitOfWork
    return UnitOfWorkContentStore(unit_of_work_factory)


def store_content(content: JSONValue, *, store: ContentStore | None = None) -> ContentAddress:
    """Store ``content`` and return its address."""

    effective_store = store or build_content_store()
    payload = canonical_bytes(content)
    address = address_of(payload)
    effective_store.put(address, payload)
    log.info("Stored %d bytes at %s", len(payload), address)
    return address


def load_content(address: ContentAddress, *, store: ContentStore | None = None) -> JSONValue:
    effective_store = store or build_content_store()
    return decode_content(effective_store.get(address))


def content_exists(address: ContentAddress, *, store: ContentStore | None = None) -> bool:
    effective_store = store or build_content_store()
    return effective_store.exists(address)


def delete_content(address: ContentAddress, *, store: ContentStore | None = None) -> bool:
    effective_store = store or build_content_store()
    deleted = effective_store.delete(address)
    log.info("Delete %s: %s", address, "removed" if deleted else "not present")
    return deleted


def verify_store(*, store: ContentStore | None = None) -> VerifyReport:
    """Re-hash every stored payload and report addresses that no longer match."""

    effective_store = store or build_content_store()
    report = verify_contents(effective_store.list_contents())
    log.info(
        "Verified %d payloads, %d corrupted",
        report.examined,
        len(report.corrupted),
    )
    return report
