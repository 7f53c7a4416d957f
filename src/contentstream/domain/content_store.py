"""Content store facade running each operation in its own unit of work."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from contentstream.domain.digest import address_of, verify_address
from contentstream.domain.errors import ContentIntegrityError

if TYPE_CHECKING:
    from collections.abc import Callable

    from contentstream.domain.model import ContentAddress, StoredContent
    from contentstream.domain.ports.unit_of_work import ContentUnitOfWork

log = getLogger(__name__)


def check_integrity(address: ContentAddress, payload: bytes) -> bytes:
    """Return ``payload`` if it still hashes to ``address``."""

    actual = address_of(payload)
    if actual != address:
        log.warning("Stored payload for %s hashes to %s", address, actual)
        raise ContentIntegrityError(address, actual)
    return payload


def check_write_once(address: ContentAddress, existing: bytes | None, payload: bytes) -> bool:
    """Validate a write and return whether it still needs to be stored.

    Identical bytes under an existing address are a no-op; different bytes are a
    corruption and never overwrite the stored payload.
    """

    verify_address(address, payload)
    if existing is None:
        return True
    if existing != payload:
        raise ContentIntegrityError(address, address_of(existing))
    return False


class UnitOfWorkContentStore:
    """``ContentStore`` that opens one unit of work per call and commits writes."""

    def __init__(self, unit_of_work_factory: Callable[[], ContentUnitOfWork]) -> None:
        self._unit_of_work_factory = unit_of_work_factory

    def get(self, address: ContentAddress) -> bytes:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.contents.get(address)

    def put(self, address: ContentAddress, payload: bytes) -> None:
        with self._unit_of_work_factory() as uow:
            uow.repositories.contents.put(address, payload)
            uow.commit()

    def exists(self, address: ContentAddress) -> bool:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.contents.exists(address)

    def delete(self, address: ContentAddress) -> bool:
        with self._unit_of_work_factory() as uow:
            deleted = uow.repositories.contents.delete(address)
            uow.commit()
            return deleted

    def list_contents(self) -> tuple[StoredContent, ...]:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.contents.list_contents()


@dataclass(slots=True)
class VerifyReport:
    """Outcome of re-hashing every payload in a store."""

    examined: int = 0
    corrupted: list[ContentAddress] = field(default_factory=list[str])

    @property
    def ok(self) -> bool:
        return not self.corrupted


def verify_contents(contents: tuple[StoredContent, ...]) -> VerifyReport:
    report = VerifyReport()
    for stored in contents:
        report.examined += 1
        if address_of(stored.payload) != stored.address:
            report.corrupted.append(stored.address)
    return report
