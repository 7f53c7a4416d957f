"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from contentstream.adapters.sqlalchemy.mappings import content_table
from contentstream.domain.content_store import check_integrity, check_write_once
from contentstream.domain.errors import ContentNotFoundError, ContentUnavailableError
from contentstream.domain.model import StoredContent

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from contentstream.domain.model import ContentAddress


class SqlAlchemyContentRepository:
    """Content store scoped to one session; callers commit through the unit of work."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, address: ContentAddress) -> bytes:
        try:
            stored = self.session.get(StoredContent, address)
        except SQLAlchemyError as exc:
            raise ContentUnavailableError(address, str(exc)) from exc
        if stored is None:
            raise ContentNotFoundError(address)
        return check_integrity(address, stored.payload)

    def put(self, address: ContentAddress, payload: bytes) -> None:
        existing = self.session.get(StoredContent, address)
        if check_write_once(address, existing.payload if existing else None, payload):
            self.session.add(StoredContent(address=address, payload=payload, size=len(payload)))
            self.session.flush()

    def exists(self, address: ContentAddress) -> bool:
        stmt = select(content_table.c.address).where(content_table.c.address == address).limit(1)
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def delete(self, address: ContentAddress) -> bool:
        stored = self.session.get(StoredContent, address)
        if stored is None:
            return False
        self.session.delete(stored)
        self.session.flush()
        return True

    def list_contents(self) -> tuple[StoredContent, ...]:
        stmt = select(StoredContent).order_by(
            content_table.c.created_at, content_table.c.address
        )
        return tuple(self.session.scalars(stmt).all())
