"""Table definition and imperative mapping for stored payloads."""

from __future__ import annotations

from datetime import UTC, datetime
from functools import cache
from logging import getLogger
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    TypeDecorator,
)
from sqlalchemy.orm import configure_mappers, registry

from contentstream.domain.model import StoredContent

if TYPE_CHECKING:
    from sqlalchemy import Dialect
    from sqlalchemy.engine import Engine

log = getLogger(__name__)

# 44 base64 characters plus the ".content.sha256" tag, with headroom
ADDRESS_LENGTH: Final[int] = 64

NAMING_CONVENTION: Final[dict[str, str]] = {
    "pk": "pk_%(table_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "ix": "ix_%(column_0_label)s",
}


class UTCDateTime(TypeDecorator[datetime]):
    """Store aware datetimes in UTC and hand them back aware.

    SQLite drops the offset, so naive values read back are taken as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        del dialect
        if value is None:
            return None
        return (value if value.tzinfo else value.replace(tzinfo=UTC)).astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        del dialect
        if value is None or value.tzinfo is not None:
            return value
        return value.replace(tzinfo=UTC)


mapper_registry = registry(metadata=MetaData(naming_convention=NAMING_CONVENTION))

content_table = Table(
    "content",
    mapper_registry.metadata,
    Column("address", String(ADDRESS_LENGTH), primary_key=True),
    Column("payload", LargeBinary, nullable=False),
    Column("size", Integer, nullable=False),
    Column("created_at", UTCDateTime, nullable=False),
    CheckConstraint("size = length(payload)", name="size_matches_payload"),
)


@cache
def start_mappers() -> registry:
    """Map ``StoredContent`` onto the content table. Safe to call repeatedly."""

    log.debug("Mapping StoredContent onto %s", content_table.name)
    mapper_registry.map_imperatively(StoredContent, content_table)
    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create the schema straight from metadata, bypassing migrations."""

    mapper_registry.metadata.create_all(engine)
