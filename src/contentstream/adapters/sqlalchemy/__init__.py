"""SQLAlchemy adapter package for contentstream."""

from __future__ import annotations

from .mappings import content_table, create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyContentRepository
from .unit_of_work import (
    SqlAlchemyContentUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyContentRepository",
    "SqlAlchemyContentUnitOfWork",
    "StartupError",
    "configured_engine",
    "content_table",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
