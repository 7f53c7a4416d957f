"""Domain port definitions for adapters."""

from __future__ import annotations

from .blobs import BlobStore
from .history import LogAppend, LogHistorySource
from .persistence import ContentStore
from .unit_of_work import (
    ContentRepositories,
    ContentUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "BlobStore",
    "ContentRepositories",
    "ContentStore",
    "ContentUnitOfWork",
    "LogAppend",
    "LogHistorySource",
    "RepositoryCollection",
    "UnitOfWork",
]
