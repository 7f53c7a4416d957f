"""Dependency-first content streams over a feed."""

from __future__ import annotations

from .extraction import ContentResolver
from .merger import DependencyFirstMerger
from .publish import ContentPublisher
from .reconciliation import PendingPayloads, ReconciliationHandler, ReconciliationResult
from .service import ContentStream

__all__ = [
    "ContentPublisher",
    "ContentResolver",
    "ContentStream",
    "DependencyFirstMerger",
    "PendingPayloads",
    "ReconciliationHandler",
    "ReconciliationResult",
]
