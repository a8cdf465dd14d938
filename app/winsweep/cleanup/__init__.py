"""Cleanup execution.

This module provides the cleanup models and the deletion executor that
performs gated, dry-run aware removals.
"""

from winsweep.cleanup.executor import (
    DeletionExecutor,
    is_older_than,
    is_reparse_point,
    measure_size,
)
from winsweep.cleanup.models import (
    CleanupCandidate,
    CleanupResult,
    ItemType,
    RemovalOutcome,
    RemovalResult,
    SweepTarget,
)

__all__ = [
    "CleanupCandidate",
    "CleanupResult",
    "DeletionExecutor",
    "ItemType",
    "RemovalOutcome",
    "RemovalResult",
    "SweepTarget",
    "is_older_than",
    "is_reparse_point",
    "measure_size",
]
