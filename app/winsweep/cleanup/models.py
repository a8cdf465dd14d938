"""Cleanup domain models.

This module defines the inputs supplied by the target enumerators
(candidates and sweep targets) and the results returned by the
deletion executor.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from winsweep.safety.gate import RejectionReason

DEFAULT_AGE_DAYS = 7
DEFAULT_MAX_DEPTH = 5


class ItemType(str, Enum):
    """Kind of filesystem entry a sweep may remove.

    Attributes:
        FILE: Regular files only.
        DIRECTORY: Directories only.
        ANY: Files and directories.
    """

    FILE = "file"
    DIRECTORY = "directory"
    ANY = "any"


class RemovalOutcome(str, Enum):
    """Terminal state of a single removal attempt.

    Attributes:
        REJECTED: The safety gate refused the path; nothing was attempted.
        NOT_FOUND: The path was already absent.
        DRY_RUN: Dry-run mode; the path was measured and reported only.
        REMOVED: The path was deleted.
        PERMISSION_DENIED: The OS refused access.
        FAILED: Deletion failed for another reason.
    """

    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    DRY_RUN = "dry_run"
    REMOVED = "removed"
    PERMISSION_DENIED = "permission_denied"
    FAILED = "failed"


_SUCCESS_OUTCOMES = frozenset(
    {RemovalOutcome.NOT_FOUND, RemovalOutcome.DRY_RUN, RemovalOutcome.REMOVED}
)


@dataclass(frozen=True, slots=True)
class CleanupCandidate:
    """A path or glob proposed for cleanup by an enumerator.

    Attributes:
        path: Concrete path or glob expression (may use ~ and %VARS%).
        description: Human-readable label used in reports.
        age_days: Minimum modification age in days; 0 means any age.
    """

    path: str
    description: str
    age_days: int = DEFAULT_AGE_DAYS

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.path or not self.path.strip():
            msg = "Candidate path cannot be empty"
            raise ValueError(msg)
        if self.age_days < 0:
            msg = f"Age threshold cannot be negative, got {self.age_days}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class SweepTarget:
    """A bounded recursive search for stale items below a base directory.

    Attributes:
        base_dir: Directory to search (may use ~ and %VARS%).
        name_pattern: Glob matched against entry names.
        description: Human-readable label used in reports.
        age_days: Minimum modification age in days; 0 means any age.
        item_type: Which kind of entries may be removed.
        max_depth: Deepest level searched; 1 means direct children only.
    """

    base_dir: str
    name_pattern: str
    description: str
    age_days: int = DEFAULT_AGE_DAYS
    item_type: ItemType = ItemType.FILE
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate sweep data after initialization."""
        if not self.base_dir or not self.name_pattern:
            msg = "Sweep base directory and name pattern cannot be empty"
            raise ValueError(msg)
        if self.age_days < 0:
            msg = f"Age threshold cannot be negative, got {self.age_days}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"Max depth must be at least 1, got {self.max_depth}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of a single removal attempt.

    Attributes:
        path: Path that was operated on.
        outcome: Terminal state reached.
        bytes_freed: Bytes reclaimed (or that would be reclaimed in dry-run).
        reason: Gate rejection reason, when rejected.
        error: OS error message, when failed.
    """

    path: str
    outcome: RemovalOutcome
    bytes_freed: int = 0
    reason: RejectionReason | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Removed, already absent, or reported in dry-run."""
        return self.outcome in _SUCCESS_OUTCOMES

    @property
    def counts_as_cleaned(self) -> bool:
        """Whether this result contributes an item to a cleanup total."""
        return self.outcome in (RemovalOutcome.REMOVED, RemovalOutcome.DRY_RUN)


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Aggregate outcome of cleaning one candidate, sweep, or a whole run.

    Attributes:
        description: Label of what was cleaned.
        bytes_freed: Total bytes reclaimed (or reclaimable in dry-run).
        items: Number of entries removed (or reported in dry-run).
        dry_run: Whether the numbers come from a dry-run.
    """

    description: str = ""
    bytes_freed: int = 0
    items: int = 0
    dry_run: bool = False

    def __add__(self, other: "CleanupResult") -> "CleanupResult":
        return CleanupResult(
            description=self.description,
            bytes_freed=self.bytes_freed + other.bytes_freed,
            items=self.items + other.items,
            dry_run=self.dry_run or other.dry_run,
        )

    @property
    def is_empty(self) -> bool:
        """Check if nothing was cleaned."""
        return self.items == 0

    @classmethod
    def total(
        cls,
        results: Iterable["CleanupResult"],
        description: str = "Total",
    ) -> "CleanupResult":
        """Sum a sequence of results into one."""
        combined = cls(description=description)
        for result in results:
            combined = combined + result
        return combined
