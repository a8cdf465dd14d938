"""Deletion executor.

Turns validated paths into actual (or simulated) removals. Every removal
goes through the safety gate first; glob expansion and recursive sweeps
re-check the built-in protection rules and the whitelist for each path
they surface. Failures are isolated per path and never abort a run.
"""

import glob
import logging
import os
import shutil
import stat
import time
from pathlib import Path

from winsweep.cleanup.models import (
    DEFAULT_AGE_DAYS,
    DEFAULT_MAX_DEPTH,
    CleanupCandidate,
    CleanupResult,
    ItemType,
    RemovalOutcome,
    RemovalResult,
    SweepTarget,
)
from winsweep.core.context import CleanupContext
from winsweep.safety.classifier import is_whitelisted, should_protect
from winsweep.safety.gate import RejectionReason, validate_for_deletion
from winsweep.safety.globmatch import expand_path, glob_match, has_wildcard
from winsweep.utils.formatting import format_size

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86400


def is_reparse_point(path: str | Path) -> bool:
    """Check if a path is a symbolic link, junction, or other reparse point.

    Args:
        path: Path to inspect (never followed).

    Returns:
        True if the path is a link of any kind, False otherwise or on error.
    """
    target = Path(path)
    try:
        if target.is_symlink() or target.is_junction():
            return True
        attributes = getattr(target.lstat(), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & stat.FILE_ATTRIBUTE_REPARSE_POINT)


def measure_size(path: str | Path) -> int:
    """Get the size in bytes of a file or directory tree.

    Links are measured, never followed. Unreadable entries count as zero.

    Args:
        path: Path to measure.

    Returns:
        Size in bytes.
    """
    target = Path(path)
    try:
        if not target.is_dir() or is_reparse_point(target):
            return target.lstat().st_size
    except OSError:
        return 0

    total = 0
    for dirpath, _dirnames, filenames in os.walk(target, followlinks=False):
        for name in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, name)).st_size
            except OSError:
                continue
    return total


def is_older_than(path: str | Path, age_days: int) -> bool:
    """Check if a path was last modified at least ``age_days`` days ago.

    An age of 0 always matches. Paths that cannot be inspected never match.
    """
    if age_days <= 0:
        return True
    try:
        mtime = Path(path).lstat().st_mtime
    except OSError:
        return False
    return time.time() - mtime >= age_days * _SECONDS_PER_DAY


def _clear_readonly(func: object, path: str, exc: BaseException) -> None:
    """rmtree error hook: clear the read-only bit and try once more."""
    if not isinstance(exc, PermissionError) or not os.path.lexists(path):
        raise exc
    os.chmod(path, os.lstat(path).st_mode | stat.S_IWRITE)
    func(path)  # type: ignore[operator]


def _force_delete(target: Path) -> None:
    """Delete a file, link, or directory tree, clearing read-only bits."""
    if is_reparse_point(target):
        if os.name == "nt" and target.is_dir():
            os.rmdir(target)
        else:
            target.unlink()
        return

    if target.is_dir():
        shutil.rmtree(target, onexc=_clear_readonly)
        return

    mode = target.lstat().st_mode
    if not mode & stat.S_IWRITE:
        os.chmod(target, mode | stat.S_IWRITE)
    target.unlink()


class DeletionExecutor:
    """Performs gated removals and aggregates what they free.

    All run state (dry-run flag, whitelist snapshot, failure counters) lives
    in the CleanupContext passed in by the command.

    Attributes:
        _context: Run context shared with the caller.
    """

    def __init__(self, context: CleanupContext | None = None) -> None:
        """Initialize the DeletionExecutor.

        Args:
            context: Run context. Defaults to a live run with no whitelist.
        """
        self._context = context if context is not None else CleanupContext()

    @property
    def context(self) -> CleanupContext:
        """Run context used by this executor."""
        return self._context

    @property
    def permission_denied_count(self) -> int:
        """Number of removals refused by the OS during this run."""
        return self._context.permission_denied_count

    def remove_path(self, path: str, silent: bool = True) -> RemovalResult:
        """Remove a single path after it passes the safety gate.

        Args:
            path: Absolute path to remove.
            silent: If True, failures are logged at debug level only,
                unless the run has debug enabled.

        Returns:
            RemovalResult describing the terminal state.
        """
        return self._remove(path, silent=silent, refuse_links=False)

    def remove_path_elevated(self, path: str) -> RemovalResult:
        """Remove a path with elevated reach.

        Identical to ``remove_path`` but also refuses symbolic links,
        junctions and other reparse points, and always reports failures.

        Args:
            path: Absolute path to remove.

        Returns:
            RemovalResult describing the terminal state.
        """
        return self._remove(path, silent=False, refuse_links=True)

    def clean_glob(self, pattern: str, description: str, age_days: int = 0) -> CleanupResult:
        """Remove every existing path matching a glob.

        A pattern without wildcards is treated as a single literal path.
        Each match is re-checked against the built-in protection rules and
        the whitelist before removal.

        Args:
            pattern: Glob or path; ``~`` and environment variables are expanded.
            description: Label for the summary line.
            age_days: Skip matches modified less than this many days ago.

        Returns:
            CleanupResult with the bytes freed and items removed.
        """
        bytes_freed = 0
        items = 0

        for match in self._expand(pattern):
            if should_protect(match) or is_whitelisted(match, self._context.whitelist):
                logger.debug("Skipping protected path %s", match)
                continue
            if not is_older_than(match, age_days):
                logger.debug("Skipping %s: modified within %d day(s)", match, age_days)
                continue

            result = self.remove_path(match, silent=True)
            if result.counts_as_cleaned:
                bytes_freed += result.bytes_freed
                items += 1

        if items:
            verb = "Would clean" if self._context.dry_run else "Cleaned"
            logger.info("%s %s (%s)", verb, description, format_size(bytes_freed))

        return CleanupResult(
            description=description,
            bytes_freed=bytes_freed,
            items=items,
            dry_run=self._context.dry_run,
        )

    def find_and_remove(
        self,
        base_dir: str,
        name_pattern: str,
        age_days: int = DEFAULT_AGE_DAYS,
        item_type: ItemType = ItemType.FILE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        description: str = "",
    ) -> CleanupResult:
        """Search below a directory for stale items and remove them.

        Refuses to search when the base directory is itself a link or
        junction. Enumeration errors are logged and the search continues.

        Args:
            base_dir: Directory to search; ``~`` and environment variables are expanded.
            name_pattern: Glob matched case-insensitively against entry names.
            age_days: Minimum modification age in days; 0 means any age.
            item_type: Which kind of entries may be removed.
            max_depth: Deepest level searched; 1 means direct children only.
            description: Label for the result.

        Returns:
            CleanupResult whose ``items`` is the number of entries removed.
        """
        label = description or f"{name_pattern} in {base_dir}"
        empty = CleanupResult(description=label, dry_run=self._context.dry_run)
        base = expand_path(base_dir)

        if is_reparse_point(base):
            logger.warning("Refusing to search %s: it is a symbolic link or junction", base)
            return empty
        if not os.path.isdir(base):
            logger.debug("Skipping sweep of missing directory %s", base)
            return empty

        found = empty + self._walk(base, 1, name_pattern, age_days, item_type, max_depth)
        if found.items:
            verb = "Would clean" if self._context.dry_run else "Cleaned"
            logger.info("%s %s (%d item(s))", verb, label, found.items)
        return found

    def clean_candidate(self, candidate: CleanupCandidate) -> CleanupResult:
        """Clean one enumerator candidate."""
        return self.clean_glob(candidate.path, candidate.description, candidate.age_days)

    def sweep(self, target: SweepTarget) -> CleanupResult:
        """Run one enumerator sweep target."""
        return self.find_and_remove(
            target.base_dir,
            target.name_pattern,
            age_days=target.age_days,
            item_type=target.item_type,
            max_depth=target.max_depth,
            description=target.description,
        )

    # === Private helpers ===

    def _report(self, silent: bool, message: str, *args: object) -> None:
        if silent and not self._context.debug:
            logger.debug(message, *args)
        else:
            logger.warning(message, *args)

    def _remove(self, path: str, *, silent: bool, refuse_links: bool) -> RemovalResult:
        decision = validate_for_deletion(path, self._context.whitelist)
        if not decision.allowed:
            self._report(silent, "Refusing to remove %s: %s", path, decision.message)
            return RemovalResult(path=path, outcome=RemovalOutcome.REJECTED, reason=decision.reason)

        target = Path(decision.resolved or path)
        if not os.path.lexists(target):
            return RemovalResult(path=path, outcome=RemovalOutcome.NOT_FOUND)

        if refuse_links and (is_reparse_point(path) or is_reparse_point(target)):
            self._report(silent, "Refusing to remove %s: symbolic link or junction", path)
            return RemovalResult(
                path=path,
                outcome=RemovalOutcome.REJECTED,
                reason=RejectionReason.REPARSE_POINT,
            )

        size = measure_size(target)

        if self._context.dry_run:
            logger.info("Dry-run: would remove %s (%s)", path, format_size(size))
            return RemovalResult(path=path, outcome=RemovalOutcome.DRY_RUN, bytes_freed=size)

        try:
            _force_delete(target)
        except FileNotFoundError:
            return RemovalResult(path=path, outcome=RemovalOutcome.NOT_FOUND)
        except PermissionError as e:
            self._context.record_permission_denied()
            self._report(silent, "Permission denied removing %s: %s", path, e)
            return RemovalResult(
                path=path,
                outcome=RemovalOutcome.PERMISSION_DENIED,
                error=str(e),
            )
        except OSError as e:
            self._context.record_failure()
            self._report(silent, "Failed to remove %s: %s", path, e)
            return RemovalResult(path=path, outcome=RemovalOutcome.FAILED, error=str(e))

        logger.debug("Removed %s (%s)", path, format_size(size))
        return RemovalResult(path=path, outcome=RemovalOutcome.REMOVED, bytes_freed=size)

    def _expand(self, pattern: str) -> list[str]:
        expanded = expand_path(pattern)
        if has_wildcard(expanded):
            # Only * and ? are wildcards; brackets are literal.
            literal_brackets = expanded.replace("[", "[[]")
            return sorted(glob.glob(literal_brackets, include_hidden=True))
        return [expanded] if os.path.lexists(expanded) else []

    def _walk(
        self,
        directory: str,
        depth: int,
        name_pattern: str,
        age_days: int,
        item_type: ItemType,
        max_depth: int,
    ) -> CleanupResult:
        found = CleanupResult()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.warning("Cannot enumerate %s: %s", directory, e)
            return found

        for entry in entries:
            try:
                is_link = entry.is_symlink() or is_reparse_point(entry.path)
                is_dir = entry.is_dir(follow_symlinks=False) and not is_link
                is_file = entry.is_file(follow_symlinks=False) and not is_link
            except OSError as e:
                logger.warning("Cannot inspect %s: %s", entry.path, e)
                continue

            if _is_sweep_match(entry.name, is_dir, is_file, name_pattern, item_type):
                if not is_older_than(entry.path, age_days):
                    continue
                if should_protect(entry.path):
                    logger.debug("Skipping protected path %s", entry.path)
                    continue
                result = self.remove_path(entry.path, silent=True)
                if result.counts_as_cleaned:
                    found = found + CleanupResult(bytes_freed=result.bytes_freed, items=1)
                continue

            if is_dir and depth < max_depth:
                found = found + self._walk(
                    entry.path, depth + 1, name_pattern, age_days, item_type, max_depth
                )

        return found


def _is_sweep_match(
    name: str,
    is_dir: bool,
    is_file: bool,
    name_pattern: str,
    item_type: ItemType,
) -> bool:
    """Check an entry against a sweep's type filter and name pattern."""
    if item_type == ItemType.FILE and not is_file:
        return False
    if item_type == ItemType.DIRECTORY and not is_dir:
        return False
    if item_type == ItemType.ANY and not (is_file or is_dir):
        return False
    return glob_match(name_pattern, name)
