"""Per-invocation run state.

A command builds one CleanupContext before any cleanup function runs and
passes it to the executor. The options are frozen for the whole run; only
the failure counters change while deletions are performed.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Flags fixed for the lifetime of one invocation.

    Attributes:
        dry_run: If True, measure and report but never delete.
        debug: If True, failures of silent removals are logged as warnings.
        whitelist: Whitelist pattern snapshot pushed from the store.
    """

    dry_run: bool = False
    debug: bool = False
    whitelist: tuple[str, ...] = ()


@dataclass(slots=True)
class CleanupContext:
    """Shared state for one cleanup run.

    Attributes:
        options: Frozen run options.
        permission_denied_count: Deletions refused by the OS with an access error.
        failed_count: Deletions that failed for any other reason.
    """

    options: RunOptions = field(default_factory=RunOptions)
    permission_denied_count: int = 0
    failed_count: int = 0

    @classmethod
    def create(
        cls,
        *,
        dry_run: bool = False,
        debug: bool = False,
        whitelist: tuple[str, ...] | list[str] = (),
    ) -> "CleanupContext":
        """Create a context from command-level flags and a whitelist snapshot."""
        return cls(options=RunOptions(dry_run=dry_run, debug=debug, whitelist=tuple(whitelist)))

    @property
    def dry_run(self) -> bool:
        """Whether this run only simulates deletions."""
        return self.options.dry_run

    @property
    def debug(self) -> bool:
        """Whether silent failures should be surfaced."""
        return self.options.debug

    @property
    def whitelist(self) -> tuple[str, ...]:
        """Whitelist snapshot for this run."""
        return self.options.whitelist

    def record_permission_denied(self) -> None:
        """Count a deletion refused by the OS."""
        self.permission_denied_count += 1

    def record_failure(self) -> None:
        """Count a deletion that failed for a reason other than permissions."""
        self.failed_count += 1
