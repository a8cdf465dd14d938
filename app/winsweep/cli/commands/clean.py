"""Clean command implementation.

Runs the built-in cleanup targets through the deletion executor and
reports how much space was (or would be) reclaimed.
"""

from typing import Annotated

import typer

from winsweep.cleanup.executor import DeletionExecutor
from winsweep.cleanup.models import CleanupResult
from winsweep.core.context import CleanupContext
from winsweep.targets.catalog import ALL_GROUPS, TargetGroup, get_candidates, get_sweep_targets
from winsweep.utils.formatting import (
    console,
    format_size,
    print_info,
    print_success,
    print_warning,
)
from winsweep.whitelist.store import WhitelistStore

app = typer.Typer(
    help="Clean cache and temp locations.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_targets(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be deleted without deleting anything.",
        ),
    ] = False,
    targets: Annotated[
        list[TargetGroup] | None,
        typer.Option(
            "--target",
            "-t",
            help="Target group to clean (repeatable): system, browsers, developer.",
            case_sensitive=False,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt.",
        ),
    ] = False,
) -> None:
    """Clean cache and temp files from well-known locations.

    Every path passes the safety gate first: critical system directories,
    protected application data and whitelisted paths are never touched.

    Examples:
        winsweep clean --dry-run              # Preview what would be cleaned
        winsweep clean -t browsers -t developer
        winsweep clean --yes                  # Clean without confirmation
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    groups = tuple(targets) if targets else ALL_GROUPS
    group_names = ", ".join(g.value for g in groups)

    if not dry_run and not yes:
        confirmed = typer.confirm(f"\nClean {group_names} targets?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    debug = bool(ctx.obj.get("debug")) if isinstance(ctx.obj, dict) else False
    store = WhitelistStore()
    context = CleanupContext.create(dry_run=dry_run, debug=debug, whitelist=store.patterns)
    executor = DeletionExecutor(context)

    results: list[CleanupResult] = []
    for candidate in get_candidates(groups):
        results.append(executor.clean_candidate(candidate))
    for target in get_sweep_targets(groups):
        results.append(executor.sweep(target))

    _print_results(results, dry_run)

    if context.permission_denied_count:
        print_warning(
            f"{context.permission_denied_count} item(s) skipped: permission denied "
            "(files in use or requiring administrator rights)."
        )
    if context.failed_count:
        print_warning(f"{context.failed_count} item(s) could not be removed.")


# === Private helper functions ===


def _print_results(results: list[CleanupResult], dry_run: bool) -> None:
    """Print one line per target that freed anything, then the total."""
    verb = "Would clean" if dry_run else "Cleaned"
    style = "dry_run" if dry_run else "success"

    for result in results:
        if result.is_empty:
            continue
        console.print(
            f"  [{style}]{verb}[/] {result.description} "
            f"[size]{format_size(result.bytes_freed)}[/] "
            f"[muted]({result.items} item(s))[/]"
        )

    total = CleanupResult.total(results)
    if total.is_empty:
        print_success("Nothing to clean.")
        return

    if dry_run:
        print_info(f"Dry-run: {format_size(total.bytes_freed)} could be reclaimed.")
    else:
        print_success(f"Reclaimed {format_size(total.bytes_freed)} in total.")
