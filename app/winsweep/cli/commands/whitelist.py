"""Whitelist management commands.

Provides commands to list, add, remove and reset the glob patterns that
protect paths from cleanup.
"""

from typing import Annotated

import typer
from rich.table import Table

from winsweep.core.paths import ensure_config_dir
from winsweep.safety.classifier import ProtectionCategory
from winsweep.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from winsweep.whitelist.store import DEFAULT_WHITELIST_PATTERNS, WhitelistStore

app = typer.Typer(
    help="Manage protected path patterns.",
    invoke_without_command=True,
    no_args_is_help=True,
)

_SOURCE_LABELS: dict[ProtectionCategory, str] = {
    ProtectionCategory.WHITELIST_DEFAULT: "default",
    ProtectionCategory.WHITELIST_CUSTOM: "custom",
}


@app.command("list")
def list_patterns() -> None:
    """Show the patterns currently in effect."""
    store = WhitelistStore()

    table = Table(
        title="Whitelist",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Pattern", no_wrap=True)
    table.add_column("Source", width=8, style="muted")

    for rule in store.tagged():
        table.add_row(rule.pattern, _SOURCE_LABELS[rule.category])

    console.print(table)
    console.print(f"\n[dim]Stored in {store.path}[/dim]")


@app.command()
def add(
    pattern: Annotated[str, typer.Argument(help="Glob pattern to protect.")],
) -> None:
    """Add a pattern to the whitelist."""
    store = _store_for_update()
    try:
        added = store.add(pattern)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not added:
        print_info(f"Already whitelisted: {pattern}")
        return
    _warn_if_not_persisted(store)
    print_success(f"Added to whitelist: {pattern.strip()}")


@app.command()
def remove(
    pattern: Annotated[str, typer.Argument(help="Pattern to remove.")],
) -> None:
    """Remove a pattern from the whitelist."""
    store = _store_for_update()
    if not store.remove(pattern):
        print_warning(f"Pattern not in whitelist: {pattern}")
        return
    _warn_if_not_persisted(store)
    print_success(f"Removed from whitelist: {pattern.strip()}")


@app.command()
def reset(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Restore the built-in default patterns."""
    if not yes:
        confirmed = typer.confirm("Replace the whitelist with the defaults?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    store = _store_for_update()
    store.reset()
    _warn_if_not_persisted(store)
    print_success(f"Whitelist reset to {len(DEFAULT_WHITELIST_PATTERNS)} default pattern(s).")


@app.command()
def stats() -> None:
    """Show how many patterns are defaults and how many are custom."""
    result = WhitelistStore().stats()
    console.print(
        f"Total: [info]{result.total}[/]  "
        f"Default: [muted]{result.default}[/]  "
        f"Custom: [success]{result.custom}[/]"
    )


@app.command()
def path() -> None:
    """Print the whitelist file location."""
    typer.echo(str(WhitelistStore().path))


def _warn_if_not_persisted(store: WhitelistStore) -> None:
    """Tell the user when the change only exists for this session."""
    if not store.persisted:
        print_warning(f"Change not saved: could not write {store.path}")


def _store_for_update() -> WhitelistStore:
    """Open the default store, creating the config directory if needed."""
    try:
        ensure_config_dir()
    except RuntimeError as e:
        print_warning(str(e))
    return WhitelistStore()
