"""Check and rules command implementations.

Shows the safety gate's decision for one or more paths, and the rules it
applies, without touching the filesystem.
"""

from typing import Annotated

import typer
from rich.table import Table

from winsweep.safety.classifier import protection_patterns
from winsweep.safety.gate import GateDecision, validate_for_deletion
from winsweep.safety.globmatch import expand_path
from winsweep.utils.formatting import console
from winsweep.whitelist.store import WhitelistStore


def check_paths(
    paths: Annotated[
        list[str],
        typer.Argument(help="Paths to run through the safety gate."),
    ],
) -> None:
    """Run paths through the safety gate and show the decision.

    Exits with code 1 if any path would be refused.

    Examples:
        winsweep check "C:\\Windows\\Temp"
        winsweep check "%LOCALAPPDATA%\\Temp" "C:\\Users\\me\\Documents"
    """
    whitelist = WhitelistStore().patterns
    decisions = [validate_for_deletion(expand_path(path), whitelist) for path in paths]

    _print_decisions(decisions)

    if any(not d.allowed for d in decisions):
        raise typer.Exit(code=1)


def show_rules() -> None:
    """List every rule the safety gate applies.

    Built-in critical and protected-data rules come first, followed by the
    whitelist patterns currently in effect.
    """
    rules = (*protection_patterns(), *WhitelistStore().tagged())

    table = Table(
        title="Protection Rules",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category", style="protected", no_wrap=True)
    table.add_column("Pattern", overflow="fold")

    for rule in rules:
        table.add_row(rule.category.value, rule.pattern)

    console.print(table)
    console.print(f"\n[dim]{len(rules)} rule(s)[/dim]")


def _print_decisions(decisions: list[GateDecision]) -> None:
    """Display gate decisions as a Rich table."""
    table = Table(
        title="Safety Gate",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Decision", width=10)
    table.add_column("Reason", style="muted")

    for d in decisions:
        status = "[success]allowed[/]" if d.allowed else "[protected]refused[/]"
        table.add_row(d.path, status, d.message if not d.allowed else "-")

    console.print(table)
