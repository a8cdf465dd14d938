"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from winsweep import __version__
from winsweep.cli.commands import check, clean, whitelist
from winsweep.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="winsweep",
    help="Safe cache and temp cleanup for Windows.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"winsweep version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            "-d",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """winsweep - Safe cache and temp cleanup for Windows.

    Every path is checked against critical system directories, protected
    application data and your whitelist before anything is deleted.
    """
    configure_logging(debug)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


# Register commands
app.add_typer(clean.app, name="clean")
app.command(name="check")(check.check_paths)
app.command(name="rules")(check.show_rules)
app.add_typer(whitelist.app, name="whitelist")


if __name__ == "__main__":
    app()
