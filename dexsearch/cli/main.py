"""CLI entry point for dexsearch.

This module provides the main CLI interface using Typer framework.
"""

import logging

import typer
from typing import Annotated, Optional
from rich.console import Console
from rich.logging import RichHandler

from dexsearch import __version__
from dexsearch.cli.commands import config_init, config_show, lookup, matches
from dexsearch.cli.config import get_config


def version_callback(value: bool) -> None:
    """Display version information and exit.

    Raises:
        typer.Exit: Always exits after displaying version
    """
    if value:
        typer.echo(f"dexsearch version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich; INFO when verbose."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app = typer.Typer(
    help="Fuzzy Pokédex lookup in your terminal",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-v", callback=version_callback, is_eager=True,
                     help="Show version and exit")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log ranking candidates and downloads")
    ] = False,
) -> None:
    """Fuzzy Pokédex lookup in your terminal."""
    configure_logging(verbose or bool(get_config().get("verbose")))


app.command(name="lookup")(lookup)
app.command(name="matches")(matches)
app.command(name="config-show")(config_show)
app.command(name="config-init")(config_init)


def run() -> None:
    """Entry point function for CLI."""
    app()


if __name__ == "__main__":
    run()
