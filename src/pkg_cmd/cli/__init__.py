"""
pkg-cmd CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from pkg_cmd import __version__
from pkg_cmd.cli import init_cmd

app = typer.Typer(
    name="pkg-cmd",
    help="Set of scripts to help with common package tasks. Supports Node and Go.",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for pkg-cmd commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    pkg-cmd - common package tasks for Node and Go.

    Quick Start:
        pkg-cmd init                 # Set up the current directory
        pkg-cmd init --reinitialize  # Refresh an existing project
    """
    setup_logging(debug)

    ctx.obj = {"debug": debug}


app.command(name="init")(init_cmd.main)


@app.command()
def version() -> None:
    """Show pkg-cmd version and exit."""
    console.print(f"pkg-cmd version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
