"""
Standardized error handling and exit codes for the pkg-cmd CLI.

Errors are written to stderr with a short reason and, where there is
one, the action that fixes them.
"""

from enum import IntEnum

from rich.console import Console

from pkg_cmd.core.init.exceptions import (
    ConflictingProjectTypeError,
    GoRequiresGitError,
    GoRequiresGitInitError,
    InitError,
    InvalidManifestError,
    StepFailureError,
)

err_console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for pkg-cmd operations."""

    SUCCESS = 0
    """Operation completed successfully (or the operator chose to stop)."""

    GENERAL_ERROR = 1
    """Any fatal error."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
    console: Console | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
        console: Console to print to (defaults to stderr)

    Example:
        >>> print_error(
        ...     "Not a git repository",
        ...     reason="Go modules need a git remote",
        ...     solution="git init",
        ... )
    """
    console = console or err_console
    console.print(f"[red]Error:[/red] {problem}", highlight=False)

    if reason:
        console.print(f"[dim]{reason}[/dim]", highlight=False)

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}", highlight=False)


def print_init_error(error: InitError, console: Console | None = None) -> None:
    """Print an initialization error with guidance matching its kind."""
    if isinstance(error, ConflictingProjectTypeError):
        print_error(
            str(error),
            reason="A project is either a Node package or a Go module, not both",
            solution="remove the package.json or the go.mod and run pkg-cmd init again",
            console=console,
        )
    elif isinstance(error, InvalidManifestError):
        print_error(
            str(error),
            reason="package.json must contain a JSON object",
            solution="fix the syntax error in package.json",
            console=console,
        )
    elif isinstance(error, GoRequiresGitError):
        print_error(
            str(error),
            reason="Go module paths are derived from the git remote",
            solution="git init && git remote add origin <url>",
            console=console,
        )
    elif isinstance(error, GoRequiresGitInitError):
        print_error(
            str(error),
            reason="Go module paths are derived from the git remote",
            solution="run pkg-cmd init again and answer yes to initializing git",
            console=console,
        )
    elif isinstance(error, StepFailureError):
        print_error(
            f"Step '{error.step}' failed",
            reason=str(error.cause),
            console=console,
        )
    else:
        print_error(str(error), console=console)


__all__ = [
    "ExitCode",
    "err_console",
    "print_error",
    "print_init_error",
]
