"""
Init command implementation.

``pkg-cmd init`` runs the project-initialization wizard:

1. Probe the directory for package.json / go.mod, readme, license and
   code-of-conduct files, and git configuration
2. Ask the operator the interview questions, using the probe as defaults
3. Plan the file writes and external commands that are still needed
4. Run the plan, stopping at the first failure
"""

import logging
from pathlib import Path

import click
import typer
from pydantic import ValidationError
from rich.console import Console

from pkg_cmd.cli.errors import ExitCode, print_error, print_init_error
from pkg_cmd.core.config.env import load_layered_env
from pkg_cmd.core.config.loader import load_config
from pkg_cmd.core.config.models import PkgCmdConfig
from pkg_cmd.core.init.effects import Effects
from pkg_cmd.core.init.exceptions import InitCancelled, InitError
from pkg_cmd.core.init.plan import Plan, build_plan
from pkg_cmd.core.init.probe import probe_project
from pkg_cmd.core.init.questions import ConsolePrompter, Prompter, resolve
from pkg_cmd.core.init.runner import TaskRunner

console = Console()
logger = logging.getLogger(__name__)


def run_init(
    project_dir: Path,
    *,
    reinitialize: bool = False,
    prompter: Prompter | None = None,
    config: PkgCmdConfig | None = None,
    effects: Effects | None = None,
    runner: TaskRunner | None = None,
) -> Plan:
    """
    Run the full init sequence against ``project_dir``.

    Args:
        project_dir: Directory to initialize
        reinitialize: Skip the "already initialized" confirmation
        prompter: Answer source (defaults to the terminal)
        config: Tool configuration (defaults to the layered config)
        effects: Side-effect handle (defaults to one bound to project_dir)
        runner: Plan executor (defaults to a console TaskRunner)

    Returns:
        The plan that was executed

    Raises:
        InitCancelled: The operator declined to reinitialize
        InitError: Any fatal initialization error
    """
    project_dir = Path(project_dir).resolve()
    # Precedence: OS env > project .env > user .env
    load_layered_env(project_dir=project_dir)
    config = config or load_config(project_dir)

    probe = probe_project(project_dir)
    resolution = resolve(
        probe,
        prompter or ConsolePrompter(console),
        reinitialize=reinitialize,
        default_license=config.default_license,
    )
    logger.debug("Resolved %s (fresh=%s)", resolution.delta, resolution.fresh)

    owned_effects = effects is None
    active_effects = effects or Effects(project_dir, timeout=config.http.timeout)
    try:
        plan = build_plan(probe, resolution, active_effects, config)
        console.print()
        (runner or TaskRunner(console)).run(plan)
    finally:
        if owned_effects:
            active_effects.close()

    return plan


def main(
    reinitialize: bool = typer.Option(
        False,
        "--reinitialize",
        "-r",
        help="Reinitialize the project without asking for confirmation",
    ),
    project_dir: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Project directory to initialize (default: current directory)",
        file_okay=False,
        dir_okay=True,
        exists=True,
    ),
) -> None:
    """
    Set up a Node or Go project.

    Asks for the project's language, name, description, author, license
    and git remote, then creates or updates package.json / go.mod,
    LICENSE, CODE_OF_CONDUCT.md, README.md and the lint, format, test and
    release tooling configs.

    Examples:
        pkg-cmd init                  # Initialize the current directory
        pkg-cmd init --reinitialize   # Refresh an existing project
        pkg-cmd init --dir ../widget  # Initialize another directory
    """
    try:
        run_init(project_dir, reinitialize=reinitialize)
    except InitCancelled:
        raise typer.Exit(ExitCode.SUCCESS)
    except InitError as e:
        print_init_error(e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except ValidationError as e:
        print_error("Invalid pkg-cmd configuration", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except (KeyboardInterrupt, click.Abort):
        console.print("\n[yellow]Aborted[/yellow]")
        raise typer.Exit(ExitCode.SIGINT)
