"""
Plan execution.

Runs each task of a Plan in order, printing a line per group and per
step. The first failing step stops the run; its exception is wrapped in
StepFailureError so the caller can report which step broke.
"""

from __future__ import annotations

import logging

from rich.console import Console

from pkg_cmd.core.init.exceptions import StepFailureError
from pkg_cmd.core.init.plan import Plan, Task

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Set up complete!"


class TaskRunner:
    """
    Executes a Plan sequentially with progress output.

    Args:
        console: Console for progress output
        show_spinner: Show a spinner while a step is running
    """

    def __init__(self, console: Console | None = None, show_spinner: bool = True) -> None:
        self.console = console or Console()
        self.show_spinner = show_spinner
        self.completed: list[str] = []

    def run(self, plan: Plan) -> None:
        """
        Run every task in ``plan``.

        Raises:
            StepFailureError: A step raised; later steps were not run
        """
        for task in plan:
            self._run_task(task, depth=0)
        self.console.print(f"\n[green bold]{SUCCESS_MESSAGE}[/green bold]")

    def _run_task(self, task: Task, depth: int) -> None:
        indent = "  " * depth
        if task.is_group:
            self.console.print(f"{indent}[bold]{task.title}[/bold]")
            for subtask in task.subtasks:
                self._run_task(subtask, depth + 1)
            self.completed.append(task.title)
            return

        try:
            if task.action is not None:
                if self.show_spinner:
                    with self.console.status(f"{indent}{task.title}..."):
                        task.action()
                else:
                    task.action()
        except Exception as e:
            logger.debug("Step %r failed", task.title, exc_info=True)
            self.console.print(f"{indent}[red]x[/red] {task.title}")
            raise StepFailureError(task.title, e) from e

        self.console.print(f"{indent}[green]v[/green] {task.title}")
        self.completed.append(task.title)
