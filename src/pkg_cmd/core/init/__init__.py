"""
Project initialization: probe the directory, interview the operator,
plan the changes, and apply them.
"""

from .effects import CommandError, Effects, FetchError
from .exceptions import (
    ConflictingProjectTypeError,
    GoRequiresGitError,
    GoRequiresGitInitError,
    InitCancelled,
    InitError,
    InvalidManifestError,
    StepFailureError,
)
from .gomod import module_path_from_remote, parse_go_mod
from .models import (
    ConfigDelta,
    FileRecord,
    GoModule,
    Language,
    ProbedState,
    ProbeResult,
    Resolution,
)
from .plan import Plan, Task, build_plan
from .probe import probe_project
from .questions import ConsolePrompter, Prompter, resolve
from .runner import TaskRunner

__all__ = [
    # Models
    "ConfigDelta",
    "FileRecord",
    "GoModule",
    "Language",
    "Plan",
    "ProbedState",
    "ProbeResult",
    "Resolution",
    "Task",
    # Errors
    "CommandError",
    "ConflictingProjectTypeError",
    "FetchError",
    "GoRequiresGitError",
    "GoRequiresGitInitError",
    "InitCancelled",
    "InitError",
    "InvalidManifestError",
    "StepFailureError",
    # Operations
    "ConsolePrompter",
    "Effects",
    "Prompter",
    "TaskRunner",
    "build_plan",
    "module_path_from_remote",
    "parse_go_mod",
    "probe_project",
    "resolve",
]
