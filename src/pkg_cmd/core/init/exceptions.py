"""
Exceptions raised while initializing a project.

Every InitError is fatal: the CLI prints it and exits with status 1.
InitCancelled is not an error; it signals that the operator declined to
reinitialize and the process should exit successfully.
"""


class InitError(Exception):
    """Base exception for project initialization."""


class ConflictingProjectTypeError(InitError):
    """Both a package.json and a go.mod exist in the project."""

    def __init__(self) -> None:
        super().__init__(
            "You have both a package.json and a go.mod file. We don't know what to do."
        )


class InvalidManifestError(InitError):
    """package.json exists but is not a JSON object."""

    def __init__(self, path: str, detail: str | None = None) -> None:
        self.path = path
        self.detail = detail
        message = f"Your {path} file is invalid"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class GoRequiresGitError(InitError):
    """A Go module exists but the project has no git repository."""

    def __init__(self) -> None:
        super().__init__("You have a go.mod file but no git repo. We don't know what to do.")


class GoRequiresGitInitError(InitError):
    """A new Go project was requested without initializing git."""

    def __init__(self) -> None:
        super().__init__("You need to initialize a git repo to use Go.")


class StepFailureError(InitError):
    """A planned step failed while the plan was executing."""

    def __init__(self, step: str, cause: BaseException) -> None:
        self.step = step
        self.cause = cause
        super().__init__(f"{step} failed: {cause}")


class InitCancelled(Exception):
    """The operator declined to reinitialize an existing project."""
