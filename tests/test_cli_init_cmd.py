"""
Tests for the `pkg-cmd init` and `pkg-cmd version` commands.
"""

import io
from unittest.mock import patch

import click
import pytest
from rich.console import Console
from typer.testing import CliRunner

from pkg_cmd import __version__
from pkg_cmd.cli import app
from pkg_cmd.cli.init_cmd import run_init
from pkg_cmd.core.init.exceptions import (
    ConflictingProjectTypeError,
    GoRequiresGitError,
    InitCancelled,
    StepFailureError,
)
from pkg_cmd.core.init.runner import TaskRunner

runner = CliRunner()


def _quiet_runner() -> TaskRunner:
    return TaskRunner(Console(file=io.StringIO()), show_spinner=False)


class TestVersion:
    def test_prints_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"pkg-cmd version {__version__}" in result.output


class TestInitExitCodes:
    """Exit status for each way run_init can end."""

    def test_success(self, project_dir):
        with patch("pkg_cmd.cli.init_cmd.run_init") as mock_run:
            result = runner.invoke(app, ["init", "--dir", str(project_dir), "-r"])

        assert result.exit_code == 0
        mock_run.assert_called_once_with(project_dir, reinitialize=True)

    def test_cancelled_is_success(self, project_dir):
        with patch("pkg_cmd.cli.init_cmd.run_init", side_effect=InitCancelled()):
            result = runner.invoke(app, ["init", "--dir", str(project_dir)])

        assert result.exit_code == 0

    @pytest.mark.parametrize(
        "error, expected",
        [
            (ConflictingProjectTypeError(), "both a package.json and a go.mod"),
            (GoRequiresGitError(), "no git repo"),
            (StepFailureError("Create .gitignore", RuntimeError("offline")), "Create .gitignore"),
        ],
    )
    def test_init_errors(self, project_dir, error, expected):
        with patch("pkg_cmd.cli.init_cmd.run_init", side_effect=error):
            result = runner.invoke(app, ["init", "--dir", str(project_dir)])

        assert result.exit_code == 1
        assert expected in result.output

    @pytest.mark.parametrize("interrupt", [KeyboardInterrupt(), click.Abort()])
    def test_interrupt(self, project_dir, interrupt):
        with patch("pkg_cmd.cli.init_cmd.run_init", side_effect=interrupt):
            result = runner.invoke(app, ["init", "--dir", str(project_dir)])

        assert result.exit_code == 130

    def test_invalid_config(self, project_dir):
        (project_dir / ".pkg-cmd.json").write_text('{"sources": {"license_text": "static"}}')

        result = runner.invoke(app, ["init", "--dir", str(project_dir)])

        assert result.exit_code == 1
        assert "Invalid pkg-cmd configuration" in result.output

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["init", "--dir", str(tmp_path / "nope")])

        assert result.exit_code == 2


class TestInitInteractive:
    """Drive the real prompts through CliRunner input."""

    def test_reinitialize_node_project(self, node_project, make_effects):
        effects = make_effects(node_project)

        with patch("pkg_cmd.cli.init_cmd.Effects", return_value=effects):
            result = runner.invoke(
                app,
                ["init", "--dir", str(node_project), "--reinitialize"],
                input="\n" * 7,
            )

        assert result.exit_code == 0, result.output
        assert "What is the git remote URL?" in result.output
        assert "Set up complete!" in result.output
        assert (node_project / "README.md").exists()
        assert (node_project / "CODE_OF_CONDUCT.md").exists()
        assert ["npm", "pkg", "set", "scripts.lint=pkg-cmd lint"] in effects.commands
        assert not any(command[:2] == ["git", "init"] for command in effects.commands)

    def test_declining_reinitialize(self, node_project, make_effects):
        effects = make_effects(node_project)

        with patch("pkg_cmd.cli.init_cmd.Effects", return_value=effects):
            result = runner.invoke(app, ["init", "--dir", str(node_project)], input="n\n")

        assert result.exit_code == 0
        assert "already initialized" in result.output
        assert effects.commands == []
        assert not (node_project / "README.md").exists()


class TestRunInit:
    """run_init with injected collaborators."""

    def test_go_reinitialize(
        self, go_project, make_prompter, make_effects, config, default_answer, mit_text
    ):
        prompter = make_prompter([True, default_answer, "", "Jane Doe", "MIT", False, False])
        effects = make_effects(
            go_project,
            downloads={config.sources.license_text.format(license_id="MIT"): mit_text},
        )

        plan = run_init(
            go_project,
            prompter=prompter,
            config=config,
            effects=effects,
            runner=_quiet_runner(),
        )

        assert plan.titles == ["License"]
        assert effects.commands == []
        assert "Jane Doe" in (go_project / "LICENSE").read_text()

    def test_failure_propagates(self, project_dir, make_prompter, make_effects, config):
        prompter = make_prompter(
            ["Node", True, "", True, "demo", "", "A", "MIT", False, False]
        )
        effects = make_effects(project_dir, fail_on={("git", "init")})

        with pytest.raises(StepFailureError) as exc_info:
            run_init(
                project_dir,
                prompter=prompter,
                config=config,
                effects=effects,
                runner=_quiet_runner(),
            )

        assert exc_info.value.step == "Initialize git repository"
        assert effects.commands == [["git", "init"]]
        assert not (project_dir / ".gitignore").exists()

    def test_conflicting_manifests_before_any_question(
        self, project_dir, make_prompter, make_effects, config
    ):
        (project_dir / "package.json").write_text('{"name": "demo"}')
        (project_dir / "go.mod").write_text("module example.com/demo\n")
        prompter = make_prompter([])
        effects = make_effects(project_dir)

        with pytest.raises(ConflictingProjectTypeError):
            run_init(
                project_dir,
                prompter=prompter,
                config=config,
                effects=effects,
                runner=_quiet_runner(),
            )

        assert prompter.calls == []
        assert effects.commands == []

    def test_env_file_read_from_project_dir(
        self, project_dir, make_prompter, make_effects, default_answer, monkeypatch
    ):
        (project_dir / ".env").write_text("PKG_CMD_DEFAULT_LICENSE=ISC\n")
        # Registered so monkeypatch removes it after run_init exports it
        monkeypatch.setenv("PKG_CMD_DEFAULT_LICENSE", "placeholder")
        monkeypatch.delenv("PKG_CMD_DEFAULT_LICENSE")
        prompter = make_prompter(["Node", False, ""] + [default_answer] * 6)

        run_init(
            project_dir,
            prompter=prompter,
            effects=make_effects(project_dir),
            runner=_quiet_runner(),
        )

        defaults = {message: default for _, message, default in prompter.calls}
        assert defaults["What license are you using?"] == "ISC"
