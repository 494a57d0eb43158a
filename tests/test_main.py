# pyright: standard

from pathlib import Path

from pytest_mock import MockerFixture
from typer.testing import CliRunner

from convops.main import app

runner = CliRunner()


def test_no_command_shows_help() -> None:
    # GIVEN the app
    # WHEN `convops` is run with no command
    result = runner.invoke(app, [])

    # THEN the help text lists the commands
    assert result.exit_code in (0, 2)
    for command in ("init", "add", "edit", "delete | rm", "branch", "switch", "undo", "redo", "history"):
        assert f" {command} " in result.output


def test_missing_session_is_reported(tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        # GIVEN a directory without a session
        # WHEN a command needing a session is run
        result = runner.invoke(app, ["log"])

        # THEN a friendly error is printed and the exit code is 1
        assert result.exit_code == 1
        assert "Error: No session file '.convops.json' found." in result.stderr


def test_relative_session_env_var_is_rejected(tmp_path: Path) -> None:
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["log"], env={"CONVOPS_SESSION_FILE": "relative.json"})

        assert result.exit_code == 1
        assert "CONVOPS_SESSION_FILE must be an absolute path" in result.stderr


def test_session_env_var_points_at_session(session_with_conversation: Path, tmp_path: Path) -> None:
    # GIVEN a session and a different working directory
    other_dir = tmp_path / "elsewhere"
    other_dir.mkdir()

    # WHEN the session is selected through the environment
    with runner.isolated_filesystem(temp_dir=other_dir):
        result = runner.invoke(
            app, ["log", "--json"], env={"CONVOPS_SESSION_FILE": str(session_with_conversation.resolve())}
        )

    # THEN it is used
    assert result.exit_code == 0
    assert "Tell me a joke" in result.stdout


def test_unexpected_errors_are_reported(session_with_conversation: Path, mocker: MockerFixture) -> None:
    # GIVEN a failure deep inside the engine
    _ = mocker.patch("convops.engine.MessageOperations.undo", side_effect=RuntimeError("boom"))

    # WHEN a command triggers it
    result = runner.invoke(app, ["undo"])

    # THEN a generic error is printed
    assert result.exit_code == 1
    assert "Unexpected Internal Error" in result.stderr
    assert "boom" in result.stderr


def test_verbose_logs_engine_operations(empty_session: Path) -> None:
    # WHEN a message is added with --verbose
    result = runner.invoke(app, ["--verbose", "add", "user", "Hello"])

    # THEN the engine's debug log reaches stderr
    assert result.exit_code == 0
    assert "Added user message" in result.stderr


def test_unknown_command_is_not_matched_by_alias(empty_session: Path) -> None:
    # WHEN a name that is neither a command nor an alias is used
    result = runner.invoke(app, ["remove", "msg_1"])

    # THEN click reports a usage error
    assert result.exit_code == 2
    assert "No such command" in result.output
