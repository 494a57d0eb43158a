# pyright: standard
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from convops.config import MAX_HISTORY_SIZE_ENV, SESSION_FILE_ENV
from convops.engine import MessageOperations
from tests.helpers import init_session

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(SESSION_FILE_ENV, raising=False)
    monkeypatch.delenv(MAX_HISTORY_SIZE_ENV, raising=False)


@pytest.fixture
def engine() -> MessageOperations:
    return MessageOperations()


@pytest.fixture
def session_with_conversation(tmp_path: Path) -> Iterator[Path]:
    """Creates a session with three messages on the main branch within an isolated filesystem."""
    with runner.isolated_filesystem(temp_dir=tmp_path) as td:
        engine = MessageOperations()
        _ = engine.add_message("user", "Hello")
        _ = engine.add_message("assistant", "Hi! How can I help?")
        _ = engine.add_message("user", "Tell me a joke")

        yield init_session(Path(td), engine)


@pytest.fixture
def empty_session(tmp_path: Path) -> Iterator[Path]:
    """Creates an empty session within an isolated filesystem."""
    with runner.isolated_filesystem(temp_dir=tmp_path) as td:
        yield init_session(Path(td))
