import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from convops.config import SESSION_FILE_ENV, SESSION_FILE_NAME
from convops.engine import MessageOperations
from convops.exceptions import ConfigurationError, SessionError
from convops.snapshot import load_snapshot, save_snapshot


def find_session_file() -> Path | None:
    """
    Finds the session file by checking CONVOPS_SESSION_FILE first, then searching
    upward from the current directory.
    """
    if env_path := os.environ.get(SESSION_FILE_ENV):
        path = Path(env_path)
        if not path.is_absolute():
            raise ConfigurationError(f"{SESSION_FILE_ENV} must be an absolute path")
        if not path.exists():
            raise ConfigurationError(f"Session file specified in {SESSION_FILE_ENV} does not exist: {path}")
        return path

    current = Path.cwd()
    for parent in [current, *current.parents]:
        check = parent / SESSION_FILE_NAME
        if check.is_file():
            return check
    return None


class Session:
    """A persisted engine bound to its snapshot file."""

    file_path: Path
    engine: MessageOperations

    def __init__(self, file_path: Path, engine: MessageOperations) -> None:
        self.file_path = file_path
        self.engine = engine

    @classmethod
    def load_active(cls) -> "Session":
        session_file = find_session_file()
        if session_file is None:
            raise SessionError(f"No session file '{SESSION_FILE_NAME}' found. Run 'convops init' first.")
        return cls.load(session_file)

    @classmethod
    def load(cls, file_path: Path) -> "Session":
        return cls(file_path, MessageOperations.from_snapshot(load_snapshot(file_path)))

    def save(self) -> None:
        save_snapshot(self.file_path, self.engine.snapshot())


@contextmanager
def active_session() -> Iterator[Session]:
    """
    Loads the active session and saves it back when the block completes.
    Nothing is written if the block raises.
    """
    session = Session.load_active()
    yield session
    session.save()
