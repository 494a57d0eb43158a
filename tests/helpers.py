# pyright: standard

from pathlib import Path

from convops.config import SESSION_FILE_NAME
from convops.engine import MessageOperations
from convops.snapshot import load_snapshot, save_snapshot


def init_session(project_root: Path, engine: MessageOperations | None = None) -> Path:
    """
    Test helper to write a session file for ``engine`` (or an empty engine) into project_root.
    Returns the session file path.
    """
    session_file = project_root / SESSION_FILE_NAME
    save_snapshot(session_file, (engine or MessageOperations()).snapshot())
    return session_file


def load_engine(session_file: Path) -> MessageOperations:
    return MessageOperations.from_snapshot(load_snapshot(session_file))


def message_ids(session_file: Path) -> list[str]:
    return [m.id for m in load_engine(session_file).messages]
