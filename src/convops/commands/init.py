import sys
from pathlib import Path

import typer

from convops.config import SESSION_FILE_NAME, EngineConfig, max_history_size_from_env
from convops.snapshot import EngineSnapshot, save_snapshot


def init(
    max_history: int | None,
) -> None:
    session_file = Path.cwd() / SESSION_FILE_NAME
    if session_file.exists():
        print(
            f"Error: Session file '{session_file}' already exists in this directory.",
            file=sys.stderr,
        )
        raise typer.Exit(code=1)

    if max_history is None:
        max_history = max_history_size_from_env()
    config = EngineConfig(max_history_size=max_history)

    save_snapshot(session_file, EngineSnapshot(max_history_size=config.max_history_size))

    print(f"Initialized session file: {session_file}")
