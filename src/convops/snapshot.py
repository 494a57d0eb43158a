from pathlib import Path

import msgspec
from msgspec import Struct, field

from convops.atomic_io import atomic_write_bytes
from convops.config import DEFAULT_MAX_HISTORY_SIZE
from convops.exceptions import SessionIntegrityError
from convops.models import MAIN_BRANCH_ID, Message, Operation
from convops.serialization import from_json, to_json


class EngineSnapshot(Struct, rename="camel"):
    """
    Plain-data capture of a MessageOperations engine.

    Holds everything needed to rebuild an engine that can keep undoing and
    redoing where the original left off. Callbacks are not part of the state.
    """

    messages: list[Message] = field(default_factory=list)
    current_branch_id: str = MAIN_BRANCH_ID
    history: list[Operation] = field(default_factory=list)
    redo_stack: list[Operation] = field(default_factory=list)
    max_history_size: int = DEFAULT_MAX_HISTORY_SIZE


def dumps_snapshot(snapshot: EngineSnapshot) -> str:
    """
    Compact single-line JSON for an EngineSnapshot.
    """
    return to_json(snapshot).decode("utf-8")


def loads_snapshot(data: str | bytes) -> EngineSnapshot:
    try:
        return from_json(EngineSnapshot, data)
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise SessionIntegrityError(f"Invalid session snapshot: {e}") from e


def save_snapshot(path: Path, snapshot: EngineSnapshot) -> None:
    """
    Atomically save a snapshot to disk.
    """
    atomic_write_bytes(path, to_json(snapshot))


def load_snapshot(path: Path) -> EngineSnapshot:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SessionIntegrityError(f"Could not read session file {path}: {e}") from e
    return loads_snapshot(data)
