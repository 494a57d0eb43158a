"""
Conversation message-operations engine.

Provides:
- Message and operation records (msgspec structs)
- MessageOperations: add/edit/delete/regenerate/branch with bounded undo/redo
- Snapshot helpers for persisting an engine as JSON
"""

from convops.engine import MessageOperations, normalize_message
from convops.exceptions import ConfigurationError, ConvopsError, SessionIntegrityError
from convops.models import (
    MAIN_BRANCH_ID,
    AddOperation,
    BranchOperation,
    DeleteOperation,
    EditOperation,
    Message,
    Operation,
    RegenerateOperation,
    RemovedMessage,
    Role,
)
from convops.snapshot import EngineSnapshot, dumps_snapshot, load_snapshot, loads_snapshot, save_snapshot

__all__ = [
    "MAIN_BRANCH_ID",
    "Role",
    "Message",
    "Operation",
    "AddOperation",
    "EditOperation",
    "DeleteOperation",
    "RegenerateOperation",
    "RemovedMessage",
    "BranchOperation",
    "MessageOperations",
    "normalize_message",
    "EngineSnapshot",
    "dumps_snapshot",
    "loads_snapshot",
    "save_snapshot",
    "load_snapshot",
    "ConvopsError",
    "ConfigurationError",
    "SessionIntegrityError",
]
