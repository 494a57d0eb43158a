"""
The message-operations engine: a user-editable message timeline with edit
versioning, conversation branching and a bounded undo/redo log.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import msgspec
from msgspec.structs import replace

from convops.branches import BranchIndex, fork_prefix, group_by_branch
from convops.config import DEFAULT_MAX_HISTORY_SIZE, EngineConfig
from convops.exceptions import ConfigurationError
from convops.history import OperationLog
from convops.ids import generate_branch_id, generate_message_id, now_ms
from convops.models import (
    MAIN_BRANCH_ID,
    AddOperation,
    BranchOperation,
    DeleteOperation,
    EditOperation,
    Message,
    Operation,
    RegenerateOperation,
    Role,
)
from convops.serialization import convert
from convops.snapshot import EngineSnapshot
from convops.store import MessageStore

logger = logging.getLogger(__name__)

type EditCallback = Callable[[str, str], None]
type MessageCallback = Callable[[str], None]
type BranchCallback = Callable[[str, str], None]


_SNAKE_TO_WIRE = {f.name: f.encode_name for f in msgspec.structs.fields(Message) if f.name != f.encode_name}


def normalize_message(raw: Message | Mapping[str, Any]) -> Message:
    """
    Coerces a seed message into a complete Message.

    Mappings may use the camelCase wire names (``branchId``, ``parentId``...) or the
    Python attribute names (``branch_id``...). A missing, ``None`` or empty id,
    timestamp or branch id is filled in.
    """
    match raw:
        case Message():
            message = raw
        case Mapping():
            data = {_SNAKE_TO_WIRE.get(key, key): value for key, value in raw.items()}
            for key, missing in (("id", ""), ("timestamp", 0), ("branchId", MAIN_BRANCH_ID)):
                if data.get(key) is None:
                    data[key] = missing
            try:
                message = convert(data, Message)
            except msgspec.ValidationError as e:
                raise ConfigurationError(f"Invalid initial message: {e}") from e
        case _:
            raise ConfigurationError(f"Initial messages must be Message or mapping, got {type(raw)!r}")

    return replace(
        message,
        id=message.id or generate_message_id(),
        timestamp=message.timestamp or now_ms(),
        branch_id=message.branch_id or MAIN_BRANCH_ID,
    )


class MessageOperations:
    """
    Owns one conversation: its message store, active branch pointer and
    operation log. Instances share nothing, so one engine per open conversation
    needs no synchronisation.

    Unknown message ids are never an error: the affected call returns ``False``
    (or ``None``), leaves the state untouched and fires no callback. Callbacks
    run only after the mutation and its log entry are committed.
    """

    on_edit: EditCallback | None
    on_delete: MessageCallback | None
    on_regenerate: MessageCallback | None
    on_branch: BranchCallback | None

    _store: MessageStore
    _branches: BranchIndex
    _log: OperationLog

    def __init__(
        self,
        initial_messages: Iterable[Message | Mapping[str, Any]] = (),
        *,
        max_history_size: int = DEFAULT_MAX_HISTORY_SIZE,
        on_edit: EditCallback | None = None,
        on_delete: MessageCallback | None = None,
        on_regenerate: MessageCallback | None = None,
        on_branch: BranchCallback | None = None,
    ) -> None:
        config = EngineConfig(max_history_size=max_history_size)
        self._store = MessageStore(normalize_message(m) for m in initial_messages)
        self._branches = BranchIndex()
        self._log = OperationLog(config.max_history_size)
        self.on_edit = on_edit
        self.on_delete = on_delete
        self.on_regenerate = on_regenerate
        self.on_branch = on_branch

    @classmethod
    def from_snapshot(
        cls,
        snapshot: EngineSnapshot,
        *,
        on_edit: EditCallback | None = None,
        on_delete: MessageCallback | None = None,
        on_regenerate: MessageCallback | None = None,
        on_branch: BranchCallback | None = None,
    ) -> MessageOperations:
        engine = cls(
            snapshot.messages,
            max_history_size=snapshot.max_history_size,
            on_edit=on_edit,
            on_delete=on_delete,
            on_regenerate=on_regenerate,
            on_branch=on_branch,
        )
        engine._branches.switch(snapshot.current_branch_id)
        engine._log = OperationLog(snapshot.max_history_size, snapshot.history, snapshot.redo_stack)
        return engine

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            messages=self._store.snapshot(),
            current_branch_id=self._branches.active,
            history=list(self._log.history),
            redo_stack=list(self._log.redo_stack),
            max_history_size=self._log.max_size,
        )

    # ---------- Query surface ----------

    @property
    def messages(self) -> list[Message]:
        """Messages of the active branch, in store order."""
        return self._branches.visible(self._store)

    @property
    def current_branch_id(self) -> str:
        return self._branches.active

    @property
    def can_undo(self) -> bool:
        return self._log.can_undo

    @property
    def can_redo(self) -> bool:
        return self._log.can_redo

    @property
    def history(self) -> tuple[Operation, ...]:
        return self._log.history

    @property
    def redo_stack(self) -> tuple[Operation, ...]:
        return self._log.redo_stack

    @property
    def max_history_size(self) -> int:
        return self._log.max_size

    def get_message(self, message_id: str) -> Message | None:
        index = self._resolve(message_id)
        return None if index is None else self._store[index]

    def get_messages_up_to(self, message_id: str) -> list[Message]:
        """
        Returns the active branch's messages up to and including ``message_id``,
        or an empty list if the id is not on the active branch.
        """
        visible = self.messages
        for i, msg in enumerate(visible):
            if msg.id == message_id:
                return visible[: i + 1]
        return []

    def get_branches(self) -> dict[str, list[Message]]:
        return group_by_branch(self._store)

    # ---------- Commands ----------

    def add_message(
        self,
        role: Role,
        content: str,
        *,
        branch_id: str | None = None,
        parent_id: str | None = None,
        is_editing: bool = False,
        original_content: str | None = None,
        version: int | None = None,
    ) -> str:
        """
        Appends a new message and returns its generated id.

        Edit lineage fields may be supplied when importing a message that was
        already edited elsewhere; they are stored as given.
        """
        message = Message(
            id=generate_message_id(),
            role=role,
            content=content,
            timestamp=now_ms(),
            branch_id=branch_id or self._branches.active,
            parent_id=parent_id,
            is_editing=is_editing,
            original_content=original_content,
            version=version,
        )
        index = self._store.append(message)
        self._record(AddOperation(message_id=message.id, timestamp=now_ms(), message=message, index=index))
        logger.debug("Added %s message %s to branch %s", role, message.id, message.branch_id)
        return message.id

    def edit_message(self, message_id: str, new_content: str) -> bool:
        index = self._resolve(message_id)
        if index is None:
            logger.debug("Edit ignored: unknown message %s", message_id)
            return False

        previous = self._store[index]
        updated = replace(
            previous,
            content=new_content,
            original_content=previous.content if previous.original_content is None else previous.original_content,
            version=(previous.version or 0) + 1,
            is_editing=False,
        )
        _ = self._store.replace(index, updated)
        self._record(
            EditOperation(message_id=message_id, timestamp=now_ms(), previous_state=previous, new_state=updated)
        )
        logger.debug("Edited message %s (version %d)", message_id, updated.version)

        if self.on_edit is not None:
            self.on_edit(message_id, new_content)
        return True

    def start_editing(self, message_id: str) -> bool:
        return self._set_editing(message_id, True)

    def cancel_editing(self, message_id: str) -> bool:
        return self._set_editing(message_id, False)

    def regenerate_message(self, message_id: str) -> bool:
        """
        Records a regenerate request and notifies ``on_regenerate``.

        The store is not touched; the collaborator producing the new content is
        expected to call ``edit_message`` once it is available.
        """
        index = self._resolve(message_id)
        if index is None:
            logger.debug("Regenerate ignored: unknown message %s", message_id)
            return False

        self._record(
            RegenerateOperation(message_id=message_id, timestamp=now_ms(), previous_state=self._store[index])
        )
        logger.debug("Regenerate requested for message %s", message_id)

        if self.on_regenerate is not None:
            self.on_regenerate(message_id)
        return True

    def delete_message(self, message_id: str) -> bool:
        removed = self._store.remove_all(message_id)
        if not removed:
            logger.debug("Delete ignored: unknown message %s", message_id)
            return False

        self._record(DeleteOperation(message_id=message_id, timestamp=now_ms(), removed=tuple(removed)))
        logger.debug(
            "Deleted message %s from %s",
            message_id,
            ", ".join(entry.message.branch_id for entry in removed),
        )

        if self.on_delete is not None:
            self.on_delete(message_id)
        return True

    def branch_conversation(self, message_id: str) -> str | None:
        """
        Forks a new branch at ``message_id`` and makes it active.

        The new branch is seeded with copies of every stored message up to and
        including the fork point, in store order; the fork point is the first
        record carrying ``message_id``. The source records are left untouched. Returns the new branch id, or ``None`` for an unknown message.
        """
        index = self._store.index_of(message_id)
        if index is None:
            logger.debug("Branch ignored: unknown message %s", message_id)
            return None

        new_branch_id = generate_branch_id()
        copies = fork_prefix(self._store.snapshot()[: index + 1], new_branch_id)
        self._store.extend(copies)
        previous_branch_id = self._branches.switch(new_branch_id)
        self._record(
            BranchOperation(
                message_id=message_id,
                timestamp=now_ms(),
                branch_id=new_branch_id,
                previous_branch_id=previous_branch_id,
                copies=tuple(copies),
            )
        )
        logger.debug("Forked branch %s from %s at message %s", new_branch_id, previous_branch_id, message_id)

        if self.on_branch is not None:
            self.on_branch(new_branch_id, message_id)
        return new_branch_id

    def switch_to_branch(self, branch_id: str) -> None:
        _ = self._branches.switch(branch_id)

    def undo(self) -> Operation | None:
        """Reverts the most recent operation. Returns it, or ``None`` if history is empty."""
        operation = self._log.pop_undo()
        if operation is None:
            return None
        self._revert(operation)
        logger.debug("Undid %s on message %s", operation.type, operation.message_id)
        return operation

    def redo(self) -> Operation | None:
        """Re-applies the most recently undone operation. Returns it, or ``None``."""
        operation = self._log.pop_redo()
        if operation is None:
            return None
        self._reapply(operation)
        logger.debug("Redid %s on message %s", operation.type, operation.message_id)
        return operation

    def clear(self) -> None:
        """Drops all messages and history and returns to the main branch. Not undoable."""
        self._store.clear()
        self._log.clear()
        self._branches.reset()

    # ---------- Internal ----------

    def _resolve(self, message_id: str) -> int | None:
        return self._store.resolve(message_id, self._branches.active)

    def _record(self, operation: Operation) -> None:
        evicted = self._log.record(operation)
        if evicted is not None:
            logger.debug("History full, dropped %s on message %s", evicted.type, evicted.message_id)

    def _set_editing(self, message_id: str, is_editing: bool) -> bool:
        index = self._resolve(message_id)
        if index is None:
            return False
        _ = self._store.replace(index, replace(self._store[index], is_editing=is_editing))
        return True

    def _restore(self, record: Message) -> None:
        index = self._store.index_of(record.id, record.branch_id)
        if index is None:
            logger.debug("Nothing to restore: message %s no longer in branch %s", record.id, record.branch_id)
            return
        _ = self._store.replace(index, record)

    def _revert(self, operation: Operation) -> None:
        match operation:
            case AddOperation(message=message):
                _ = self._store.remove(message.id, message.branch_id)
            case EditOperation(previous_state=previous) | RegenerateOperation(previous_state=previous):
                self._restore(previous)
            case DeleteOperation(removed=removed):
                self._store.restore(removed)
            case BranchOperation(branch_id=branch_id, previous_branch_id=previous_branch_id, copies=copies):
                for copy in copies:
                    _ = self._store.remove(copy.id, branch_id)
                if self._branches.active == branch_id:
                    _ = self._branches.switch(previous_branch_id)

    def _reapply(self, operation: Operation) -> None:
        match operation:
            case AddOperation(message=message, index=index):
                _ = self._store.insert(index, message)
            case EditOperation(new_state=new_state):
                self._restore(new_state)
            case RegenerateOperation():
                pass
            case DeleteOperation(message_id=message_id):
                _ = self._store.remove_all(message_id)
            case BranchOperation(branch_id=branch_id, copies=copies):
                self._store.extend(copies)
                _ = self._branches.switch(branch_id)
