from __future__ import annotations

from collections.abc import Iterable, Iterator

from convops.models import Message, RemovedMessage


class MessageStore:
    """
    Ordered, cross-branch collection of Message records.

    - Insertion order is stable and shared by every branch.
    - A record is addressed by its position, or by (message id, branch id); ids are
      unique within a branch but a fork point id appears once in each branch that
      contains it. Deleting an id removes it from every branch.
    """

    _messages: list[Message]

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._messages = list(messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    # ---------- Lookup ----------

    def index_of(self, message_id: str, branch_id: str | None = None) -> int | None:
        """
        Returns the position of the first record with ``message_id``, optionally
        restricted to ``branch_id``.
        """
        for i, msg in enumerate(self._messages):
            if msg.id == message_id and (branch_id is None or msg.branch_id == branch_id):
                return i
        return None

    def resolve(self, message_id: str, preferred_branch: str) -> int | None:
        """
        Resolves an id to a position, preferring the record in ``preferred_branch``
        and falling back to the first record in store order.
        """
        index = self.index_of(message_id, preferred_branch)
        if index is None:
            index = self.index_of(message_id)
        return index

    def snapshot(self) -> list[Message]:
        return list(self._messages)

    # ---------- Mutation ----------

    def append(self, message: Message) -> int:
        self._messages.append(message)
        return len(self._messages) - 1

    def extend(self, messages: Iterable[Message]) -> None:
        self._messages.extend(messages)

    def insert(self, index: int, message: Message) -> int:
        """
        Inserts at ``index`` clamped to the current bounds; returns the actual position.
        """
        position = max(0, min(index, len(self._messages)))
        self._messages.insert(position, message)
        return position

    def replace(self, index: int, message: Message) -> Message:
        previous = self._messages[index]
        self._messages[index] = message
        return previous

    def remove(self, message_id: str, branch_id: str) -> Message | None:
        index = self.index_of(message_id, branch_id)
        if index is None:
            return None
        return self._messages.pop(index)

    def remove_all(self, message_id: str) -> list[RemovedMessage]:
        """
        Removes every record carrying ``message_id``, in any branch. Returns them with
        the positions they held before the removal, in ascending order.
        """
        removed = [RemovedMessage(index=i, message=msg) for i, msg in enumerate(self._messages) if msg.id == message_id]
        self._messages = [msg for msg in self._messages if msg.id != message_id]
        return removed

    def restore(self, removed: Iterable[RemovedMessage]) -> None:
        """Puts records taken out by ``remove_all`` back at their former positions."""
        for entry in sorted(removed, key=lambda e: e.index):
            _ = self.insert(entry.index, entry.message)

    def clear(self) -> None:
        self._messages.clear()
