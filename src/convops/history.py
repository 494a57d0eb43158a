from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from convops.config import DEFAULT_MAX_HISTORY_SIZE, EngineConfig
from convops.models import Operation


class OperationLog:
    """
    Bounded undo history with a companion redo stack.

    - ``history`` is chronological; the newest entry is undone first.
    - Recording beyond ``max_size`` drops the oldest entry for good.
    - Recording always empties the redo stack, since the timeline has diverged.
    """

    max_size: int
    _history: deque[Operation]
    _redo: list[Operation]

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_HISTORY_SIZE,
        history: Iterable[Operation] = (),
        redo_stack: Iterable[Operation] = (),
    ) -> None:
        self.max_size = EngineConfig(max_history_size=max_size).max_history_size
        self._history = deque(history, maxlen=self.max_size)
        self._redo = list(redo_stack)

    def __len__(self) -> int:
        return len(self._history)

    @property
    def history(self) -> tuple[Operation, ...]:
        return tuple(self._history)

    @property
    def redo_stack(self) -> tuple[Operation, ...]:
        return tuple(self._redo)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def record(self, operation: Operation) -> Operation | None:
        """
        Appends ``operation`` and clears the redo stack.
        Returns the entry evicted to stay within capacity, if any.
        """
        evicted = self._history[0] if len(self._history) == self.max_size else None
        self._history.append(operation)
        self._redo.clear()
        return evicted

    def pop_undo(self) -> Operation | None:
        if not self._history:
            return None
        operation = self._history.pop()
        self._redo.append(operation)
        return operation

    def pop_redo(self) -> Operation | None:
        if not self._redo:
            return None
        operation = self._redo.pop()
        self._history.append(operation)
        return operation

    def clear(self) -> None:
        self._history.clear()
        self._redo.clear()
