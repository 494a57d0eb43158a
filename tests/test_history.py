# pyright: standard

import pytest

from convops.exceptions import ConfigurationError
from convops.history import OperationLog
from convops.models import AddOperation, Message


def _add(n: int) -> AddOperation:
    msg = Message(id=f"m{n}", role="user", content=str(n), timestamp=n)
    return AddOperation(message_id=msg.id, timestamp=n, message=msg, index=n)


def test_record_clears_redo_and_reports_eviction() -> None:
    # GIVEN a log holding two entries
    log = OperationLog(max_size=2)
    assert log.record(_add(0)) is None
    assert log.record(_add(1)) is None

    # WHEN a third entry is recorded
    evicted = log.record(_add(2))

    # THEN the oldest is evicted
    assert evicted == _add(0)
    assert [op.message_id for op in log.history] == ["m1", "m2"]

    # WHEN one is undone and another recorded
    _ = log.pop_undo()
    assert log.can_redo
    _ = log.record(_add(3))

    # THEN the redo stack is cleared
    assert log.redo_stack == ()
    assert [op.message_id for op in log.history] == ["m1", "m3"]


def test_pop_undo_and_redo_move_between_stacks() -> None:
    log = OperationLog()
    _ = log.record(_add(0))
    _ = log.record(_add(1))

    assert log.pop_undo() == _add(1)
    assert log.pop_undo() == _add(0)
    assert log.pop_undo() is None
    assert [op.message_id for op in log.redo_stack] == ["m1", "m0"]

    assert log.pop_redo() == _add(0)
    assert len(log) == 1
    assert log.can_undo and log.can_redo

    log.clear()
    assert not log.can_undo and not log.can_redo
    assert log.pop_redo() is None


def test_restoring_more_history_than_capacity_keeps_newest() -> None:
    log = OperationLog(max_size=2, history=[_add(0), _add(1), _add(2)])

    assert [op.message_id for op in log.history] == ["m1", "m2"]


def test_invalid_capacity() -> None:
    with pytest.raises(ConfigurationError, match="positive integer"):
        _ = OperationLog(max_size=0)
