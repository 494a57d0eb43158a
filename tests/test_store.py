# pyright: standard

from convops.models import Message
from convops.store import MessageStore


def _msg(message_id: str, branch_id: str = "main", content: str = "x") -> Message:
    return Message(id=message_id, role="user", content=content, timestamp=1, branch_id=branch_id)


def test_index_of_and_resolve_prefer_branch() -> None:
    # GIVEN the same id stored on two branches
    store = MessageStore([_msg("a"), _msg("b"), _msg("a", branch_id="side")])

    # THEN index_of finds the first record, or the one on the requested branch
    assert store.index_of("a") == 0
    assert store.index_of("a", "side") == 2
    assert store.index_of("b", "side") is None
    assert store.index_of("missing") is None

    # AND resolve prefers the given branch but falls back to store order
    assert store.resolve("a", "side") == 2
    assert store.resolve("b", "side") == 1
    assert store.resolve("missing", "main") is None


def test_insert_clamps_to_bounds() -> None:
    # GIVEN a store with two records
    store = MessageStore([_msg("a"), _msg("b")])

    # WHEN inserting past the end and before the start
    end = store.insert(10, _msg("c"))
    start = store.insert(-3, _msg("d"))

    # THEN positions are clamped
    assert (end, start) == (2, 0)
    assert [m.id for m in store] == ["d", "a", "b", "c"]


def test_remove_targets_branch_record() -> None:
    # GIVEN the same id on two branches
    store = MessageStore([_msg("a"), _msg("a", branch_id="side")])

    # WHEN removing it from the side branch
    removed = store.remove("a", "side")

    # THEN only that record is removed
    assert removed is not None and removed.branch_id == "side"
    assert [m.branch_id for m in store] == ["main"]
    assert store.remove("a", "side") is None


def test_replace_and_clear() -> None:
    store = MessageStore([_msg("a", content="old")])

    previous = store.replace(0, _msg("a", content="new"))

    assert previous.content == "old"
    assert store[0].content == "new"
    assert len(store) == 1

    _ = store.append(_msg("b"))
    store.clear()
    assert store.snapshot() == []


def test_remove_all_spans_branches_and_restore_puts_records_back() -> None:
    # GIVEN an id stored on two branches around other records
    store = MessageStore([_msg("a"), _msg("b"), _msg("a", branch_id="side"), _msg("c", branch_id="side")])

    # WHEN removing every record with that id
    removed = store.remove_all("a")

    # THEN both are gone and reported with their former positions
    assert [(entry.index, entry.message.branch_id) for entry in removed] == [(0, "main"), (2, "side")]
    assert [m.id for m in store] == ["b", "c"]
    assert store.remove_all("a") == []

    # WHEN restoring them
    store.restore(removed)

    # THEN the original order is back
    assert [(m.id, m.branch_id) for m in store] == [("a", "main"), ("b", "main"), ("a", "side"), ("c", "side")]
