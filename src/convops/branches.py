from collections.abc import Callable, Iterable, Sequence

from msgspec.structs import replace

from convops.ids import generate_message_id
from convops.models import MAIN_BRANCH_ID, Message


def group_by_branch(messages: Iterable[Message]) -> dict[str, list[Message]]:
    """
    Partitions messages by branch id. Keys follow the order in which each branch
    first appears in ``messages``; each list keeps the input order.
    """
    branches: dict[str, list[Message]] = {}
    for msg in messages:
        branches.setdefault(msg.branch_id, []).append(msg)
    return branches


def fork_prefix(
    prefix: Sequence[Message],
    new_branch_id: str,
    id_factory: Callable[[], str] = generate_message_id,
) -> list[Message]:
    """
    Copies ``prefix`` into ``new_branch_id``. The last element is the fork point.

    Each copy is a new record pointing back at its source through ``parent_id``.
    The fork point copy keeps its own id and parent so it stays addressable by
    the same id in both branches. Transient editing state is never carried over.
    """
    if not prefix:
        return []

    *ancestors, fork_point = prefix
    copies = [
        replace(msg, id=id_factory(), branch_id=new_branch_id, parent_id=msg.id, is_editing=False)
        for msg in ancestors
    ]
    copies.append(replace(fork_point, branch_id=new_branch_id, is_editing=False))
    return copies


class BranchIndex:
    """Holds the active branch pointer over a message store."""

    active: str

    def __init__(self, active: str = MAIN_BRANCH_ID) -> None:
        self.active = active

    def switch(self, branch_id: str) -> str:
        """Points at ``branch_id``, returning the previously active branch."""
        previous = self.active
        self.active = branch_id
        return previous

    def reset(self) -> None:
        self.active = MAIN_BRANCH_ID

    def visible(self, messages: Iterable[Message]) -> list[Message]:
        return [msg for msg in messages if msg.branch_id == self.active]
