from typing import Literal

from msgspec import Struct

MAIN_BRANCH_ID = "main"

type Role = Literal["user", "assistant", "system"]

ROLES: tuple[Role, ...] = ("user", "assistant", "system")


class Message(Struct, frozen=True, rename="camel", omit_defaults=True):
    """
    A single conversation turn.

    Records are immutable; edits replace the stored record with a modified copy,
    so snapshots held by the operation log are never affected by later changes.
    """

    id: str
    role: Role
    content: str
    timestamp: int
    branch_id: str = MAIN_BRANCH_ID
    parent_id: str | None = None
    is_editing: bool = False
    # Edit lineage: original_content is write-once, version counts committed edits
    original_content: str | None = None
    version: int | None = None


class AddOperation(Struct, frozen=True, tag="add", tag_field="type", rename="camel"):
    message_id: str
    timestamp: int
    message: Message
    index: int

    @property
    def type(self) -> Literal["add"]:
        return "add"


class EditOperation(Struct, frozen=True, tag="edit", tag_field="type", rename="camel"):
    message_id: str
    timestamp: int
    previous_state: Message
    new_state: Message

    @property
    def type(self) -> Literal["edit"]:
        return "edit"


class RemovedMessage(Struct, frozen=True, rename="camel"):
    """A record taken out of the store together with the position it held."""

    index: int
    message: Message


class DeleteOperation(Struct, frozen=True, tag="delete", tag_field="type", rename="camel"):
    """Removal of every record carrying message_id; removed is in ascending store order."""

    message_id: str
    timestamp: int
    removed: tuple[RemovedMessage, ...]

    @property
    def type(self) -> Literal["delete"]:
        return "delete"

    @property
    def previous_state(self) -> Message:
        return self.removed[0].message

    @property
    def index(self) -> int:
        return self.removed[0].index


class RegenerateOperation(Struct, frozen=True, tag="regenerate", tag_field="type", rename="camel"):
    message_id: str
    timestamp: int
    previous_state: Message

    @property
    def type(self) -> Literal["regenerate"]:
        return "regenerate"


class BranchOperation(Struct, frozen=True, tag="branch", tag_field="type", rename="camel"):
    """Fork record; message_id is the fork point and copies are the records seeded into branch_id."""

    message_id: str
    timestamp: int
    branch_id: str
    previous_branch_id: str
    copies: tuple[Message, ...]

    @property
    def type(self) -> Literal["branch"]:
        return "branch"


type Operation = AddOperation | EditOperation | DeleteOperation | RegenerateOperation | BranchOperation
