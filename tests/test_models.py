# pyright: standard

import json

from convops.models import (
    AddOperation,
    BranchOperation,
    EditOperation,
    Message,
    Operation,
)
from convops.serialization import from_json, to_dict, to_json


def test_message_serializes_camel_case_and_omits_defaults() -> None:
    # GIVEN a fresh message and an edited one
    fresh = Message(id="msg_1", role="user", content="Hello", timestamp=10)
    edited = Message(
        id="msg_2",
        role="assistant",
        content="Hi",
        timestamp=11,
        branch_id="side",
        parent_id="msg_1",
        original_content="Hey",
        version=2,
    )

    # WHEN they are converted to plain data
    fresh_data = to_dict(fresh)
    edited_data = to_dict(edited)

    # THEN unset lineage fields are absent
    assert fresh_data == {"id": "msg_1", "role": "user", "content": "Hello", "timestamp": 10}
    # AND field names use camelCase
    assert edited_data["branchId"] == "side"
    assert edited_data["parentId"] == "msg_1"
    assert edited_data["originalContent"] == "Hey"
    assert edited_data["version"] == 2


def test_operations_are_tagged_by_type() -> None:
    # GIVEN operations of different kinds
    before = Message(id="msg_1", role="user", content="a", timestamp=1)
    after = Message(id="msg_1", role="user", content="b", timestamp=1, original_content="a", version=1)
    ops: list[Operation] = [
        AddOperation(message_id="msg_1", timestamp=1, message=before, index=0),
        EditOperation(message_id="msg_1", timestamp=2, previous_state=before, new_state=after),
        BranchOperation(
            message_id="msg_1", timestamp=3, branch_id="branch_x", previous_branch_id="main", copies=(before,)
        ),
    ]

    # WHEN encoded
    encoded = to_json(ops)

    # THEN each carries its type tag
    assert [item["type"] for item in json.loads(encoded)] == ["add", "edit", "branch"]
    assert json.loads(encoded)[1]["previousState"]["content"] == "a"

    # AND decoding the union restores the concrete classes
    decoded = from_json(list[Operation], encoded)
    assert decoded == ops
    assert [op.type for op in decoded] == ["add", "edit", "branch"]
    assert isinstance(decoded[2], BranchOperation) and decoded[2].copies == (before,)
