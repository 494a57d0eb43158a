import sys

from convops.console import is_input_terminal
from convops.exceptions import InvalidInputError
from convops.models import ROLES
from convops.session import active_session


def add(
    role: str,
    content: str | None,
    branch: str | None,
) -> None:
    if role not in ROLES:
        raise InvalidInputError(f"Invalid role '{role}'. Must be one of: {', '.join(ROLES)}.")

    if content is None:
        if is_input_terminal():
            raise InvalidInputError("Message content is required (pass it as an argument or pipe it via stdin).")
        content = sys.stdin.read()

    if not content.strip():
        raise InvalidInputError("Message content must not be empty.")

    with active_session() as session:
        message_id = session.engine.add_message(role, content, branch_id=branch)  # pyright: ignore[reportArgumentType]
        branch_id = branch or session.engine.current_branch_id

    print(f"Added {role} message {message_id} to branch '{branch_id}'.")
