from convops.exceptions import InvalidInputError
from convops.session import active_session


def branch(
    message_id: str,
) -> None:
    with active_session() as session:
        new_branch_id = session.engine.branch_conversation(message_id)
        if new_branch_id is None:
            raise InvalidInputError(f"Message '{message_id}' not found.")
        copied = len(session.engine.messages)

    print(f"Created branch '{new_branch_id}' from message {message_id} ({copied} messages) and switched to it.")
