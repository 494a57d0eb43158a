from convops.exceptions import InvalidInputError
from convops.session import active_session


def delete(
    message_id: str,
) -> None:
    with active_session() as session:
        if not session.engine.delete_message(message_id):
            raise InvalidInputError(f"Message '{message_id}' not found.")

    print(f"Deleted message {message_id}.")
