from convops.exceptions import InvalidInputError
from convops.session import active_session


def regenerate(
    message_id: str,
) -> None:
    requested: list[str] = []
    with active_session() as session:
        session.engine.on_regenerate = requested.append
        if not session.engine.regenerate_message(message_id):
            raise InvalidInputError(f"Message '{message_id}' not found.")

    for requested_id in requested:
        print(f"Regeneration requested for message {requested_id}.")
        print(f"Provide the new content with `convops edit {requested_id}`.")
