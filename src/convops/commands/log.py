from rich.console import Console

from convops.console import render_messages
from convops.serialization import to_pretty_json
from convops.session import Session


def log(
    json_output: bool,
    up_to: str | None,
) -> None:
    session = Session.load_active()
    engine = session.engine

    messages = engine.messages if up_to is None else engine.get_messages_up_to(up_to)

    if json_output:
        print(to_pretty_json(messages))
        return

    console = Console()
    console.print(render_messages(messages, engine.current_branch_id))
