from rich.console import Console

from convops.console import render_history
from convops.session import Session


def history() -> None:
    session = Session.load_active()
    engine = session.engine
    console = Console()

    if not engine.history and not engine.redo_stack:
        console.print("No operations recorded.")
        return

    console.print(render_history(engine.history, engine.redo_stack, engine.max_history_size))
