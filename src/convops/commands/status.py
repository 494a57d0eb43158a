from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from convops.session import Session


def status() -> None:
    session = Session.load_active()
    engine = session.engine
    console = Console()

    branches = engine.get_branches()
    visible = engine.messages
    edited = sum(1 for msg in visible if msg.version is not None)

    body = Text.assemble(
        ("Branch: ", "bold"),
        f"{engine.current_branch_id}\n",
        ("Messages: ", "bold"),
        f"{len(visible)} on this branch ({edited} edited), {sum(len(m) for m in branches.values())} total\n",
        ("Branches: ", "bold"),
        f"{len(branches)}\n",
        ("Undo: ", "bold"),
        f"{len(engine.history)}/{engine.max_history_size}",
        ("  Redo: ", "bold"),
        f"{len(engine.redo_stack)}",
    )
    console.print(Panel(body, title=str(session.file_path.name), expand=False))
