from rich.console import Console

from convops.console import render_branches
from convops.session import Session


def branches() -> None:
    session = Session.load_active()
    console = Console()
    console.print(render_branches(session.engine.get_branches(), session.engine.current_branch_id))
