import typer

from convops.console import describe_operation
from convops.session import active_session


def undo() -> None:
    with active_session() as session:
        operation = session.engine.undo()

    if operation is None:
        print("Nothing to undo.")
        raise typer.Exit(code=0)

    print(f"Undid {describe_operation(operation)}.")
