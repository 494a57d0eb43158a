import typer

from convops.console import describe_operation
from convops.session import active_session


def redo() -> None:
    with active_session() as session:
        operation = session.engine.redo()

    if operation is None:
        print("Nothing to redo.")
        raise typer.Exit(code=0)

    print(f"Redid {describe_operation(operation)}.")
