import typer

from convops.session import active_session


def clear(
    yes: bool,
) -> None:
    if not yes and not typer.confirm("Clear all messages, branches and undo history? This cannot be undone."):
        print("Aborted.")
        raise typer.Exit(code=1)

    with active_session() as session:
        session.engine.clear()

    print("Cleared session.")
