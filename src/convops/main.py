import logging
from collections.abc import Sequence
from sys import exit
from typing import Annotated, Any, final, override

import typer
from click import Context
from typer.core import TyperGroup

from convops.exceptions import ConvopsError

logger = logging.getLogger("convops")


@final
class AliasGroup(TyperGroup):
    @override
    def main(  # pyright: ignore[reportAny]
        self,
        args: Sequence[str] | None = None,
        prog_name: str | None = None,
        complete_var: str | None = None,
        standalone_mode: bool = True,
        windows_expand_args: bool = True,
        **extra: Any,  # pyright: ignore[reportAny, reportExplicitAny]
    ) -> Any:  # pyright: ignore[reportExplicitAny]
        try:
            return super().main(args, prog_name, complete_var, standalone_mode, windows_expand_args, **extra)  #  pyright: ignore[reportAny]
        except ConvopsError as e:
            typer.secho(f"Error: {e.message}", err=True, fg=typer.colors.RED)
            exit(e.exit_code)
        except Exception as e:
            logger.debug("Unhandled error", exc_info=e)
            typer.secho("Unexpected Internal Error", err=True, fg=typer.colors.RED)
            typer.echo(str(e), err=True)
            exit(1)

    @override
    def get_command(self, ctx: Context, cmd_name: str):
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd

        # Commands registered as "delete | rm" answer to each of their names
        registered = self._alias_table().get(cmd_name)
        return super().get_command(ctx, registered) if registered else None

    def _alias_table(self) -> dict[str, str]:
        table: dict[str, str] = {}
        for registered in self.commands:
            for alias in registered.split("|"):
                if alias.strip():
                    _ = table.setdefault(alias.strip(), registered)
        return table


app = typer.Typer(cls=AliasGroup, no_args_is_help=True)


@app.callback()
def root(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine operations to stderr."),
    ] = False,
) -> None:
    """
    Edit, branch and undo a conversation timeline stored in the current directory.
    """
    from convops.console import configure_logging

    configure_logging(verbose)


@app.command("init")
def init(
    max_history: Annotated[
        int | None,
        typer.Option(
            "--max-history",
            help="Maximum number of undoable operations to keep. "
            + "Defaults to $CONVOPS_MAX_HISTORY_SIZE, or 50.",
        ),
    ] = None,
) -> None:
    """
    Initialize a new conversation session in the current directory.
    """
    from convops.commands import init

    init.init(max_history)


@app.command("add")
def add(
    role: Annotated[str, typer.Argument(help="Message role: user, assistant or system.")],
    content: Annotated[
        str | None,
        typer.Argument(help="Message content. Read from stdin when omitted and input is piped."),
    ] = None,
    branch: Annotated[
        str | None,
        typer.Option("--branch", "-b", help="Branch to add the message to. Defaults to the active branch."),
    ] = None,
) -> None:
    """
    Append a message to the conversation.
    """
    from convops.commands import add

    add.add(role, content, branch)


@app.command("edit")
def edit(
    message_id: Annotated[str, typer.Argument(help="ID of the message to edit.")],
    content: Annotated[
        str | None,
        typer.Argument(help="New content. When omitted, read from stdin or opened in $EDITOR."),
    ] = None,
) -> None:
    """
    Replace the content of a message, keeping its original content and a version count.
    """
    from convops.commands import edit

    edit.edit(message_id, content)


@app.command("delete | rm")
def delete(
    message_id: Annotated[str, typer.Argument(help="ID of the message to delete.")],
) -> None:
    """
    Delete a message.
    """
    from convops.commands import delete

    delete.delete(message_id)


@app.command("regenerate")
def regenerate(
    message_id: Annotated[str, typer.Argument(help="ID of the message to regenerate.")],
) -> None:
    """
    Record a request to regenerate a message.
    """
    from convops.commands import regenerate

    regenerate.regenerate(message_id)


@app.command("branch")
def branch(
    message_id: Annotated[str, typer.Argument(help="ID of the message to fork from (inclusive).")],
) -> None:
    """
    Fork a new branch from a message and switch to it.
    """
    from convops.commands import branch

    branch.branch(message_id)


@app.command("switch")
def switch(
    branch_id: Annotated[str, typer.Argument(help="Branch to activate ('main' for the root timeline).")],
) -> None:
    """
    Switch the active branch.
    """
    from convops.commands import switch

    switch.switch(branch_id)


@app.command("branches")
def branches() -> None:
    """
    List all branches.
    """
    from convops.commands import branches

    branches.branches()


@app.command("log")
def log(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output the messages as JSON."),
    ] = False,
    up_to: Annotated[
        str | None,
        typer.Option("--up-to", help="Only show messages up to and including this message ID."),
    ] = None,
) -> None:
    """
    Display the messages on the active branch.
    """
    from convops.commands import log

    log.log(json_output, up_to)


@app.command("history")
def history() -> None:
    """
    Show the undo log and redo stack.
    """
    from convops.commands import history

    history.history()


@app.command("undo")
def undo() -> None:
    """
    Undo the most recent operation.
    """
    from convops.commands import undo

    undo.undo()


@app.command("redo")
def redo() -> None:
    """
    Redo the most recently undone operation.
    """
    from convops.commands import redo

    redo.redo()


@app.command("clear")
def clear(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
) -> None:
    """
    Remove all messages, branches and history. This cannot be undone.
    """
    from convops.commands import clear

    clear.clear(yes)


@app.command("status")
def status() -> None:
    """
    Show a summary of the session.
    """
    from convops.commands import status

    status.status()


if __name__ == "__main__":
    app()
