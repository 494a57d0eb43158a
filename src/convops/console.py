"""Terminal rendering for messages, branches and the operation log."""

import logging
import sys
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from convops.models import (
    AddOperation,
    BranchOperation,
    DeleteOperation,
    EditOperation,
    Message,
    Operation,
    RegenerateOperation,
)

ROLE_STYLES = {"user": "blue", "assistant": "green", "system": "magenta"}


def is_input_terminal() -> bool:
    """Checks if stdin is a TTY."""
    return sys.stdin.isatty()


def configure_logging(verbose: bool) -> None:
    """Routes convops log records to stderr through rich when verbose output is requested."""
    logger = logging.getLogger("convops")
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)


def snippet(content: str, width: int = 60) -> str:
    lines = content.strip().splitlines()
    first = lines[0] if lines else ""
    return first if len(first) <= width else first[: width - 1] + "…"


def format_timestamp(millis: int) -> str:
    return datetime.fromtimestamp(millis / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M:%S")


def describe_operation(operation: Operation) -> str:
    match operation:
        case AddOperation(message=message):
            return f"add {message.role}: {snippet(message.content, 40)}"
        case EditOperation(previous_state=previous, new_state=new_state):
            return f"edit v{new_state.version}: {snippet(previous.content, 20)} -> {snippet(new_state.content, 20)}"
        case DeleteOperation(previous_state=previous):
            return f"delete {previous.role}: {snippet(previous.content, 40)}"
        case RegenerateOperation():
            return "regenerate"
        case BranchOperation(branch_id=branch_id, copies=copies):
            return f"branch {branch_id} ({len(copies)} copied)"


def render_messages(messages: Sequence[Message], branch_id: str) -> Table | str:
    if not messages:
        return f"No messages on branch '{branch_id}'."

    table = Table(title=f"Branch: {branch_id}", show_header=True, header_style="bold", box=None, padding=(0, 1))
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Role")
    table.add_column("Message Snippet", overflow="ellipsis", min_width=20)
    table.add_column("Edits", justify="right")

    for i, msg in enumerate(messages):
        style = ROLE_STYLES.get(msg.role, "")
        table.add_row(
            str(i),
            msg.id,
            f"[{style}]{msg.role}[/{style}]",
            snippet(msg.content),
            str(msg.version) if msg.version is not None else "",
            style="italic" if msg.is_editing else "",
        )
    return table


def render_branches(branches: Mapping[str, Sequence[Message]], active: str) -> Table:
    table = Table(title="Branches", show_header=True, header_style="bold", box=None, padding=(0, 1))
    table.add_column("Branch")
    table.add_column("Messages", justify="right")
    table.add_column("Last Message", overflow="ellipsis", min_width=20)

    names = list(branches)
    if active not in branches:
        names.append(active)

    for name in names:
        messages = branches.get(name, [])
        label = f"[bold]{name}[/bold] (active)" if name == active else name
        last = snippet(messages[-1].content) if messages else ""
        table.add_row(label, str(len(messages)), last)
    return table


def render_history(history: Sequence[Operation], redo_stack: Sequence[Operation], capacity: int) -> Table:
    table = Table(
        title=f"Operation Log ({len(history)}/{capacity})",
        show_header=True,
        header_style="bold",
        box=None,
        padding=(0, 1),
    )
    table.add_column("Stack")
    table.add_column("When")
    table.add_column("Message")
    table.add_column("Operation", overflow="ellipsis", min_width=20)

    # Newest first, so the next undo is the top row
    for operation in reversed(history):
        table.add_row("undo", format_timestamp(operation.timestamp), operation.message_id, describe_operation(operation))
    for operation in reversed(redo_stack):
        table.add_row(
            "[dim]redo[/dim]",
            format_timestamp(operation.timestamp),
            operation.message_id,
            describe_operation(operation),
            style="dim",
        )
    return table
