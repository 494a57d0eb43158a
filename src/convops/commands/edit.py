import os
import shlex
import subprocess
import sys
import tempfile
from pathlib import Path

import typer

from convops.console import is_input_terminal
from convops.exceptions import ExternalDependencyError, InvalidInputError
from convops.session import active_session


def _edit_in_editor(original_content: str) -> str:
    fd, temp_file_path_str = tempfile.mkstemp(suffix=".md", text=True)
    temp_file_path = Path(temp_file_path_str)
    try:
        with os.fdopen(fd, "w") as f:
            _ = f.write(original_content)

        editor_cmd_str = os.environ.get("EDITOR", "vi")
        editor_cmd_parts = shlex.split(editor_cmd_str)
        full_command = editor_cmd_parts + [str(temp_file_path)]

        try:
            proc = subprocess.run(full_command, check=False)
        except FileNotFoundError:
            raise ExternalDependencyError(
                f"Editor command not found: '{editor_cmd_parts[0]}'. "
                + "Please set the $EDITOR environment variable."
            ) from None

        if proc.returncode != 0:
            raise ExternalDependencyError("Editor closed with non-zero exit code. Aborting.")

        return temp_file_path.read_text()
    finally:
        temp_file_path.unlink(missing_ok=True)


def edit(
    message_id: str,
    content: str | None,
) -> None:
    with active_session() as session:
        target = session.engine.get_message(message_id)
        if target is None:
            raise InvalidInputError(f"Message '{message_id}' not found.")

        new_content: str
        if content is not None:
            new_content = content
        elif not is_input_terminal():
            # Scripted mode: read new content from stdin
            new_content = sys.stdin.read()
        else:
            new_content = _edit_in_editor(target.content)

        if new_content == target.content or not new_content:
            print("No changes detected. Aborting.")
            raise typer.Exit(code=0)

        _ = session.engine.edit_message(message_id, new_content)
        updated = session.engine.get_message(message_id)

    version = updated.version if updated is not None else None
    print(f"Updated message {message_id} (version {version}).")
