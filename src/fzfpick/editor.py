"""Open a selection in the user's editor.

Returns an error message string instead of raising so the CLI can report it
next to the selection.
"""

import logging
import os
import shlex
import subprocess

from fzfpick.models import SelectionResult

log = logging.getLogger(__name__)

FALLBACK_EDITOR = "vi"


def editor_command(configured: str | None = None) -> list[str]:
    """Return the editor argv prefix from config, $VISUAL or $EDITOR."""
    for value in (configured, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if value and value.strip():
            cmd = shlex.split(value)
            if cmd:
                return cmd
    return [FALLBACK_EDITOR]


def build_editor_argv(editor: list[str], file_path: str, line_number: int | None) -> list[str]:
    argv = list(editor)
    if line_number is not None:
        argv.append(f"+{line_number}")
    argv.append(file_path)
    return argv


def open_selection(result: SelectionResult, configured: str | None = None) -> str | None:
    """Open the selected file (at its line, if any) and return an error message on failure."""
    if result.file_path is None:
        return f"Cannot open selection: {result.selected_text!r} has no file path."
    if not result.exists:
        return f"Cannot open {result.file_path}: file does not exist."

    argv = build_editor_argv(editor_command(configured), result.file_path, result.line_number)
    log.debug("editor argv=%r", argv)
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as e:
        return f"Failed to launch editor: {e}"
    if completed.returncode != 0:
        return f"Editor exited with status {completed.returncode}."
    return None
