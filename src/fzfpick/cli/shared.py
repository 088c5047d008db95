"""Shared CLI presentation helpers."""

import os
import sys

from fzfpick.constants import BOLD, CYAN, RESET
from fzfpick.models import SelectionResult


def supports_color() -> bool:
    """Return whether ANSI color output should be used."""
    if os.getenv("NO_COLOR") is not None:
        return False
    if os.getenv("TERM", "").lower() == "dumb":
        return False
    return sys.stdout.isatty()


def format_location(result: SelectionResult) -> str:
    """Return ``path[:line]`` for a selection, highlighted on a color terminal."""
    location = result.file_path or result.selected_text
    if result.line_number is not None:
        location = f"{location}:{result.line_number}"
    if supports_color():
        return f"{BOLD}{CYAN}{location}{RESET}"
    return location
