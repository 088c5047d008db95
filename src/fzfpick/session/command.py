"""Finder command-line construction."""

import logging
import os
import shlex
import shutil
from collections.abc import Sequence

from fzfpick.constants import MIN_DISPLAY_HEIGHT
from fzfpick.errors import InvalidEntries, SpawnError
from fzfpick.models import SessionConfig

log = logging.getLogger(__name__)

SHELL = "/bin/sh"


def resolve_executable(candidate: str) -> str | None:
    """Resolve an executable name or path to a runnable command path."""
    has_sep = os.path.sep in candidate or (
        os.path.altsep is not None and os.path.altsep in candidate
    )
    if has_sep:
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate
        return None
    return shutil.which(candidate)


def require_executable(candidate: str) -> str:
    """Like resolve_executable, but raise SpawnError when nothing runnable is found."""
    executable = resolve_executable(candidate)
    if executable is None:
        raise SpawnError(f"Finder executable not found or not executable: {candidate}")
    return executable


def display_height(hint: int, available_rows: int) -> int:
    """Return the number of rows the finder may occupy."""
    return max(MIN_DISPLAY_HEIGHT, min(hint, available_rows // 2))


def entries_source_command(entries: Sequence[str]) -> str:
    """Return a shell command that prints each entry on its own line, in order.

    Entries are quoted so the shell never interprets their contents.
    """
    for entry in entries:
        if "\n" in entry:
            raise InvalidEntries(f"Entry contains a newline: {entry!r}")
    if not entries:
        return "true"
    return "printf '%s\\n' " + " ".join(shlex.quote(entry) for entry in entries)


def finder_args(config: SessionConfig, available_rows: int) -> list[str]:
    """Return the finder's own arguments including display placement."""
    height = display_height(config.height_hint, available_rows)
    layout = "default" if config.position_bottom else "reverse"
    return [*config.args, f"--height={height}", f"--layout={layout}"]


def build_argv(config: SessionConfig, executable: str, available_rows: int) -> list[str]:
    """Return the argv that runs the finder, piped from the source command if any."""
    finder = [executable, *finder_args(config, available_rows)]
    if config.source_command:
        script = f"{config.source_command} | {shlex.join(finder)}"
        argv = [SHELL, "-c", script]
    else:
        argv = finder
    log.debug("argv=%r", argv)
    return argv
