"""Interactive finder sessions: spawn, pump, parse, dispatch."""

from fzfpick.session.command import build_argv, display_height, entries_source_command
from fzfpick.session.launcher import Session, SessionLauncher
from fzfpick.session.parser import parse
from fzfpick.session.terminal import HeadlessSurface, TerminalSurface

__all__ = [
    "HeadlessSurface",
    "Session",
    "SessionLauncher",
    "TerminalSurface",
    "build_argv",
    "display_height",
    "entries_source_command",
    "parse",
]
