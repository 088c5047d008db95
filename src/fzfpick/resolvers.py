"""Working-directory discovery for finder sessions."""

import logging
import os
from collections.abc import Callable, Iterable

from fzfpick.constants import VCS_MARKERS

log = logging.getLogger(__name__)

DirectoryStrategy = Callable[[], str | None]


def find_marker_root(marker: str, start: str | None = None) -> str | None:
    """Return the nearest directory at or above start that contains marker."""
    current = os.path.abspath(start or os.getcwd())
    while True:
        if os.path.exists(os.path.join(current, marker)):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def resolve_vcs_root(marker: str, start: str | None = None) -> str | None:
    """Return the root of the enclosing repository identified by marker (e.g. ``.git``)."""
    root = find_marker_root(marker, start)
    log.debug("%s root from %s: %s", marker, start or os.getcwd(), root)
    return root


def resolve_project_root(start: str | None = None) -> str | None:
    """Return the root of the enclosing project, trying each VCS marker in turn."""
    return resolve_directory(
        [lambda marker=marker: resolve_vcs_root(marker, start) for marker in VCS_MARKERS]
    )


def current_directory() -> str:
    return os.getcwd()


def resolve_directory(strategies: Iterable[DirectoryStrategy]) -> str | None:
    """Try each strategy in order and return the first existing directory."""
    for strategy in strategies:
        directory = strategy()
        if directory and os.path.isdir(directory):
            return os.path.abspath(directory)
    return None


def prompt_user(label: str, default: str | None = None, input_func=input) -> str:
    """Ask the user for a value, falling back to default on an empty answer."""
    suffix = f" [{default}]" if default else ""
    answer = input_func(f"{label}{suffix}: ").strip()
    if not answer and default is not None:
        return default
    return os.path.expanduser(answer)
