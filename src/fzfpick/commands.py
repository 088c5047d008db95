"""Ready-made finder sessions: project files, VCS files, grep, recent files."""

import logging
import os
import shlex
from collections.abc import Sequence

from fzfpick.errors import InvalidDirectory
from fzfpick.history import list_recent_files
from fzfpick.models import FinderConfig, SessionConfig
from fzfpick.resolvers import (
    current_directory,
    resolve_directory,
    resolve_project_root,
    resolve_vcs_root,
)
from fzfpick.session import SessionLauncher
from fzfpick.session.launcher import Outcome

log = logging.getLogger(__name__)

GIT_FILES_COMMAND = "git ls-files"
GIT_GREP_COMMAND = "git grep -i --line-number"


def project_directory(explicit: str | None = None) -> str:
    """Return explicit, else the project root, else the current directory."""
    strategies = []
    if explicit:
        expanded = os.path.expanduser(explicit)
        strategies.append(lambda: expanded)
    strategies.extend([resolve_project_root, current_directory])
    directory = resolve_directory(strategies)
    if explicit and directory != os.path.abspath(os.path.expanduser(explicit)):
        raise InvalidDirectory(f"Directory does not exist: {explicit}")
    return directory


def vcs_directory(marker: str) -> str:
    """Return the enclosing repository root for marker or fail."""
    directory = resolve_vcs_root(marker)
    if directory is None:
        raise InvalidDirectory(f"Not inside a repository ({marker} not found)")
    return directory


def grep_source(grep_command: str, pattern: str) -> str:
    return f"{grep_command} {shlex.quote(pattern)} ."


def git_grep_source(pattern: str) -> str:
    return f"{GIT_GREP_COMMAND} {shlex.quote(pattern)}"


def files_session(config: FinderConfig, directory: str | None = None) -> SessionConfig:
    """Session that lets the finder enumerate files with its default command."""
    return SessionConfig.from_finder_config(config, project_directory(directory))


def vcs_files_session(config: FinderConfig, marker: str) -> SessionConfig:
    return SessionConfig.from_finder_config(config, vcs_directory(marker))


def git_files_session(config: FinderConfig) -> SessionConfig:
    return SessionConfig.from_finder_config(
        config, vcs_directory(".git"), source_command=GIT_FILES_COMMAND
    )


def grep_session(config: FinderConfig, pattern: str, directory: str | None = None) -> SessionConfig:
    return SessionConfig.from_finder_config(
        config,
        project_directory(directory),
        source_command=grep_source(config.grep_command, pattern),
    )


def git_grep_session(config: FinderConfig, pattern: str) -> SessionConfig:
    return SessionConfig.from_finder_config(
        config, vcs_directory(".git"), source_command=git_grep_source(pattern)
    )


def command_session(
    config: FinderConfig, source_command: str, directory: str | None = None
) -> SessionConfig:
    directory = project_directory(directory) if directory else current_directory()
    return SessionConfig.from_finder_config(config, directory, source_command=source_command)


def recent_session(config: FinderConfig) -> tuple[SessionConfig, list[str]]:
    """Session over recently opened files, fed to the finder as literal entries."""
    return SessionConfig.from_finder_config(config, current_directory()), list_recent_files()


def pick(
    session_config: SessionConfig,
    entries: Sequence[str] | None = None,
    launcher: SessionLauncher | None = None,
) -> Outcome:
    """Run one session to completion and return its outcome."""
    launcher = launcher or SessionLauncher()
    session = launcher.start(session_config, entries=entries)
    outcome = session.wait()
    log.debug("session %d finished with %r", session.pid, outcome)
    return outcome
