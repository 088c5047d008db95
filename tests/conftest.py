"""Shared fixtures: stand-in finder scripts so tests never need a real fzf."""

import stat

import pytest

from fzfpick.models import SessionConfig
from fzfpick.session import HeadlessSurface, SessionLauncher

# Echoes a fixed query and the first line of stdin, like `fzf --print-query`
# after the user presses Enter on the first candidate.
SELECT_FIRST = """\
IFS= read -r first
printf 'query\\n%s\\n' "$first"
"""

# Waits until it is cancelled or killed.
WAIT_FOREVER = "exec sleep 30\n"


@pytest.fixture
def make_finder(tmp_path):
    """Return a factory that writes an executable shell script and returns its path."""
    counter = {"n": 0}

    def _make(body: str) -> str:
        counter["n"] += 1
        path = tmp_path / f"finder{counter['n']}.sh"
        path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)

    return _make


@pytest.fixture
def workdir(tmp_path):
    directory = tmp_path / "work"
    directory.mkdir()
    return str(directory)


@pytest.fixture
def surface():
    return HeadlessSurface(rows=40, cols=100)


@pytest.fixture
def launcher(surface):
    return SessionLauncher(surface=surface)


@pytest.fixture
def session_config(workdir):
    def _config(executable: str, **overrides) -> SessionConfig:
        return SessionConfig(working_directory=workdir, executable=executable, **overrides)

    return _config


@pytest.fixture(autouse=True)
def _isolated_state(tmp_path, monkeypatch):
    """Keep config, history and editor lookups away from the real environment."""
    state = tmp_path / "state"
    monkeypatch.setattr("fzfpick.config.CONFIG_FILE", state / "config.json")
    monkeypatch.setattr("fzfpick.history.RECENT_FILE", state / "recent.json")
    for key in (
        "FZF_DEFAULT_COMMAND",
        "FZFPICK_EXECUTABLE",
        "FZFPICK_HEIGHT",
        "FZFPICK_GREP_COMMAND",
        "VISUAL",
        "EDITOR",
    ):
        monkeypatch.delenv(key, raising=False)
