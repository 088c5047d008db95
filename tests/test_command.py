"""Unit tests for fzfpick.session.command."""

import subprocess

import pytest

from fzfpick.errors import InvalidEntries, SpawnError
from fzfpick.models import SessionConfig
from fzfpick.session.command import (
    build_argv,
    display_height,
    entries_source_command,
    require_executable,
    resolve_executable,
)


def _run(command: str) -> str:
    return subprocess.run(["sh", "-c", command], capture_output=True, text=True, check=True).stdout


class TestEntriesSourceCommand:
    def test_emits_entries_in_order(self):
        assert _run(entries_source_command(["a", "b", "c"])) == "a\nb\nc\n"

    def test_shell_metacharacters_are_not_interpreted(self):
        entries = ["$HOME", "it's", "*", "a;b", "`id`", "-n", "%s %d", "  spaced  "]
        assert _run(entries_source_command(entries)) == "".join(f"{e}\n" for e in entries)

    def test_no_entries_emits_nothing(self):
        assert _run(entries_source_command([])) == ""

    def test_newline_in_entry_is_rejected(self):
        with pytest.raises(InvalidEntries):
            entries_source_command(["ok", "two\nlines"])


class TestDisplayHeight:
    def test_hint_wins_when_smaller_than_half(self):
        assert display_height(15, 50) == 15

    def test_capped_at_half_the_screen(self):
        assert display_height(15, 20) == 10

    def test_never_below_minimum(self):
        assert display_height(15, 2) == 3


class TestBuildArgv:
    def test_finder_alone_without_source(self):
        config = SessionConfig(working_directory="/", args=("--print-query",), height_hint=10)
        assert build_argv(config, "/usr/bin/fzf", 40) == [
            "/usr/bin/fzf",
            "--print-query",
            "--height=10",
            "--layout=default",
        ]

    def test_source_command_wrapped_in_shell_pipeline(self):
        config = SessionConfig(
            working_directory="/",
            args=("--print-query", "--prompt", "grep> "),
            source_command="grep -nrH 'foo bar' .",
            position_bottom=False,
            height_hint=10,
        )
        argv = build_argv(config, "/usr/bin/fzf", 40)
        assert argv[:2] == ["/bin/sh", "-c"]
        assert argv[2] == (
            "grep -nrH 'foo bar' . | /usr/bin/fzf --print-query --prompt 'grep> ' "
            "--height=10 --layout=reverse"
        )


class TestResolveExecutable:
    def test_missing_name(self):
        assert resolve_executable("no-such-finder-binary-xyz") is None

    def test_explicit_path_must_be_executable(self, tmp_path):
        path = tmp_path / "finder"
        path.write_text("#!/bin/sh\n")
        assert resolve_executable(str(path)) is None
        path.chmod(0o755)
        assert resolve_executable(str(path)) == str(path)

    def test_require_raises_spawn_error(self):
        with pytest.raises(SpawnError, match="no-such-finder"):
            require_executable("no-such-finder-binary-xyz")
