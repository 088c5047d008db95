"""Unit tests for fzfpick.history."""

import json

from fzfpick.history import list_recent_files, record_recent_file


def _touch(tmp_path, name):
    path = tmp_path / name
    path.write_text("")
    return str(path)


class TestRecentFiles:
    def test_empty_when_no_history(self, tmp_path):
        assert list_recent_files(tmp_path / "recent.json") == []

    def test_most_recent_first_without_duplicates(self, tmp_path):
        history = tmp_path / "recent.json"
        a, b = _touch(tmp_path, "a"), _touch(tmp_path, "b")
        record_recent_file(a, path=history)
        record_recent_file(b, path=history)
        record_recent_file(a, path=history)
        assert list_recent_files(history) == [a, b]

    def test_limit_trims_oldest(self, tmp_path):
        history = tmp_path / "recent.json"
        files = [_touch(tmp_path, f"f{i}") for i in range(4)]
        for path in files:
            record_recent_file(path, limit=2, path=history)
        assert list_recent_files(history) == [files[3], files[2]]

    def test_deleted_files_are_skipped(self, tmp_path):
        history = tmp_path / "recent.json"
        history.write_text(json.dumps([str(tmp_path / "gone"), 42]))
        assert list_recent_files(history) == []

    def test_corrupt_history_is_ignored(self, tmp_path):
        history = tmp_path / "recent.json"
        history.write_text("{")
        assert list_recent_files(history) == []

    def test_default_location_is_used(self, tmp_path):
        a = _touch(tmp_path, "a")
        record_recent_file(a)
        assert list_recent_files() == [a]
