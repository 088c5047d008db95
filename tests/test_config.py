"""Unit tests for fzfpick.config."""

import json

import pytest

from fzfpick.config import load_config, save_config
from fzfpick.constants import DEFAULT_ARGS
from fzfpick.errors import ConfigError
from fzfpick.models import FinderConfig


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "none.json")
        assert config == FinderConfig()
        assert config.args == DEFAULT_ARGS
        assert config.window_height == 15
        assert config.position_bottom is True

    def test_reads_values_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"executable": "sk", "window_height": 20, "input_mode": "env"}))
        config = load_config(path)
        assert config.executable == "sk"
        assert config.window_height == 20
        assert config.input_mode == "env"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"executable": "sk"}))
        monkeypatch.setenv("FZFPICK_EXECUTABLE", "/opt/fzf/bin/fzf")
        monkeypatch.setenv("FZFPICK_HEIGHT", "8")
        config = load_config(path)
        assert config.executable == "/opt/fzf/bin/fzf"
        assert config.window_height == 8

    def test_invalid_json_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_object_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_value_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"input_mode": "carrier-pigeon"}))
        with pytest.raises(ConfigError, match="input_mode"):
            load_config(path)

    def test_default_path_is_used(self):
        assert load_config() == FinderConfig()


class TestSaveConfig:
    def test_round_trips_and_is_private(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = FinderConfig(executable="sk", args=["--ansi"], editor="nvim")
        save_config(config, path)
        assert load_config(path) == config
        assert path.stat().st_mode & 0o777 == 0o600
