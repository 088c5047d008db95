"""Configuration loading for fzfpick."""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from fzfpick.errors import ConfigError
from fzfpick.models import FinderConfig

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".fzfpick"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Environment variables that override individual config fields.
ENV_OVERRIDES = {
    "FZFPICK_EXECUTABLE": "executable",
    "FZFPICK_HEIGHT": "window_height",
    "FZFPICK_GREP_COMMAND": "grep_command",
}


def _read_config_file(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    if not isinstance(payload, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return payload


def load_config(path: Path | None = None) -> FinderConfig:
    """Load config from disk and apply environment overrides."""
    path = path or CONFIG_FILE
    data = _read_config_file(path)
    for env_key, field in ENV_OVERRIDES.items():
        value = os.environ.get(env_key, "").strip()
        if value:
            log.debug("%s overrides %s=%r", env_key, field, value)
            data[field] = value
    try:
        return FinderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def save_config(config: FinderConfig, path: Path | None = None) -> None:
    """Atomically write config to disk with owner-only permissions."""
    path = path or CONFIG_FILE
    os.makedirs(path.parent, mode=0o700, exist_ok=True)
    temp_file = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(config.model_dump_json(indent=2))
        f.flush()
        os.fsync(f.fileno())
    os.replace(temp_file, path)
    log.debug("saved config to %s", path)
