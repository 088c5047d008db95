"""Recently opened files, most recent first."""

import json
import logging
import os
import time
from pathlib import Path

from fzfpick.config import CONFIG_DIR
from fzfpick.constants import DEFAULT_RECENT_LIMIT

log = logging.getLogger(__name__)

RECENT_FILE = CONFIG_DIR / "recent.json"


def list_recent_files(path: Path | None = None) -> list[str]:
    """Return recently opened files, skipping any that no longer exist."""
    path = path or RECENT_FILE
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError):
        return []
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, str) and os.path.exists(item)]


def record_recent_file(
    file_path: str, limit: int = DEFAULT_RECENT_LIMIT, path: Path | None = None
) -> None:
    """Move file_path to the front of the recent list, trimming it to limit."""
    path = path or RECENT_FILE
    entries = [item for item in list_recent_files(path) if item != file_path]
    entries.insert(0, file_path)
    try:
        os.makedirs(path.parent, mode=0o700, exist_ok=True)
        temp_file = path.with_name(f".{path.name}.{os.getpid()}.{time.time_ns()}.tmp")
        fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(entries[:limit], f)
        os.replace(temp_file, path)
    except OSError as e:
        log.warning("could not update recent files: %s", e)
