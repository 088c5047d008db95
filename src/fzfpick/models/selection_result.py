"""Parsed outcome of a finder session."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class SelectionResult:
    """A selected entry, split into a path candidate and optional line number."""

    query: str
    selected_text: str
    file_path: str | None = None
    line_number: int | None = None

    @property
    def exists(self) -> bool:
        """Return whether the selected path is present on disk right now."""
        return self.file_path is not None and os.path.exists(self.file_path)


class Empty:
    """Outcome of a session that ended without a selection."""

    _instance: "Empty | None" = None

    def __new__(cls) -> "Empty":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = Empty()
