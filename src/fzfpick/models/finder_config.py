"""Configuration model for fzfpick."""

from typing import Literal

from pydantic import BaseModel, Field

from fzfpick.constants import (
    DEFAULT_ARGS,
    DEFAULT_EXECUTABLE,
    DEFAULT_GREP_COMMAND,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_WINDOW_HEIGHT,
)


class FinderConfig(BaseModel):
    """Runtime configuration for fzfpick."""

    executable: str = DEFAULT_EXECUTABLE
    args: list[str] = Field(default_factory=lambda: list(DEFAULT_ARGS))
    window_height: int = Field(default=DEFAULT_WINDOW_HEIGHT, ge=1)
    position_bottom: bool = True
    grep_command: str = DEFAULT_GREP_COMMAND
    input_mode: Literal["pipe", "env"] = "pipe"
    editor: str | None = None
    recent_limit: int = Field(default=DEFAULT_RECENT_LIMIT, ge=1)
