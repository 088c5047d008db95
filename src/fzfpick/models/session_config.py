"""Launch parameters for a single finder session."""

from dataclasses import dataclass
from typing import Literal

from fzfpick.constants import DEFAULT_EXECUTABLE, DEFAULT_WINDOW_HEIGHT, PRINT_QUERY_FLAG
from fzfpick.models.finder_config import FinderConfig


@dataclass(frozen=True)
class SessionConfig:
    """How to launch the finder for one session. Immutable once started."""

    working_directory: str
    executable: str = DEFAULT_EXECUTABLE
    args: tuple[str, ...] = (PRINT_QUERY_FLAG,)
    source_command: str | None = None
    height_hint: int = DEFAULT_WINDOW_HEIGHT
    position_bottom: bool = True
    input_mode: Literal["pipe", "env"] = "pipe"

    @property
    def print_query(self) -> bool:
        return PRINT_QUERY_FLAG in self.args

    @classmethod
    def from_finder_config(
        cls,
        config: FinderConfig,
        working_directory: str,
        source_command: str | None = None,
    ) -> "SessionConfig":
        """Build session parameters from the user's persisted configuration."""
        return cls(
            working_directory=working_directory,
            executable=config.executable,
            args=tuple(config.args),
            source_command=source_command,
            height_hint=config.window_height,
            position_bottom=config.position_bottom,
            input_mode=config.input_mode,
        )
