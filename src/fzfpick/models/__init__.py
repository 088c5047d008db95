"""Model package for fzfpick."""

from fzfpick.models.finder_config import FinderConfig
from fzfpick.models.selection_result import EMPTY, Empty, SelectionResult
from fzfpick.models.session_config import SessionConfig

__all__ = [
    "EMPTY",
    "Empty",
    "FinderConfig",
    "SelectionResult",
    "SessionConfig",
]
