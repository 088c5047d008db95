"""fzfpick: run fzf in a pseudo-terminal and act on the selection."""

__version__ = "0.1.0"
