"""Command-line interface for fzfpick."""

from fzfpick.cli.app import entrypoint, main

__all__ = ["entrypoint", "main"]
