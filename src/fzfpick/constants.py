"""Shared constants for fzfpick."""

BOLD = "\033[1m"
CYAN = "\033[36m"
RESET = "\033[0m"

DEFAULT_EXECUTABLE = "fzf"
DEFAULT_ARGS = ["-x", "--color", "bw", "--print-query", "--margin=1,0", "--no-hscroll"]
DEFAULT_WINDOW_HEIGHT = 15
DEFAULT_GREP_COMMAND = "grep -nrH"
DEFAULT_RECENT_LIMIT = 100

PRINT_QUERY_FLAG = "--print-query"

# Environment variable fzf reads its candidate list from when stdin is a tty.
DEFAULT_COMMAND_ENV = "FZF_DEFAULT_COMMAND"

# fzf exit codes: 1 means no match, 2 means an error. Anything else is a cancel.
EXIT_NO_MATCH = 1
EXIT_ERROR = 2

# Smallest display region worth handing to the finder.
MIN_DISPLAY_HEIGHT = 3

VCS_MARKERS = (".git", ".hg", ".svn")
