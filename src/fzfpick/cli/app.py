"""Top-level CLI: pick a target with the finder, then open or print it."""

import argparse
import logging
import sys

from fzfpick import __version__
from fzfpick import commands
from fzfpick.cli.shared import format_location
from fzfpick.config import load_config
from fzfpick.editor import open_selection
from fzfpick.errors import FzfpickError
from fzfpick.history import record_recent_file
from fzfpick.models import FinderConfig, SessionConfig
from fzfpick.resolvers import current_directory, prompt_user

log = logging.getLogger("fzfpick")

# Subcommands whose selection is printed rather than opened.
PRINT_COMMANDS = {"entries", "command"}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per picker."""
    parser = argparse.ArgumentParser(
        prog="fzfpick",
        description="Pick files and grep matches with fzf and open them in your editor",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-p",
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the selected location instead of opening it",
    )
    sub = parser.add_subparsers(dest="command", metavar="command")

    files = sub.add_parser("files", help="Files under the project root (default)")
    files.add_argument("directory", nargs="?", help="Directory to search instead")
    sub.add_parser("directory", help="Prompt for a directory, then pick a file in it")
    sub.add_parser("git", help="Files under the enclosing git repository")
    sub.add_parser("hg", help="Files under the enclosing Mercurial repository")
    sub.add_parser("git-files", help="Files tracked by git (git ls-files)")

    grep = sub.add_parser("grep", help="Lines matching a pattern under the project root")
    grep.add_argument("pattern")
    grep.add_argument("-C", "--directory", help="Directory to search instead")

    git_grep = sub.add_parser("git-grep", help="Lines matching a pattern in tracked files")
    git_grep.add_argument("pattern")

    sub.add_parser("recent", help="Recently opened files")

    entries = sub.add_parser("entries", help="Pick one of the given entries and print it")
    entries.add_argument("items", nargs="+", metavar="entry")

    command = sub.add_parser("command", help="Pick a line of a shell command's output and print it")
    command.add_argument("source_command", metavar="shell-command")
    command.add_argument("-C", "--directory", help="Directory to run the command in")
    return parser


def plan_session(
    args: argparse.Namespace, config: FinderConfig
) -> tuple[SessionConfig, list[str] | None]:
    """Return the session to run for the parsed arguments, plus literal entries if any."""
    name = args.command or "files"
    if name == "files":
        return commands.files_session(config, getattr(args, "directory", None)), None
    if name == "directory":
        directory = prompt_user("Directory", default=current_directory())
        return commands.files_session(config, directory), None
    if name == "git":
        return commands.vcs_files_session(config, ".git"), None
    if name == "hg":
        return commands.vcs_files_session(config, ".hg"), None
    if name == "git-files":
        return commands.git_files_session(config), None
    if name == "grep":
        return commands.grep_session(config, args.pattern, args.directory), None
    if name == "git-grep":
        return commands.git_grep_session(config, args.pattern), None
    if name == "recent":
        return commands.recent_session(config)
    if name == "entries":
        return SessionConfig.from_finder_config(config, current_directory()), list(args.items)
    return commands.command_session(config, args.source_command, args.directory), None


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        config = load_config()
        session_config, entries = plan_session(args, config)
        outcome = commands.pick(session_config, entries)
    except FzfpickError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not outcome:
        log.debug("nothing selected")
        return 1

    if args.command in PRINT_COMMANDS:
        print(outcome.selected_text)
        return 0
    if args.print_only:
        print(format_location(outcome))
        return 0

    error = open_selection(outcome, config.editor)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    record_recent_file(outcome.file_path, limit=config.recent_limit)
    return 0


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
