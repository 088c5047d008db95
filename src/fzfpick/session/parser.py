"""Turn a finder transcript into a structured selection.

With ``--print-query`` fzf finishes by printing the typed query followed by the
selected entry. A transcript captured through a pseudo-terminal also carries
escape sequences and prompt redraws around those two lines, so the parser
scrubs those first and then reads the logical output from the end.
"""

import logging
import os
import re

from fzfpick.models import EMPTY, Empty, SelectionResult

log = logging.getLogger(__name__)

# CSI sequences (cursor movement, colors, erase) and OSC sequences (titles).
ANSI_ESCAPE_RE = re.compile(
    r"\x1b\[[0-9;?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[()][0-9A-Za-z]"
    r"|\x1b[=>78]"
)

# A line holding nothing but the prompt marker is a redraw fragment.
PROMPT_ONLY_RE = re.compile(r"^\s*>\s*$")

LINE_NUMBER_RE = re.compile(r"^[0-9]+$")


def _clean_line(line: str) -> str:
    line = ANSI_ESCAPE_RE.sub("", line).rstrip("\r")
    # A bare carriage return means the terminal redrew the line from column 0.
    if "\r" in line:
        line = line.rsplit("\r", 1)[1]
    return line


def scrub(transcript: str) -> list[str]:
    """Return the transcript's logical lines with redraw noise removed."""
    lines = [_clean_line(line) for line in transcript.split("\n")]
    lines = [line for line in lines if not PROMPT_ONLY_RE.match(line)]
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def split_selection(selected: str) -> tuple[str, int | None]:
    """Split ``path[:line[:text]]`` into the path candidate and an optional line number.

    Only the first two colon-separated fields are considered; whatever follows
    the second colon is match text and is ignored.
    """
    fields = selected.split(":", 2)
    line_number = None
    if len(fields) >= 2 and LINE_NUMBER_RE.match(fields[1]):
        value = int(fields[1])
        if value > 0:
            line_number = value
    if len(fields) == 1:
        return selected, None
    return fields[0], line_number


def resolve_path(candidate: str, working_directory: str | None = None) -> str | None:
    """Return an absolute path for the candidate, which need not exist."""
    if not candidate:
        return None
    base = working_directory or os.getcwd()
    return os.path.abspath(os.path.join(base, os.path.expanduser(candidate)))


def parse(
    transcript: str | bytes,
    working_directory: str | None = None,
    with_query: bool = True,
) -> SelectionResult | Empty:
    """Parse a finder transcript into a SelectionResult, or EMPTY when nothing was chosen."""
    if isinstance(transcript, bytes):
        transcript = transcript.decode(errors="replace")

    lines = scrub(transcript)
    if with_query:
        if len(lines) < 2:
            log.debug("no selection line in transcript (%d lines)", len(lines))
            return EMPTY
        query, selected = lines[-2], lines[-1].strip()
    else:
        if not lines:
            return EMPTY
        query, selected = "", lines[-1].strip()

    if not selected:
        return EMPTY

    candidate, line_number = split_selection(selected)
    file_path = resolve_path(candidate.strip(), working_directory)
    log.debug("query=%r selected=%r path=%s line=%s", query, selected, file_path, line_number)
    return SelectionResult(
        query=query,
        selected_text=selected,
        file_path=file_path,
        line_number=line_number,
    )
