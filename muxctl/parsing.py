"""Parsing helpers for multiplexer replies."""

from typing import NamedTuple

SESSION_NAME_FORMAT = "#{session_name}"
PANE_SIZE_FORMAT = "#{pane_width} #{pane_height}"


class PaneSize(NamedTuple):
    """Pane dimensions in character cells.

    Attributes:
        width: Pane width in columns.
        height: Pane height in rows.
        found: False when the size could not be determined.
    """

    width: int
    height: int
    found: bool


NOT_FOUND = PaneSize(0, 0, False)


def parse_session_names(output: str, prefix: str = "") -> list[str]:
    """Extract session names from list-sessions output.

    Blank lines are skipped and the multiplexer's ordering is kept.

    Args:
        output: Raw stdout, one session name per line.
        prefix: Only names starting with this prefix are returned.

    Returns:
        Matching session names.
    """
    sessions = []
    for line in output.strip().split("\n"):
        line = line.strip()
        if not line:
            continue
        if prefix and not line.startswith(prefix):
            continue
        sessions.append(line)
    return sessions


def parse_pane_size(output: str) -> PaneSize:
    """Parse a ``"<width> <height>"`` reply.

    Anything other than exactly two integers yields NOT_FOUND.
    """
    parts = output.split()
    if len(parts) != 2:
        return NOT_FOUND
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        return NOT_FOUND
    return PaneSize(width, height, True)
