"""Escape-sequence plans to draw, redraw and erase a block of progress lines.

The painted block always ends with a newline, so after a paint the cursor sits
at column 1 of the line just below the block. That is where interleaved text
goes once the block has been erased, and where the next repaint starts from
after moving up over the old block.
"""

import logging
import re
import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass

from rich.cells import cell_len

__all__ = [
    "CLEAR_TO_END_OF_LINE",
    "PaintEngine",
    "PaintedState",
    "cursor_up",
    "split_lines",
    "truncate",
    "visible_width",
]

logger = logging.getLogger(__name__)

CLEAR_TO_END_OF_LINE = "\x1b[0K"
TAB_WIDTH = 8

# CSI sequences (colors, cursor moves), OSC sequences (titles, hyperlinks),
# and the remaining two-character escapes
_ESCAPE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[@-Z\\-_]"
)


def cursor_up(n: int) -> str:
    """Move to column 1 of the line n rows above."""
    return f"\x1b[{n}F"


def _cells(line: str):
    """Yield (text, columns) pieces of line as the terminal lays them out.

    Tabs become spaces up to the next tab stop. Other control characters
    would move the cursor on their own and are dropped.
    """
    col = 0
    pos = 0
    while pos < len(line):
        m = _ESCAPE.match(line, pos)
        if m:
            yield m.group(), 0
            pos = m.end()
            continue
        ch = line[pos]
        pos += 1
        if ch == "\t":
            n = TAB_WIDTH - col % TAB_WIDTH
            ch = " " * n
        elif unicodedata.category(ch) == "Cc":
            continue
        else:
            n = cell_len(ch)
        col += n
        yield ch, n


def visible_width(line: str) -> int:
    """Number of terminal columns the line occupies, ignoring escape sequences."""
    return sum(n for _, n in _cells(line))


def truncate(line: str, width: int) -> str:
    """Cut line to at most width columns.

    Escape sequences take no space and are kept even past the cut, so styling
    that is reset at the end of the line still gets reset.
    """
    if line.isascii() and line.isprintable() and len(line) <= width:
        return line
    out = []
    col = 0
    cut = False
    for text, n in _cells(line):
        if text.startswith("\x1b"):
            out.append(text)
            continue
        if cut:
            continue
        if col + n > width:
            cut = True
            if text.isspace():
                # Part of a tab still fits
                out.append(" " * (width - col))
                col = width
            continue
        out.append(text)
        col += n
    return "".join(out)


def split_lines(rendered: str | Sequence[str]) -> tuple[str, ...]:
    """Normalise what a model rendered into a tuple of single lines.

    A string is split at its line breaks, ignoring one trailing newline. In a
    sequence, an entry containing line breaks is split into several lines so
    that every entry occupies exactly one terminal row.
    """
    if isinstance(rendered, str):
        return tuple(rendered.splitlines())
    lines: list[str] = []
    for entry in rendered:
        parts = entry.splitlines()
        if len(parts) > 1:
            logger.debug("Splitting rendered entry with embedded line breaks: %r", entry)
        lines.extend(parts or [""])
    return tuple(lines)


@dataclass
class PaintedState:
    """What is on screen right now."""

    line_count: int = 0
    last_rendered: tuple[str, ...] | None = None
    width: int | None = None


class PaintEngine:
    """Produces the text to write for each repaint and erase.

    Plans are computed from the current PaintedState but do not change it: the
    caller writes the plan and then calls commit() or reset(), so a failed
    write leaves the bookkeeping as it was.
    """

    def __init__(self):
        self.state = PaintedState()

    @property
    def painted(self) -> bool:
        return self.state.line_count > 0

    def repaint(self, lines: Sequence[str], width: int) -> str:
        lines = tuple(lines)
        st = self.state
        if st.line_count and lines == st.last_rendered and width == st.width:
            return ""
        if not lines:
            return self.erase()

        buf = []
        if st.line_count:
            buf.append(cursor_up(st.line_count))
        for line in lines:
            buf.append(f"{CLEAR_TO_END_OF_LINE}{truncate(line, width)}\n")

        # Blank out rows left over from a taller block, then come back up
        extra = st.line_count - len(lines)
        if extra > 0:
            buf.append(f"{CLEAR_TO_END_OF_LINE}\n" * extra)
            buf.append(cursor_up(extra))
        return "".join(buf)

    def erase(self) -> str:
        """Clear every painted line, bottom up, leaving the cursor where the block began."""
        return f"{cursor_up(1)}{CLEAR_TO_END_OF_LINE}" * self.state.line_count

    def commit(self, lines: Sequence[str], width: int):
        lines = tuple(lines)
        if not lines:
            self.reset()
            return
        self.state = PaintedState(len(lines), lines, width)

    def reset(self):
        self.state = PaintedState()
