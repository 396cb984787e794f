"""Output sinks for progress views: real terminal streams or an in-memory capture."""

import io
import os
import sys
from typing import TextIO

from termview.errors import TerminalError

__all__ = [
    "DEFAULT_WIDTH",
    "CaptureWriter",
    "StdStreamWriter",
    "StreamWriter",
    "TerminalWriter",
    "enable_windows_ansi",
    "is_dumb_term",
]

# Used when the terminal width cannot be determined, and for captured output
DEFAULT_WIDTH = 80


def is_dumb_term() -> bool:
    """True if $TERM says the terminal cannot handle cursor movement."""
    return os.environ.get("TERM", "").lower() == "dumb"


def enable_windows_ansi(stream: TextIO) -> bool:
    """Turn on escape sequence processing for a Windows console.

    Always true on other platforms. False if the console is too old to
    understand cursor movement, or the stream is not a console.
    """
    if sys.platform != "win32":
        return True
    from colorama.winterm import enable_vt_processing

    try:
        fd = stream.fileno()
    except (OSError, ValueError, AttributeError):
        return False
    return bool(enable_vt_processing(fd))


class TerminalWriter:
    """Where a view sends its bytes, and how wide that place is."""

    def _stream(self) -> TextIO:
        raise NotImplementedError

    def write(self, text: str):
        try:
            self._stream().write(text)
        except (OSError, ValueError) as e:
            raise TerminalError(f"Cannot write to terminal: {e}") from e

    def flush(self):
        try:
            self._stream().flush()
        except (OSError, ValueError) as e:
            raise TerminalError(f"Cannot flush terminal: {e}") from e

    def width(self) -> int:
        return DEFAULT_WIDTH

    def is_terminal(self) -> bool:
        return True

    def enable_ansi(self) -> bool:
        """Prepare the sink for escape sequences; false if it cannot take them."""
        return True


class StdStreamWriter(TerminalWriter):
    """Writes to sys.stdout or sys.stderr.

    The stream is looked up on every write rather than held, so that anything
    replacing sys.stdout (pytest capture, contextlib.redirect_stdout) also
    receives progress output.
    """

    def __init__(self, name: str):
        if name not in ("stdout", "stderr"):
            raise ValueError(f"Unknown standard stream: {name}")
        self.name = name

    def _stream(self) -> TextIO:
        return getattr(sys, self.name)

    def width(self) -> int:
        """Return the terminal width in columns, or DEFAULT_WIDTH."""
        try:
            return os.get_terminal_size(self._stream().fileno()).columns
        except (OSError, ValueError, AttributeError):
            return DEFAULT_WIDTH

    def is_terminal(self) -> bool:
        try:
            return self._stream().isatty()
        except (OSError, ValueError, AttributeError):
            return False

    def enable_ansi(self) -> bool:
        return enable_windows_ansi(self._stream())


class StreamWriter(TerminalWriter):
    """Writes to any text stream, assumed to be an ANSI terminal of fixed width."""

    def __init__(self, stream: TextIO, width: int = DEFAULT_WIDTH):
        self.stream = stream
        self._width = width

    def _stream(self) -> TextIO:
        return self.stream

    def width(self) -> int:
        return self._width

    def getvalue(self) -> str:
        if not hasattr(self.stream, "getvalue"):
            raise ValueError("Output of this stream is not captured")
        return self.stream.getvalue()


class CaptureWriter(StreamWriter):
    """In-memory sink standing in for a terminal, for tests."""

    def __init__(self, width: int = DEFAULT_WIDTH):
        super().__init__(io.StringIO(), width)
