"""Progress view: draws a model on the terminal and interleaves printed text."""

import enum
import logging
import threading
from collections.abc import Callable
from typing import Any, TextIO, TypeVar

from termview.errors import TerminalError, ViewFinishedError
from termview.models import render_model
from termview.options import Destination, Options
from termview.paint import PaintEngine, split_lines
from termview.ratelimit import RateLimiter
from termview.terminal import (
    DEFAULT_WIDTH,
    CaptureWriter,
    StdStreamWriter,
    StreamWriter,
    TerminalWriter,
    is_dumb_term,
)

__all__ = ["View", "ViewState"]

logger = logging.getLogger(__name__)

R = TypeVar("R")


class ViewState(enum.Enum):
    DISABLED = "disabled"  # Not drawing progress; text is still printed
    IDLE = "idle"  # Nothing painted
    PAINTED = "painted"  # Progress is on screen
    SUSPENDED = "suspended"  # Hidden until the next update or resume()
    FINISHED = "finished"  # Never writes again


def _writer_for(destination: Destination) -> TerminalWriter:
    if destination is Destination.CAPTURE:
        return CaptureWriter()
    return StdStreamWriter(destination.value)


class View:
    """Draws an application-defined model as progress on the terminal.

    The application changes its model only through update(), which may
    repaint the progress subject to the rate limits in Options. Text printed
    through message() or write() goes above the progress: the progress is
    erased, the text written, and the progress painted again by a later update
    once print_holdoff has passed. While a printed line is incomplete (no
    final newline yet) progress is not painted at all.

    One lock serializes every entry point, so a View may be shared between
    threads. The model is rendered while holding that lock: render() must be
    quick and must not call back into the View.

    There should be only one active View per terminal, and while it is active
    all output to that terminal should go through it.

    When the View is finished, abandoned or garbage collected it writes
    nothing more. Use it as a context manager to finish() it at the end of a
    block.
    """

    def __init__(
        self,
        model: Any,
        options: Options | None = None,
        *,
        writer: TerminalWriter | None = None,
    ):
        self.options = options = options or Options()
        self._model = model
        self._writer = writer or _writer_for(options.destination)
        self._lock = threading.Lock()
        self._paint = PaintEngine()
        self._limiter = RateLimiter(options.update_interval, options.print_holdoff)
        # Set when the last text written did not end in a newline
        self._incomplete_line = False

        enabled = options.enabled
        # Checked once: a view does not start drawing if the terminal changes later
        if enabled and isinstance(self._writer, StdStreamWriter):
            enabled = self._writer.is_terminal() and not is_dumb_term() and self._writer.enable_ansi()
        self._state = ViewState.IDLE if enabled else ViewState.DISABLED
        logger.debug(
            "Progress view on %s: %s",
            options.destination.value if writer is None else type(writer).__name__,
            "enabled" if enabled else "disabled",
        )

    @classmethod
    def write_to(
        cls,
        model: Any,
        stream: TextIO,
        width: int = DEFAULT_WIDTH,
        options: Options | None = None,
    ) -> "View":
        """Draw to any text stream, assumed to be an ANSI terminal `width` columns wide."""
        return cls(model, options, writer=StreamWriter(stream, width))

    @property
    def state(self) -> ViewState:
        return self._state

    def update(self, fn: Callable[[Any], R]) -> R:
        """Apply fn to the model, maybe repaint, and return what fn returned.

        A suspended view is shown again by the next update.
        """
        with self._lock:
            result = fn(self._model)
            if self._state in (ViewState.DISABLED, ViewState.FINISHED):
                return result
            forced = self._state is ViewState.SUSPENDED
            if forced:
                self._state = ViewState.IDLE
            self._paint_progress(forced)
            return result

    def inspect_model(self, fn: Callable[[Any], R]) -> R:
        with self._lock:
            return fn(self._model)

    def message(self, text: str | bytes):
        """Print text above the progress.

        The text may hold several lines and ANSI styling. If it does not end in
        a newline, progress stays hidden until a later message completes the
        line.
        """
        with self._lock:
            self._write_text(text)

    def write(self, text: str | bytes) -> int:
        """File-like write, so the view can be passed as print(..., file=view)."""
        if not text:
            return 0
        with self._lock:
            self._write_text(text)
        return len(text)

    def flush(self):
        """Text is flushed as it is written; nothing to do."""

    def suspend(self):
        """Erase the progress and keep it hidden until the next update or resume()."""
        with self._lock:
            if self._state in (ViewState.DISABLED, ViewState.FINISHED):
                return
            self._hide()
            self._state = ViewState.SUSPENDED

    hide = suspend

    def resume(self):
        """Show suspended progress again right away."""
        with self._lock:
            if self._state is not ViewState.SUSPENDED:
                return
            self._state = ViewState.IDLE
            self._paint_progress(forced=True)

    def finish(self) -> Any:
        """Erase the progress, print the model's final message, and return the model."""
        with self._lock:
            if self._state is ViewState.FINISHED:
                return self._model
            self._hide()
            self._state = ViewState.FINISHED
            final_message = getattr(self._model, "final_message", None)
            lines = split_lines(final_message()) if final_message else ()
            if lines:
                self._emit("\n".join(lines) + "\n")
            logger.debug("Progress view finished")
            return self._model

    def abandon(self) -> Any:
        """Stop using the view, leaving any painted progress on screen, and return the model."""
        with self._lock:
            if self._state is not ViewState.FINISHED:
                self._state = ViewState.FINISHED
                logger.debug("Progress view abandoned with %d lines on screen", self._paint.state.line_count)
            return self._model

    def close(self):
        """Erase the progress, if painted, and stop using the view. Safe to call repeatedly."""
        with self._lock:
            self._close()

    def captured_output(self) -> str:
        """All text written so far, for views writing to Destination.CAPTURE or a StringIO."""
        if not isinstance(self._writer, StreamWriter):
            raise ValueError("Output of this view is not captured")
        with self._lock:
            return self._writer.getvalue()

    def __enter__(self) -> "View":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.finish()

    def __del__(self):
        # Never wait here: if another thread holds the lock, give up on erasing
        lock = getattr(self, "_lock", None)
        if lock is None or not hasattr(self, "_state") or not lock.acquire(blocking=False):
            return
        try:
            self._close()
        except TerminalError:
            logger.exception("Cannot erase progress while discarding view")
        finally:
            lock.release()

    def _close(self):
        if self._state is ViewState.FINISHED:
            return
        self._hide()
        self._state = ViewState.FINISHED

    def _paint_progress(self, forced: bool = False):
        if self._incomplete_line:
            return
        width = self._writer.width()
        if self._paint.painted and width != self._paint.state.width:
            forced = True
        now = self.options.clock()
        if not self._limiter.should_paint(now, forced):
            return
        lines = split_lines(render_model(self._model, width))
        plan = self._paint.repaint(lines, width)
        if plan:
            self._emit(plan)
            self._limiter.painted(now)
        self._paint.commit(lines, width)
        self._state = ViewState.PAINTED if self._paint.painted else ViewState.IDLE

    def _hide(self):
        if self._paint.painted:
            self._emit(self._paint.erase())
            self._paint.reset()

    def _write_text(self, text: str | bytes):
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8", errors="replace")
        if not text:
            return
        if self._state is ViewState.FINISHED:
            raise ViewFinishedError("Cannot print through a finished progress view")
        self._emit(self._paint.erase() + text)
        self._paint.reset()
        self._incomplete_line = not text.endswith("\n")
        self._limiter.printed(self.options.clock())
        if self._state is ViewState.PAINTED:
            self._state = ViewState.IDLE

    def _emit(self, text: str):
        try:
            self._writer.write(text)
            self._writer.flush()
        except TerminalError:
            # The screen is in an unknown state now; never touch it again
            self._state = ViewState.FINISHED
            raise
