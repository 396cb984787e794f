"""Exceptions raised by termview."""

__all__ = ["TerminalError", "ViewFinishedError"]


class TerminalError(Exception):
    """Writing to the terminal failed.

    The screen state is unknown after a failed write, so the view that raised
    this never writes again. Applications should treat it as fatal.
    """


class ViewFinishedError(RuntimeError):
    """Text was written through a view that was already finished."""
