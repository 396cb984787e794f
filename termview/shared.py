"""A process-wide progress view, for programs that don't want to pass a View around.

Install it once at a known point, reach it from anywhere with current(), and
tear it down explicitly with uninstall(). Nothing is cleaned up automatically
at exit beyond what View itself does when garbage collected.
"""

import threading
from typing import Any

from termview.options import Options
from termview.progress import View

__all__ = ["current", "install", "uninstall"]

_lock = threading.Lock()
_view: View | None = None


def install(model: Any, options: Options | None = None) -> View:
    """Create the process-wide view."""
    global _view
    with _lock:
        if _view is not None:
            raise RuntimeError("A shared progress view is already installed")
        _view = View(model, options)
        return _view


def current() -> View:
    """Return the installed view."""
    view = _view
    if view is None:
        raise LookupError("No shared progress view is installed")
    return view


def uninstall(finish: bool = True) -> Any:
    """Remove the process-wide view and return its model.

    With finish=True the progress is erased and the final message printed,
    otherwise the progress is left on screen as by View.abandon().
    """
    global _view
    with _lock:
        view, _view = _view, None
    if view is None:
        raise LookupError("No shared progress view is installed")
    return view.finish() if finish else view.abandon()
