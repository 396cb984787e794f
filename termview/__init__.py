"""termview - application-defined progress indicators for the terminal.

The application supplies a model that renders its own progress text; a View
decides when to repaint it, erases it cleanly, and keeps it out of the way of
text printed through the view.
"""

import logging

from termview.errors import TerminalError, ViewFinishedError
from termview.models import (
    BasicModel,
    DisplayModel,
    LinearModel,
    Model,
    StringPair,
    UnboundedModel,
)
from termview.options import Destination, Options
from termview.progress import View, ViewState
from termview.stats import estimate_remaining, percent_done

try:
    from termview._version import __version__
except ImportError:
    __version__ = "0.0.0.dev0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BasicModel",
    "Destination",
    "DisplayModel",
    "LinearModel",
    "Model",
    "Options",
    "StringPair",
    "TerminalError",
    "UnboundedModel",
    "View",
    "ViewFinishedError",
    "ViewState",
    "__version__",
    "estimate_remaining",
    "percent_done",
]
