"""The Model interface, and general-purpose models built on it.

A model holds whatever state the application needs to draw its progress, and
renders that state to text. The helper models here use only the public
interface and double as examples of application-defined models.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from termview.stats import estimate_remaining, format_time, percent_done

__all__ = [
    "BasicModel",
    "DisplayModel",
    "LinearModel",
    "Model",
    "StringPair",
    "UnboundedModel",
    "render_model",
]


class Model(ABC):
    """Application-defined progress state that can render itself."""

    @abstractmethod
    def render(self, width: int) -> str | Sequence[str]:
        """Render the progress to draw, as a string or a sequence of lines.

        Lines should be at most `width` columns; longer ones are truncated.
        The text may carry ANSI styling but must not move the cursor.
        """

    def final_message(self) -> str | Sequence[str]:
        """Text left on screen by View.finish(). Empty means nothing."""
        return ""


def render_model(model: Any, width: int) -> str | Sequence[str]:
    """Render any object: models through render(), anything else through str()."""
    render = getattr(model, "render", None)
    if render is None:
        return str(model)
    return render(width)


class StringPair(Model):
    """Concatenates a prefix, such as the operation, and a suffix, such as the current file."""

    def __init__(self, prefix: str, suffix: str = ""):
        self.prefix = prefix
        self.suffix = suffix

    def set_suffix(self, suffix: str):
        self.suffix = suffix

    def render(self, width: int) -> str:
        return f"{self.prefix}{self.suffix}"


class BasicModel(Model):
    """A value plus a function that renders it, to avoid defining a Model class."""

    def __init__(self, value: Any, render_fn: Callable[[Any], str]):
        self.value = value
        self.render_fn = render_fn

    def render(self, width: int) -> str:
        return self.render_fn(self.value)


class DisplayModel(Model):
    """Renders str() of the wrapped value."""

    def __init__(self, value: Any):
        self.value = value

    def render(self, width: int) -> str:
        return str(self.value)


class LinearModel(Model):
    """Counts `done` of `total` items, with percentage and estimated time left."""

    def __init__(self, message: str, total: int, clock: Callable[[], float] = time.monotonic):
        self.message = message
        self.total = total
        self.done = 0
        self.clock = clock
        self.start = clock()

    def increment(self, n: int = 1):
        self.done += n

    def set_done(self, done: int):
        self.done = done

    def set_total(self, total: int):
        self.total = total

    def set_message(self, message: str):
        self.message = message

    def render(self, width: int) -> str:
        text = f"{self.message}: {self.done}/{self.total}, {percent_done(self.done, self.total)}"
        remaining = estimate_remaining(self.start, self.done, self.total, now=self.clock())
        if remaining is not None:
            text += f", {remaining} remaining"
        return text


class UnboundedModel(Model):
    """Counts items with no known total, showing the count and elapsed time."""

    def __init__(self, message: str, clock: Callable[[], float] = time.monotonic):
        self.message = message
        self.done = 0
        self.clock = clock
        self.start = clock()

    def increment(self, n: int = 1):
        self.done += n

    def set_message(self, message: str):
        self.message = message

    def render(self, width: int) -> str:
        elapsed = self.clock() - self.start
        return f"{self.message}: {self.done} in {format_time(elapsed)}"
