"""Options controlling a progress view."""

import dataclasses
import enum
import time
from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["Destination", "Options"]


class Destination(enum.Enum):
    """Where progress and messages are written."""

    STDOUT = "stdout"
    STDERR = "stderr"
    # In-memory buffer, read back with View.captured_output(); 80 columns wide
    CAPTURE = "capture"


@dataclass(frozen=True)
class Options:
    """Settings fixed when a View is created.

    Intervals are in seconds. An update_interval of 0 repaints on every
    update, a print_holdoff of 0 repaints right after printed text.

    clock is the time source used for rate limiting; tests may pass a fake
    one to control exactly which updates are painted.
    """

    destination: Destination = Destination.STDOUT
    update_interval: float = 0.1
    print_holdoff: float = 0.1
    enabled: bool = True
    clock: Callable[[], float] = time.monotonic

    def __post_init__(self):
        if self.update_interval < 0 or self.print_holdoff < 0:
            raise ValueError("Intervals must not be negative")

    def replace(self, **changes) -> "Options":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)
