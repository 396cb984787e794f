"""Formatting helpers for rendering progress models."""

import time

__all__ = [
    "duration_brief",
    "estimate_remaining",
    "format_time",
    "percent_done",
]


def format_time(seconds: float) -> str:
    """Format seconds as human-readable time."""
    if seconds < 0:
        return "--"
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 120:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        m = int(seconds // 60)
        s = int(seconds % 60)
        if s == 0:
            return f"{m}m"
        return f"{m}m{s}s"
    elif seconds < 172800:  # 48 hours
        h = int(seconds // 3600)
        m = int((seconds % 3600) // 60)
        if m == 0:
            return f"{h}h"
        return f"{h}h{m}m"
    else:
        d = int(seconds // 86400)
        h = int((seconds % 86400) // 3600)
        if h == 0:
            return f"{d}d"
        return f"{d}d{h}h"


def duration_brief(seconds: float) -> str:
    """Coarse duration: whole seconds below two minutes, else whole minutes."""
    secs = int(seconds)
    if secs >= 120:
        return f"{secs // 60} min"
    return f"{secs} sec"


def percent_done(done: int, total: int) -> str:
    """Percentage of work completed, e.g. "50.0%", or "??%" if unknown."""
    if total == 0 or done > total:
        return "??%"
    return f"{done * 100 / total:.1f}%"


def estimate_remaining(
    start: float, done: int, total: int, now: float | None = None
) -> str | None:
    """Extrapolate the time left for a task started at `start` (a monotonic time).

    Returns e.g. "33 sec" or "12 min", or None when nothing can be estimated
    yet (no work done, no time elapsed, or done beyond total).
    """
    if now is None:
        now = time.monotonic()
    elapsed = now - start
    if total == 0 or done == 0 or elapsed <= 0 or done > total:
        return None
    return duration_brief(elapsed * (total / done - 1))
