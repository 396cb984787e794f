"""Decide when progress may be repainted."""

__all__ = ["RateLimiter", "should_paint"]


def should_paint(
    now: float,
    last_paint_time: float | None,
    last_text_time: float | None,
    update_interval: float,
    print_holdoff: float,
    forced: bool = False,
) -> bool:
    """Return True if enough time has passed to paint again.

    Forced paints always go ahead. Otherwise the last paint must be at least
    update_interval ago (or never have happened), and the last text write at
    least print_holdoff ago (or never have happened).
    """
    if forced:
        return True
    if last_paint_time is not None and now - last_paint_time < update_interval:
        return False
    if last_text_time is not None and now - last_text_time < print_holdoff:
        return False
    return True


class RateLimiter:
    """Remembers when progress was last painted and when text was last printed."""

    def __init__(self, update_interval: float, print_holdoff: float):
        self.update_interval = update_interval
        self.print_holdoff = print_holdoff
        self.last_paint_time: float | None = None
        self.last_text_time: float | None = None

    def should_paint(self, now: float, forced: bool = False) -> bool:
        return should_paint(
            now,
            self.last_paint_time,
            self.last_text_time,
            self.update_interval,
            self.print_holdoff,
            forced,
        )

    def painted(self, now: float):
        self.last_paint_time = now

    def printed(self, now: float):
        self.last_text_time = now
