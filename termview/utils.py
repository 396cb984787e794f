"""Parsing helpers for the demo command line."""

import re

__all__ = ["parse_duration"]

_UNITS = {"ms": 0.001, "s": 1.0, "sec": 1.0, "m": 60.0, "min": 60.0}


def parse_duration(text: str | None) -> float | None:
    """Parse a duration into seconds.

    Supports:
    - Plain numbers, in seconds: 0.5, 2
    - Suffixes ms, s/sec, m/min: 100ms, 0.5s, 2m
    - Case insensitive, whitespace and underscores ignored

    Examples: 100ms, 1_500ms, 0.25s, 1min
    """
    if text is None:
        return None
    s = text.strip().lower().replace("_", "")

    m = re.match(r"^(\d+(?:\.\d+)?)\s*(ms|sec|s|min|m)?$", s)
    if not m:
        raise ValueError(f"Invalid duration: {text}")
    num, unit = m.groups()
    return float(num) * _UNITS[unit or "s"]
