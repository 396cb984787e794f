import re

import pytest

from termview import Destination, Options


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def capture_options(clock):
    return Options(destination=Destination.CAPTURE, clock=clock)


_TOKEN = re.compile(r"\x1b\[(\d*)([A-Za-z])|(.)", re.DOTALL)


def emulate(output: str) -> list[str]:
    """Replay output on a minimal terminal and return the visible rows.

    Understands just what views emit: printable text, newlines, "previous
    line" and "clear to end of line". Other escape sequences are ignored.
    """
    rows: list[list[str]] = [[]]
    r = c = 0
    for m in _TOKEN.finditer(output):
        arg, cmd, ch = m.groups()
        if cmd == "F":
            r = max(0, r - int(arg or 1))
            c = 0
        elif cmd == "K" and arg in ("", "0"):
            del rows[r][c:]
        elif cmd:
            continue
        elif ch == "\n":
            r += 1
            c = 0
            if r == len(rows):
                rows.append([])
        else:
            row = rows[r]
            row.extend(" " * (c - len(row)))
            if c < len(row):
                row[c] = ch
            else:
                row.append(ch)
            c += 1
    lines = ["".join(row).rstrip() for row in rows]
    while lines and not lines[-1]:
        lines.pop()
    return lines


@pytest.fixture
def screen():
    return emulate
