import pytest

from termview.paint import (
    CLEAR_TO_END_OF_LINE as CL,
    PaintEngine,
    cursor_up,
    split_lines,
    truncate,
    visible_width,
)


def painted(lines, width=80):
    engine = PaintEngine()
    engine.commit(lines, width)
    return engine


def test_first_paint():
    engine = PaintEngine()
    assert engine.repaint(["a", "b"], 80) == f"{CL}a\n{CL}b\n"
    # Nothing changes until the write is committed
    assert engine.state.line_count == 0


def test_identical_repaint_is_empty():
    engine = painted(["a", "b"])
    assert engine.repaint(["a", "b"], 80) == ""
    assert engine.repaint(("a", "b"), 80) == ""


def test_width_change_repaints_identical_text():
    engine = painted(["a"], width=80)
    assert engine.repaint(["a"], 40) == f"{cursor_up(1)}{CL}a\n"


def test_repaint_same_height():
    engine = painted(["1/10"])
    assert engine.repaint(["2/10"], 80) == f"\x1b[1F{CL}2/10\n"


def test_grow():
    engine = painted(["a"])
    assert engine.repaint(["a", "b"], 80) == f"\x1b[1F{CL}a\n{CL}b\n"


def test_shrink_clears_leftover_lines():
    engine = painted(["one", "two", "three"])
    plan = engine.repaint(["x"], 80)
    assert plan == f"\x1b[3F{CL}x\n{CL}\n{CL}\n\x1b[2F"
    # Every row of the old block is cleared before anything is written to it
    assert plan.count(CL) == 3


def test_empty_render_erases():
    engine = painted(["a", "b"])
    assert engine.repaint([], 80) == engine.erase()
    engine.commit([], 80)
    assert engine.state.line_count == 0
    assert not engine.painted


def test_erase():
    engine = painted(["a", "b"])
    assert engine.erase() == f"\x1b[1F{CL}\x1b[1F{CL}"
    engine.reset()
    assert engine.erase() == ""
    assert engine.state.last_rendered is None


def test_commit_tracks_line_count():
    engine = PaintEngine()
    for lines in (["a"], ["a", "b", "c"], ["z"]):
        engine.repaint(lines, 80)
        engine.commit(lines, 80)
        assert engine.state.line_count == len(lines)
        assert engine.state.last_rendered == tuple(lines)


def test_long_lines_are_truncated():
    engine = PaintEngine()
    assert engine.repaint(["x" * 100], 10) == f"{CL}{'x' * 10}\n"


@pytest.mark.parametrize(
    "line, width, expected",
    [
        ("abcdef", 3, "abc"),
        ("abc", 3, "abc"),
        ("abc", 0, ""),
        ("\x1b[31mabcdef\x1b[0m", 3, "\x1b[31mabc\x1b[0m"),
        ("日本語", 5, "日本"),
        ("日本語", 6, "日本語"),
        ("éx", 1, "é"),
        ("\x1b]0;title\x07abc", 2, "\x1b]0;title\x07ab"),
        ("\t\t\tX", 10, " " * 10),
        ("a\tb", 80, "a       b"),
        ("ab\tc", 5, "ab   "),
        ("\x1b[1m\tX\x1b[0m", 4, "\x1b[1m    \x1b[0m"),
        ("a\bc\x00d\re", 80, "acde"),
        ("\x1bab", 1, "a"),
        ("e\u0301x", 1, "e\u0301"),
    ],
)
def test_truncate(line, width, expected):
    assert truncate(line, width) == expected


def test_visible_width():
    assert visible_width("\x1b[1mab\x1b[0m") == 2
    assert visible_width("日本") == 4


@pytest.mark.parametrize(
    "rendered, expected",
    [
        ("a", ("a",)),
        ("a\nb\n", ("a", "b")),
        ("a\r\nb", ("a", "b")),
        ("", ()),
        (["a\nb", "c"], ("a", "b", "c")),
        (["", "x"], ("", "x")),
        ([], ()),
    ],
)
def test_split_lines(rendered, expected):
    assert split_lines(rendered) == expected


@pytest.mark.parametrize(
    "line, expected",
    [
        ("\t\t\tX", 25),
        ("ab\tc", 9),
        ("a\x07b\x7f", 2),
        ("\x1b[31m日\t\x1b[0m", 8),
    ],
)
def test_visible_width_of_tabs_and_controls(line, expected):
    assert visible_width(line) == expected


def test_tabs_never_overflow_the_width():
    engine = PaintEngine()
    plan = engine.repaint(["0\t\t|", "\t\tx\bx"], 10)
    rows = plan.split("\n")[:-1]
    assert len(rows) == 2
    for row in rows:
        assert visible_width(row) <= 10
