import io
import sys

import pytest

from termview.cli import main


def run(capsys, *argv):
    rc = main(list(argv))
    out, err = capsys.readouterr()
    return rc, out, err


def test_messages_demo_prints_without_progress(capsys):
    """stdout is not a terminal under pytest, so only messages come out"""
    rc, out, err = run(capsys, "messages", "-n", "15", "-d", "0")
    assert rc == 0
    assert out == "5: buzz\n10: buzz\n15: fizzbuzz\n"


def test_partial_demo(capsys):
    rc, out, err = run(capsys, "partial", "-n", "4", "-d", "0")
    assert rc == 0
    assert out == "partial output 1... done!\n"


def test_threads_demo(capsys):
    rc, out, err = run(capsys, "threads", "-n", "2", "-d", "0", "--stderr")
    assert rc == 0
    assert out == ""
    for job in range(8):
        assert f"job {job} done\n" in err
    assert err.endswith("All 8 jobs complete\n")


@pytest.mark.parametrize("demo", ["count", "multiline", "linear", "unbounded", "shrink", "wide"])
def test_quiet_demos(capsys, demo):
    rc, out, err = run(capsys, demo, "-n", "3", "-d", "0", "--interval", "0", "--holdoff", "0ms")
    assert (rc, out, err) == (0, "", "")


def test_suspend_demo(capsys):
    rc, out, err = run(capsys, "suspend", "-n", "3", "-d", "0")
    assert rc == 0
    assert out == "progress hidden for a moment\n"


def test_bad_duration(capsys):
    rc, out, err = run(capsys, "count", "-d", "soon")
    assert rc == 1
    assert err == "Error: Invalid duration: soon\n"


def test_bad_steps(capsys):
    rc, out, err = run(capsys, "count", "-n", "0")
    assert rc == 1
    assert "--steps" in err


def test_unknown_demo(capsys):
    with pytest.raises(SystemExit):
        main(["nonesuch"])


class ClosedPipe(io.StringIO):
    def write(self, s):
        raise BrokenPipeError(32, "Broken pipe")


def test_closed_pipe_exits_quietly(monkeypatch, capsys):
    """Like `termview-demo messages | head -1` once head has exited"""
    monkeypatch.setattr(sys, "stdout", ClosedPipe())
    rc = main(["messages", "-n", "5", "-d", "0"])
    assert rc == 1
    assert capsys.readouterr().err == ""


def test_other_terminal_errors_exit_2(monkeypatch, capsys):
    class Failing(io.StringIO):
        def write(self, s):
            raise OSError("Input/output error")

    monkeypatch.setattr(sys, "stdout", Failing())
    rc = main(["messages", "-n", "5", "-d", "0"])
    assert rc == 2
    assert capsys.readouterr().err.startswith("Terminal error: Cannot write to terminal")
