"""Command-line demos of termview progress views."""

import argparse
import logging
import random
import sys
import threading
import time

import tracerite

from termview.errors import TerminalError
from termview.models import BasicModel, LinearModel, Model, UnboundedModel
from termview.options import Destination, Options
from termview.progress import View
from termview.utils import parse_duration

tracerite.load()

__all__ = ["main"]

BAR_WIDTH = 20


class JobsModel(Model):
    """One bar per worker thread, plus a summary line."""

    def __init__(self, jobs: int, steps: int):
        self.steps = steps
        self.done = [0] * jobs

    def render(self, width: int) -> list[str]:
        complete = sum(1 for d in self.done if d >= self.steps)
        lines = [f"{complete}/{len(self.done)} complete"]
        for i, d in enumerate(self.done):
            filled = BAR_WIDTH * d // self.steps
            lines.append(f"{i:3}: {'#' * filled}{'_' * (BAR_WIDTH - filled)}")
        return lines

    def final_message(self) -> str:
        return f"All {len(self.done)} jobs complete"


class GrowingModel(Model):
    """Line count rises and falls, to show that a shrinking block leaves nothing behind."""

    def __init__(self):
        self.i = 0

    def render(self, width: int) -> list[str]:
        n = 1 + abs(4 - self.i % 8)
        return [f"step {self.i}, {n} lines"] + [f"  line {j}" for j in range(1, n)]


def demo_count(view_options, args):
    model = BasicModel((0, args.steps), lambda v: f"{v[0]}/{v[1]} complete")
    with View(model, view_options) as view:
        for _ in range(args.steps):
            view.update(lambda m: setattr(m, "value", (m.value[0] + 1, m.value[1])))
            time.sleep(args.delay)


def demo_multiline(view_options, args):
    model = BasicModel(0, lambda i: f"  count: {i}\n    bar: {'*' * (i % 40)}")
    with View(model, view_options) as view:
        for _ in range(args.steps):
            view.update(lambda m: setattr(m, "value", m.value + 1))
            time.sleep(args.delay)


def demo_linear(view_options, args):
    with View(LinearModel("Counting raindrops", args.steps), view_options) as view:
        for _ in range(args.steps):
            view.update(lambda m: m.increment(1))
            time.sleep(args.delay)


def demo_unbounded(view_options, args):
    with View(UnboundedModel("Counting raindrops"), view_options) as view:
        for _ in range(args.steps):
            view.update(lambda m: m.increment(1))
            time.sleep(args.delay)


def demo_messages(view_options, args):
    model = BasicModel(0, lambda i: f"checking {i}...")
    with View(model, view_options) as view:
        for i in range(1, args.steps + 1):
            view.update(lambda m: setattr(m, "value", i))
            if i % 15 == 0:
                view.message(f"{i}: fizzbuzz\n")
            elif i % 5 == 0:
                print(f"{i}: buzz", file=view)
            time.sleep(args.delay)


def demo_partial(view_options, args):
    model = BasicModel(0, lambda i: f"progress: {i}")
    with View(model, view_options) as view:
        for i in range(1, args.steps + 1):
            view.update(lambda m: setattr(m, "value", m.value + 1))
            time.sleep(args.delay)
            if i % 4 == 1:
                view.message(f"partial output {i}... ")
            elif i % 4 == 3:
                view.message("done!\n")


def demo_suspend(view_options, args):
    model = BasicModel(0, lambda i: f"working: {i}")
    with View(model, view_options) as view:
        for i in range(1, args.steps + 1):
            if i == args.steps // 2:
                view.suspend()
                view.message("progress hidden for a moment\n")
                time.sleep(args.delay * 5)
            view.update(lambda m: setattr(m, "value", i))
            time.sleep(args.delay)


def demo_threads(view_options, args):
    jobs = 8
    view = View(JobsModel(jobs, args.steps), view_options)

    def work(job: int):
        for _ in range(args.steps):
            view.update(lambda m: m.done.__setitem__(job, m.done[job] + 1))
            time.sleep(args.delay * random.uniform(0.5, 2))
        view.message(f"job {job} done\n")

    threads = [threading.Thread(target=work, args=(job,)) for job in range(jobs)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    view.finish()


def demo_shrink(view_options, args):
    with View(GrowingModel(), view_options) as view:
        for _ in range(args.steps):
            view.update(lambda m: setattr(m, "i", m.i + 1))
            time.sleep(args.delay)


def demo_wide(view_options, args):
    model = BasicModel(0, lambda i: f"{i:4} " + "=" * 300 + ">")
    with View(model, view_options) as view:
        for _ in range(args.steps):
            view.update(lambda m: setattr(m, "value", m.value + 1))
            time.sleep(args.delay)


DEMOS = {
    "count": demo_count,
    "multiline": demo_multiline,
    "linear": demo_linear,
    "unbounded": demo_unbounded,
    "messages": demo_messages,
    "partial": demo_partial,
    "suspend": demo_suspend,
    "threads": demo_threads,
    "shrink": demo_shrink,
    "wide": demo_wide,
}


def build_options(args) -> Options:
    options = Options(
        destination=Destination.STDERR if args.stderr else Destination.STDOUT,
        enabled=not args.no_progress,
    )
    if args.interval is not None:
        options = options.replace(update_interval=parse_duration(args.interval))
    if args.holdoff is not None:
        options = options.replace(print_holdoff=parse_duration(args.holdoff))
    return options


def _main(argv=None):
    """Internal main function that may raise exceptions."""
    parser = argparse.ArgumentParser(description="Demonstrate terminal progress views")
    parser.add_argument("demo", choices=sorted(DEMOS), help="Demo to run")
    parser.add_argument(
        "-n",
        "--steps",
        help="Number of updates (default: 50)",
        type=int,
        default=50,
    )
    parser.add_argument(
        "-d",
        "--delay",
        help="Pause between updates (e.g. 100ms, 0.5s; default: 50ms)",
        type=str,
        default="50ms",
    )
    parser.add_argument(
        "--interval",
        help="Minimum time between repaints (default: 100ms)",
        type=str,
        default=None,
    )
    parser.add_argument(
        "--holdoff",
        help="Time after printed text before progress returns (default: 100ms)",
        type=str,
        default=None,
    )
    parser.add_argument(
        "--stderr",
        action="store_true",
        help="Draw progress and messages on stderr instead of stdout",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Don't draw progress, only print messages",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose mode: log view decisions to stderr",
    )

    args = parser.parse_args(argv)
    if args.steps < 1:
        raise ValueError("--steps must be at least 1")
    args.delay = parse_duration(args.delay)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    DEMOS[args.demo](build_options(args), args)


def main(argv=None) -> int:
    """Main entry point for the CLI with exception handling."""
    try:
        _main(argv)
    except (KeyboardInterrupt, BrokenPipeError):
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except TerminalError as e:
        if isinstance(e.__cause__, BrokenPipeError):
            return 1
        print(f"Terminal error: {e}", file=sys.stderr)
        return 2
    return 0
