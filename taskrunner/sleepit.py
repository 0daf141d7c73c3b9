"""A command that sleeps for a while, optionally handling interrupt signals."""

from __future__ import annotations

import argparse
import os
import queue
import re
import signal
import sys
import threading
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

USAGE = """sleepit: sleep for the specified duration, optionally handling signals
When the line "sleepit: ready" is printed, it means that it is safe to send signals to it
Usage: sleepit <command> [<args>]
Commands
  default     Use default action: on reception of SIGINT terminate abruptly
  handle      Handle signals: on reception of SIGINT perform cleanup before exiting
  version     Show the sleepit version"""

FULL_VERSION = "unknown"

_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)?")
_WORK_STEP = 0.1


def parse_duration(text: str) -> float:
    """Parse a duration such as "300ms", "1.5h" or "2h45m" into seconds."""
    rest = text
    sign = 1.0
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1.0
        rest = rest[1:]
    if rest == "0":
        return 0.0
    if not rest:
        raise ValueError(f'time: invalid duration "{text}"')
    total = 0.0
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        if match is None:
            raise ValueError(f'time: invalid duration "{text}"')
        number, unit = match.groups()
        if unit is None:
            raise ValueError(f'time: missing unit in duration "{text}"')
        total += float(number) * _UNITS[unit]
        pos = match.end()
    return sign * total


def _fraction(value: int, precision: int) -> str:
    scale = 10**precision
    whole, frac = divmod(value, scale)
    if not frac:
        return str(whole)
    return f"{whole}.{str(frac).zfill(precision).rstrip('0')}"


def _format_duration(seconds: float) -> str:
    nanos = round(seconds * 1e9)
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos == 0:
        return "0s"
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_fraction(nanos, 3)}µs"
    if nanos < 1_000_000_000:
        return f"{sign}{_fraction(nanos, 6)}ms"
    minutes, rem = divmod(nanos, 60 * 10**9)
    text = _fraction(rem, 9) + "s"
    if minutes:
        hours, minutes = divmod(minutes, 60)
        text = f"{minutes}m{text}"
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def _say(message: str) -> None:
    print(f"sleepit: {message}", flush=True)


class _Worker:
    """Simulates work in a thread until its time elapses or it is cancelled."""

    def __init__(self, name: str, duration: float, events: queue.Queue) -> None:
        self.name = name
        self.cancelled = threading.Event()
        self._deadline = time.monotonic() + duration
        self._events = events
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        _say(f"{self.name} started")
        while True:
            if self.cancelled.is_set():
                _say(f"{self.name} canceled")
                return
            if time.monotonic() > self._deadline:
                _say(f"{self.name} done")
                self._events.put(("done", self.name))
                return
            self.cancelled.wait(_WORK_STEP)

    def cancel(self) -> None:
        """Cancel the work and wait until the worker has stopped."""
        self.cancelled.set()
        self._thread.join()


def _supervisor(sleep: float, cleanup: float, term_after: int, events: queue.Queue) -> int:
    _say("ready")
    _say(
        f"PID={os.getpid()} sleep={_format_duration(sleep)} "
        f"cleanup={_format_duration(cleanup)}"
    )

    work = _Worker("work", sleep, events)
    cleaner: _Worker | None = None
    count = 0
    while True:
        try:
            kind, value = events.get(timeout=_WORK_STEP)
        except queue.Empty:
            continue
        if kind == "signal":
            count += 1
            _say(f"got signal={value} count={count}")
            if count == 1:
                work.cancel()
                cleaner = _Worker("cleanup", cleanup, events)
            if count == term_after:
                if cleaner is not None:
                    cleaner.cancel()
                return 4
        elif value == "work":
            if not work.cancelled.is_set():
                return 0
        elif value == "cleanup":
            return 3


@contextmanager
def _signal_handler(signum: int, handler: Callable[..., Any] | int) -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signum, handler)
    try:
        yield
    finally:
        signal.signal(signum, previous)


def _parser(name: str) -> argparse.ArgumentParser:
    return argparse.ArgumentParser(prog=name, allow_abbrev=False)


def _go_list(items: Sequence[str]) -> str:
    return "[" + " ".join(items) + "]"


def _parse(parser: argparse.ArgumentParser, args: Sequence[str]) -> tuple[argparse.Namespace, list[str]]:
    namespace, extra = parser.parse_known_args(list(args))
    unknown = [arg for arg in extra if arg.startswith("-") and arg != "-"]
    if unknown:
        parser.error(f"flag provided but not defined: {unknown[0]}")
    return namespace, extra


def run(args: Sequence[str]) -> int:
    """Run the command with the given arguments and return its exit status."""
    args = list(args)
    if not args:
        print(USAGE, file=sys.stderr)
        return 2

    command, rest = args[0], args[1:]
    try:
        if command == "default":
            parser = _parser("default")
            parser.add_argument("-sleep", "--sleep", dest="sleep", type=parse_duration,
                                default=5.0, help="Sleep duration")
            options, extra = _parse(parser, rest)
            if extra:
                print(f"default: unexpected arguments: {_go_list(extra)}", file=sys.stderr)
                return 2
            with _signal_handler(signal.SIGINT, signal.SIG_DFL):
                return _supervisor(options.sleep, 0.0, 0, queue.Queue())

        if command == "handle":
            parser = _parser("handle")
            parser.add_argument("-sleep", "--sleep", dest="sleep", type=parse_duration,
                                default=5.0, help="Sleep duration")
            parser.add_argument("-cleanup", "--cleanup", dest="cleanup", type=parse_duration,
                                default=5.0, help="Cleanup duration")
            parser.add_argument(
                "-term-after", "--term-after", dest="term_after", type=int, default=0,
                metavar="N",
                help="Terminate immediately after N signals. Default is to terminate "
                "only when the cleanup phase has completed.",
            )
            options, extra = _parse(parser, rest)
            if options.term_after == 1:
                print("handle: term-after cannot be 1", file=sys.stderr)
                return 2
            if extra:
                print(f"handle: unexpected arguments: {_go_list(extra)}", file=sys.stderr)
                return 2
            events: queue.Queue = queue.Queue()

            def on_interrupt(signum: int, frame: Any) -> None:
                events.put(("signal", "interrupt"))

            with _signal_handler(signal.SIGINT, on_interrupt):
                return _supervisor(options.sleep, options.cleanup, options.term_after, events)

        if command == "version":
            parser = _parser("version")
            _, extra = _parse(parser, rest)
            if extra:
                print(f"version: unexpected arguments: {_go_list(extra)}", file=sys.stderr)
                return 2
            print(f"sleepit version {FULL_VERSION}")
            return 0
    except SystemExit as exc:
        code = exc.code
        return code if isinstance(code, int) else 2

    print(USAGE, file=sys.stderr)
    return 2


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point of the sleepit command."""
    sys.exit(run(sys.argv[1:] if argv is None else argv))