"""
Event producers feeding the session's event queue.

Three sources share one unbounded ``queue.Queue``:

  - ``Ticker``    — repeating one-second tick (background thread)
  - ``Deadline``  — one-shot completion timer (``threading.Timer``)
  - ``InputPump`` — forwards every terminal event (daemon thread)

Tick and deadline events are stamped with the generation of the emitter pair
that produced them, so the consumer can drop events that were already queued
when the pair was cancelled.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Protocol

from .terminal import Terminal

logger = logging.getLogger(__name__)


class Source(Enum):
    TICK = "tick"
    DEADLINE = "deadline"
    INPUT = "input"
    FAILURE = "failure"


@dataclass(frozen=True)
class Event:
    """One item on the session queue, tagged by where it came from."""

    source: Source
    generation: int = 0
    payload: Any = None


# ─── Timers ──────────────────────────────────────────────────────


class Ticker:
    """Calls ``callback`` every ``interval`` seconds until stopped.

    Ticks are scheduled against the monotonic start time, so a slow
    callback does not push later ticks back.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self._callback = callback
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self):
        self._thread = threading.Thread(target=self._loop, name="countdown-ticker", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()

    def _loop(self):
        start = time.monotonic()
        n = 0
        while True:
            n += 1
            delay = start + n * self.interval - time.monotonic()
            if self._stop.wait(max(0.0, delay)):
                return
            self._callback()


class Deadline:
    """Calls ``callback`` once after ``delay`` seconds unless stopped first."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = max(0.0, delay)
        self._timer = threading.Timer(self.delay, callback)
        self._timer.daemon = True

    def start(self):
        self._timer.start()

    def stop(self):
        self._timer.cancel()


# ─── Emitter Pair ────────────────────────────────────────────────


class Emitters(Protocol):
    """A started-together, stopped-together set of timer sources."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


EmitterFactory = Callable[[queue.Queue[Event], int, timedelta | None, timedelta], Emitters]


class TimerEmitters:
    """The tick and deadline timers of one running period.

    ``deadline=None`` arms only the ticker (count-up mode never finishes on
    its own).
    """

    def __init__(
        self,
        events: queue.Queue[Event],
        generation: int,
        deadline: timedelta | None,
        tick: timedelta,
    ):
        self.generation = generation
        self._events = events
        self.ticker = Ticker(tick.total_seconds(), self._on_tick)
        self.deadline: Deadline | None = None
        if deadline is not None:
            self.deadline = Deadline(deadline.total_seconds(), self._on_deadline)

    def start(self):
        self.ticker.start()
        if self.deadline is not None:
            self.deadline.start()

    def stop(self):
        self.ticker.stop()
        if self.deadline is not None:
            self.deadline.stop()

    def _on_tick(self):
        self._events.put(Event(Source.TICK, self.generation))

    def _on_deadline(self):
        self._events.put(Event(Source.DEADLINE, self.generation))


# ─── Input Pump ──────────────────────────────────────────────────


class InputPump:
    """Background producer that polls the terminal and queues every event.

    Runs for the life of the process as a daemon thread; it is never joined.
    If polling fails, the exception is queued as a ``FAILURE`` event for the
    consumer to raise, and the pump stops.
    """

    def __init__(self, terminal: Terminal, events: queue.Queue[Event]):
        self._terminal = terminal
        self._events = events
        self._thread: threading.Thread | None = None

    def start(self):
        self._thread = threading.Thread(target=self._loop, name="countdown-input", daemon=True)
        self._thread.start()

    def _loop(self):
        while True:
            try:
                ev = self._terminal.poll_event()
            except Exception as exc:
                logger.warning("input polling failed: %s", exc)
                self._events.put(Event(Source.FAILURE, payload=exc))
                return
            self._events.put(Event(Source.INPUT, payload=ev))
