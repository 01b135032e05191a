"""Shared fixtures: an in-memory terminal and a hand-cranked timer clock."""

import threading
from datetime import timedelta

import pytest

from countdown.emitters import Event, Source
from countdown.terminal import TerminalEvent


class FakeTerminal:
    """In-memory ``Terminal`` that records cells, flushes and lifecycle calls.

    ``poll_event`` hands out the scripted ``inputs`` one by one and then
    blocks forever, like a keyboard nobody touches.
    """

    def __init__(self, width: int = 80, height: int = 24, inputs=(), fail_init: Exception | None = None):
        self.width = width
        self.height = height
        self.cells: dict[tuple[int, int], str] = {}
        self.frames: list[dict[tuple[int, int], str]] = []
        self.init_calls = 0
        self.close_calls = 0
        self._inputs = list(inputs)
        self._fail_init = fail_init
        self._idle = threading.Event()

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def init(self):
        self.init_calls += 1
        if self._fail_init is not None:
            raise self._fail_init

    def close(self):
        self.close_calls += 1

    def size(self):
        return self.width, self.height

    def clear(self):
        self.cells = {}

    def set_cell(self, x, y, ch):
        self.cells[(x, y)] = ch

    def flush(self):
        self.frames.append(dict(self.cells))

    def poll_event(self) -> TerminalEvent:
        if self._inputs:
            return self._inputs.pop(0)
        self._idle.wait()
        raise RuntimeError("unreachable")

    def row_text(self, y: int) -> str:
        """Text of screen row ``y`` in the latest frame, trailing blanks removed."""
        frame = self.frames[-1] if self.frames else {}
        line = [" "] * self.width
        for (x, yy), ch in frame.items():
            if yy == y and 0 <= x < self.width:
                line[x] = ch
        return "".join(line).rstrip()


class SimulatedClock:
    """Emitter factory whose timers only move when ``advance`` is called.

    Mirrors the real emitters: one tick per elapsed interval and a single
    deadline event once the armed duration has passed, both stamped with the
    generation they were created for.
    """

    def __init__(self):
        self.created: list["SimulatedEmitters"] = []

    def __call__(self, events, generation, deadline, tick):
        emitters = SimulatedEmitters(events, generation, deadline, tick)
        self.created.append(emitters)
        return emitters

    @property
    def current(self) -> "SimulatedEmitters | None":
        live = [e for e in self.created if e.running]
        return live[-1] if live else None

    def advance(self, seconds: int = 1):
        for _ in range(seconds):
            for emitters in self.created:
                emitters.step()


class SimulatedEmitters:
    def __init__(self, events, generation, deadline, tick):
        self.events = events
        self.generation = generation
        self.deadline = deadline
        self.tick = tick
        self.elapsed = timedelta(0)
        self.running = False
        self.fired = False

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def step(self):
        if not self.running:
            return
        self.elapsed += self.tick
        self.events.put(Event(Source.TICK, self.generation))
        if self.deadline is not None and not self.fired and self.elapsed >= self.deadline:
            self.fired = True
            self.events.put(Event(Source.DEADLINE, self.generation))


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def make_terminal():
    return FakeTerminal


@pytest.fixture
def clock():
    return SimulatedClock()
