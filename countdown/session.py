"""
Timer session: the countdown state machine and its event loop.

The ``Session`` owns all mutable run state (remaining time, pause state, the
current timer emitters and the one-shot layout) and is the only consumer of
the event queue. Each wake-up handles exactly one event:

  - tick      → advance the clock one interval and redraw
  - deadline  → finish with exit code 0
  - p / P     → stop both timers (paused)
  - c / C     → restart both timers from the current remaining time
  - Esc / ^C  → quit with exit code 1
"""

import logging
import queue
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from . import glyphs
from .config import PAUSE_KEYS, RESUME_KEYS, TICK, TimerConfig
from .durations import format_duration
from .emitters import EmitterFactory, Emitters, Event, Source, TimerEmitters
from .errors import UserQuit
from .layout import LayoutOrigin, compute_origin
from .terminal import EventType, Key, Terminal, TerminalEvent

logger = logging.getLogger(__name__)


class Mode(Enum):
    COUNT_DOWN = "count-down"
    COUNT_UP = "count-up"


class State(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    TERMINATED = "terminated"


@dataclass
class CountdownState:
    """The value on the clock and whether it is moving."""

    remaining: timedelta
    mode: Mode = Mode.COUNT_DOWN
    running: bool = True

    def advance(self, step: timedelta):
        if self.mode is Mode.COUNT_UP:
            self.remaining += step
        else:
            self.remaining -= step


class Session:
    """Single-threaded driver for one timer run."""

    def __init__(
        self,
        config: TimerConfig,
        terminal: Terminal,
        events: queue.Queue[Event] | None = None,
        emitter_factory: EmitterFactory = TimerEmitters,
        tick: timedelta = TICK,
    ):
        self.config = config
        self.terminal = terminal
        self.events: queue.Queue[Event] = events if events is not None else queue.Queue()
        self.tick = tick
        self._emitter_factory = emitter_factory

        mode = Mode.COUNT_UP if config.count_up else Mode.COUNT_DOWN
        self.countdown = CountdownState(remaining=config.initial_remaining(), mode=mode)
        self.state = State.RUNNING
        self.exit_code: int | None = None

        self.title = glyphs.title_block(config.title)
        self.origin: LayoutOrigin | None = None
        self.laid_out = False

        self._emitters: Emitters | None = None
        self._generation = 0

    # ─── Properties ──────────────────────────────────────────────

    @property
    def generation(self) -> int:
        """Generation number of the currently armed timers."""
        return self._generation

    @property
    def terminated(self) -> bool:
        return self.state is State.TERMINATED

    # ─── Lifecycle ───────────────────────────────────────────────

    def start(self):
        """Arm the timers with the configured duration and draw the first frame."""
        self._start_emitters(self.config.duration)
        self.draw()
        logger.info(
            "session started: %s %s title=%r",
            self.countdown.mode.value,
            format_duration(self.config.duration),
            self.config.title,
        )

    def run(self) -> int:
        """Run until the deadline or a quit key; always releases the terminal."""
        try:
            self.start()
            while not self.terminated:
                self.handle(self.events.get())
        finally:
            self.shutdown()
        return self.exit_code

    def shutdown(self):
        """Stop the timers and restore the terminal."""
        self._stop_emitters()
        self.terminal.close()

    # ─── Event Dispatch ──────────────────────────────────────────

    def handle(self, event: Event):
        """Process a single queued event."""
        if self.terminated:
            return

        if event.source in (Source.TICK, Source.DEADLINE) and event.generation != self._generation:
            logger.debug("dropping stale %s from generation %d", event.source.value, event.generation)
            return

        try:
            if event.source is Source.TICK:
                self._on_tick()
            elif event.source is Source.DEADLINE:
                self._terminate(0)
            elif event.source is Source.INPUT:
                self._on_input(event.payload)
            elif event.source is Source.FAILURE:
                raise event.payload
        except UserQuit as quit_:
            self._terminate(quit_.exit_code)

    def _on_tick(self):
        if self.state is not State.RUNNING:
            return
        self.countdown.advance(self.tick)
        logger.debug("tick: %s", format_duration(self.countdown.remaining))
        self.draw()

    def _on_input(self, ev: TerminalEvent):
        if ev.type is EventType.RESIZE:
            logger.debug("resize to %dx%d ignored", ev.width, ev.height)
            return

        if ev.key in (Key.ESC, Key.CTRL_C):
            raise UserQuit(1)
        if ev.key is not Key.CHAR:
            return
        if ev.ch in PAUSE_KEYS:
            self.pause()
        elif ev.ch in RESUME_KEYS:
            self.resume()

    # ─── Transitions ─────────────────────────────────────────────

    def pause(self):
        self._stop_emitters()
        self.countdown.running = False
        self.state = State.PAUSED
        logger.info("paused at %s", format_duration(self.countdown.remaining))

    def resume(self):
        """Restart both timers from the current remaining time.

        Also valid while running, in which case the tick phase restarts.
        """
        self._start_emitters(self.countdown.remaining)
        self.countdown.running = True
        self.state = State.RUNNING
        logger.info("resumed at %s", format_duration(self.countdown.remaining))

    def _terminate(self, code: int):
        self._stop_emitters()
        self.countdown.running = False
        self.state = State.TERMINATED
        self.exit_code = code
        logger.info("session finished with exit code %d", code)

    # ─── Emitters ────────────────────────────────────────────────

    def _start_emitters(self, deadline: timedelta):
        self._stop_emitters()
        armed = None if self.countdown.mode is Mode.COUNT_UP else deadline
        self._emitters = self._emitter_factory(self.events, self._generation, armed, self.tick)
        self._emitters.start()

    def _stop_emitters(self):
        # bumping the generation invalidates anything the old pair already queued
        if self._emitters is not None:
            self._emitters.stop()
            self._emitters = None
        self._generation += 1

    # ─── Drawing ─────────────────────────────────────────────────

    def draw(self):
        """Render the remaining time and the title at the session's fixed origin."""
        width, height = self.terminal.size()
        self.terminal.clear()

        clock = glyphs.render(format_duration(self.countdown.remaining))
        if not self.laid_out:
            self.laid_out = True
            self.origin = compute_origin(width, height, clock, self.title)
            logger.debug("layout computed for %dx%d: %s", width, height, self.origin)

        origin = self.origin
        for x, y, ch in self.title.cells(origin.title_x, origin.title_y):
            self.terminal.set_cell(x, y, ch)
        for x, y, ch in clock.cells(origin.clock_x, origin.clock_y):
            self.terminal.set_cell(x, y, ch)

        self.terminal.flush()
