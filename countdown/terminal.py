"""
Terminal control surface for the clock screen.

Provides a ``Terminal`` protocol (what the session needs from a screen) and
``TerminalScreen``, the concrete implementation:

  - raw mode via :mod:`tty` / :mod:`termios`, restored on close
  - alternate screen and hidden cursor through the rich ``Console``
  - a cell back-buffer flushed to the screen in one buffered write
  - blocking key / resize polling with :mod:`select` and SIGWINCH
"""

import logging
import os
import select
import signal
import sys
import termios
import threading
import tty
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from rich.console import Console
from rich.control import Control
from rich.text import Text

from .display import console as default_console
from .errors import TerminalInitError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1
READ_SIZE = 64
# How long a trailing ESC waits for the rest of its sequence
ESC_TIMEOUT = 0.05

ESC = "\x1b"
ESC_BYTE = ESC.encode()
CTRL_C = "\x03"


# ─── Events ──────────────────────────────────────────────────────


class EventType(Enum):
    KEY = "key"
    RESIZE = "resize"


class Key(Enum):
    CHAR = "char"
    ESC = "esc"
    CTRL_C = "ctrl-c"
    OTHER = "other"


@dataclass(frozen=True)
class TerminalEvent:
    """A key press or a terminal resize."""

    type: EventType
    key: Key | None = None
    ch: str = ""
    width: int = 0
    height: int = 0

    @classmethod
    def char(cls, ch: str) -> "TerminalEvent":
        return cls(EventType.KEY, key=Key.CHAR, ch=ch)

    @classmethod
    def special(cls, key: Key) -> "TerminalEvent":
        return cls(EventType.KEY, key=key)

    @classmethod
    def resize(cls, width: int, height: int) -> "TerminalEvent":
        return cls(EventType.RESIZE, width=width, height=height)


def decode_keys(data: bytes) -> list[TerminalEvent]:
    """
    Turn a chunk of raw stdin bytes into key events.

    A lone ESC is the Esc key. ESC followed by more input is an escape
    sequence (arrows, function keys, Alt+key) and is dropped.
    """
    text = data.decode("utf-8", errors="replace")
    events: list[TerminalEvent] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == ESC:
            if i + 1 >= len(text):
                events.append(TerminalEvent.special(Key.ESC))
                i += 1
                continue
            i = _skip_escape_sequence(text, i)
            continue
        if ch == CTRL_C:
            events.append(TerminalEvent.special(Key.CTRL_C))
        elif ch.isprintable():
            events.append(TerminalEvent.char(ch))
        else:
            events.append(TerminalEvent(EventType.KEY, key=Key.OTHER, ch=ch))
        i += 1
    return events


def _skip_escape_sequence(text: str, start: int) -> int:
    """Return the index just past the escape sequence beginning at ``start``."""
    intro = text[start + 1]
    i = start + 2
    if intro == "[":
        # CSI: parameter bytes until a final byte in @..~
        while i < len(text) and not ("@" <= text[i] <= "~"):
            i += 1
        return min(i + 1, len(text))
    if intro == "O":
        # SS3: exactly one more character
        return min(i + 1, len(text))
    # Alt+key
    return i


# ─── Terminal Protocol ───────────────────────────────────────────


class Terminal(Protocol):
    """Interface the session uses to draw and read input."""

    def init(self) -> None: ...

    def close(self) -> None: ...

    def size(self) -> tuple[int, int]: ...

    def clear(self) -> None: ...

    def set_cell(self, x: int, y: int, ch: str) -> None: ...

    def flush(self) -> None: ...

    def poll_event(self) -> TerminalEvent: ...


# ─── TerminalScreen ──────────────────────────────────────────────


class TerminalScreen:
    """Full-screen terminal backed by ``sys.stdin`` and a rich ``Console``."""

    def __init__(self, console: Console | None = None, stdin=None):
        self._console = console or default_console
        self._stdin = stdin or sys.stdin
        self._fd: int | None = None
        self._original_termios: list | None = None
        self._prev_sigwinch_handler = None
        self._resized = threading.Event()
        self._pending: deque[TerminalEvent] = deque()
        self._cells: dict[tuple[int, int], str] = {}
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    # -- init / close -------------------------------------------------------

    def init(self) -> None:
        """Enter raw mode and the alternate screen."""
        try:
            fd = self._stdin.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise TerminalInitError(f"stdin has no file descriptor: {e}") from e
        if not os.isatty(fd):
            raise TerminalInitError("stdin is not a terminal")

        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as e:
            raise TerminalInitError(f"cannot enter raw mode: {e}") from e
        self._fd = fd

        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._console.set_alt_screen(True)
        self._console.show_cursor(False)
        self._active = True
        logger.debug("terminal initialized (%dx%d)", *self.size())

    def close(self) -> None:
        """Restore the terminal. Safe to call more than once."""
        if not self._active:
            return
        self._active = False

        self._console.show_cursor(True)
        self._console.set_alt_screen(False)

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        if self._fd is not None and self._original_termios is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
        logger.debug("terminal restored")

    def _on_sigwinch(self, signum, frame):
        self._resized.set()

    # -- drawing ------------------------------------------------------------

    def size(self) -> tuple[int, int]:
        dims = self._console.size
        return dims.width, dims.height

    def clear(self) -> None:
        self._cells.clear()

    def set_cell(self, x: int, y: int, ch: str) -> None:
        if x < 0 or y < 0:
            return
        self._cells[(y, x)] = ch

    def flush(self) -> None:
        """Repaint the screen from the back-buffer in a single write."""
        width, height = self.size()
        with self._console:
            self._console.control(Control.clear())
            for x, y, run in _runs(self._cells, width, height):
                self._console.control(Control.move_to(x, y))
                self._console.print(Text(run), end="", soft_wrap=True)

    # -- input --------------------------------------------------------------

    def poll_event(self) -> TerminalEvent:
        """Block until a key press or resize is available."""
        while True:
            if self._pending:
                return self._pending.popleft()
            if self._resized.is_set():
                self._resized.clear()
                return TerminalEvent.resize(*self.size())
            if self._fd is None:
                raise TerminalInitError("terminal is not initialized")

            ready, _, _ = select.select([self._fd], [], [], POLL_INTERVAL)
            if ready:
                data = self._read_chunk()
                if data:
                    self._pending.extend(decode_keys(data))

    def _read_chunk(self) -> bytes:
        """Read available input, waiting briefly for the rest of a split escape sequence."""
        data = os.read(self._fd, READ_SIZE)
        while _ends_in_escape(data):
            more, _, _ = select.select([self._fd], [], [], ESC_TIMEOUT)
            if not more:
                break
            chunk = os.read(self._fd, READ_SIZE)
            if not chunk:
                break
            data += chunk
        return data


def _ends_in_escape(data: bytes) -> bool:
    """True if ``data`` stops inside an escape sequence (or on a bare ESC)."""
    start = data.rfind(ESC_BYTE)
    if start < 0:
        return False
    tail = data[start + 1 :]
    if not tail:
        return True
    if tail[:1] == b"O":
        return len(tail) == 1
    if tail[:1] == b"[":
        return not any(0x40 <= b <= 0x7E for b in tail[1:])
    return False


def _runs(cells: dict[tuple[int, int], str], width: int, height: int):
    """Group on-screen cells into ``(x, y, text)`` runs of adjacent columns."""
    run_x = run_y = -1
    parts: list[str] = []
    for (y, x), ch in sorted(cells.items()):
        if x >= width or y >= height:
            continue
        if parts and y == run_y and x == run_x + len(parts):
            parts.append(ch)
            continue
        if parts:
            yield run_x, run_y, "".join(parts)
        run_x, run_y, parts = x, y, [ch]
    if parts:
        yield run_x, run_y, "".join(parts)
