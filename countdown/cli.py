"""
Command-line entry for countdown.

    countdown <duration> [-up] [title]

Exit codes: 0 when the deadline is reached, 1 when the user quits,
2 for bad arguments.
"""

import logging
import sys

from .config import COUNT_UP_FLAG, MAX_ARGS, MIN_ARGS, TimerConfig
from .display import show_error, show_usage
from .durations import parse_duration
from .emitters import InputPump
from .errors import TerminalInitError, UsageError, UserQuit
from .logs import setup_logging
from .session import Session
from .terminal import Terminal, TerminalScreen

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> TimerConfig:
    """
    Parse ``<duration> [-up] [title]`` into a ``TimerConfig``.

    ``-up`` is only recognised in the second position; anything else there is
    the title.

    Raises:
        UsageError: on a wrong argument count or an invalid duration.
    """
    args = list(argv if argv is not None else sys.argv[1:])
    if not MIN_ARGS <= len(args) <= MAX_ARGS:
        raise UsageError(show_usage=True)

    try:
        duration = parse_duration(args[0])
    except ValueError:
        raise UsageError(f"invalid duration: {args[0]}") from None

    count_up = len(args) >= 2 and args[1] == COUNT_UP_FLAG
    title = ""
    if len(args) == 2 and not count_up:
        title = args[1]
    elif len(args) == 3:
        title = args[2]

    return TimerConfig(duration=duration, count_up=count_up, title=title)


def run_timer(config: TimerConfig, terminal: Terminal | None = None) -> int:
    """Take over the terminal and run one session. Returns the exit code."""
    terminal = terminal if terminal is not None else TerminalScreen()
    try:
        terminal.init()
    except TerminalInitError as e:
        show_error(f"cannot start terminal: {e}")
        return e.exit_code

    session = Session(config, terminal)
    InputPump(terminal, session.events).start()
    try:
        return session.run()
    except KeyboardInterrupt:
        logger.info("interrupted")
        return UserQuit().exit_code


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    try:
        config = parse_args(argv)
    except UsageError as e:
        if e.message:
            show_error(f"error: {e.message}")
        if e.show_usage:
            show_usage()
        return e.exit_code

    return run_timer(config)
