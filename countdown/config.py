"""
Timer configuration for countdown.

Defines the tick interval, key bindings, the usage banner, environment
variable names, and the per-run ``TimerConfig`` built from the command line.
"""

from dataclasses import dataclass
from datetime import timedelta

# ─── Timing ──────────────────────────────────────────────────────

TICK = timedelta(seconds=1)

# ─── Key Bindings ────────────────────────────────────────────────

PAUSE_KEYS = frozenset({"p", "P"})
RESUME_KEYS = frozenset({"c", "C"})

# ─── Command Line ────────────────────────────────────────────────

PROG = "countdown"
COUNT_UP_FLAG = "-up"
MIN_ARGS = 1
MAX_ARGS = 3

USAGE = f"""usage:
{PROG} 25s [{COUNT_UP_FLAG}] [title]
{PROG} 1m50s [{COUNT_UP_FLAG}] [title]
{PROG} 2h45m50s [{COUNT_UP_FLAG}] [title]
"""

# ─── Environment Variables ───────────────────────────────────────

ENV_LOG_FILE = "COUNTDOWN_LOG_FILE"
ENV_LOG_LEVEL = "COUNTDOWN_LOG_LEVEL"
ENV_DEBUG = "DEBUG"

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class TimerConfig:
    """Settings for a single timer session."""

    duration: timedelta
    count_up: bool = False
    title: str = ""

    def initial_remaining(self) -> timedelta:
        """Value shown on the first frame: the full duration, or zero when counting up."""
        if self.count_up:
            return timedelta(0)
        return self.duration
