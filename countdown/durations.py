"""
Duration parsing and clock formatting.

Parsing accepts signed duration literals such as ``25s``, ``1m50s``,
``2h45m50s``, ``1.5h`` or ``-300ms``: a sequence of decimal numbers, each
with an optional fraction and a unit suffix (``ns``, ``us``, ``µs``, ``ms``,
``s``, ``m``, ``h``).

Formatting turns a duration into the ``MM:SS`` / ``HH:MM:SS`` string the
clock displays.
"""

import re
from datetime import timedelta

# Unit suffix → length in nanoseconds
UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?(ns|us|µs|μs|ms|s|m|h)?")

# Largest magnitude an int64 nanosecond count can hold
_MAX_NANOS = (1 << 63) - 1

_NANOS_PER_MICRO = 1_000
_MICROS_PER_SECOND = 1_000_000


# ─── Parsing ─────────────────────────────────────────────────────


def parse_duration(text: str) -> timedelta:
    """
    Parse a signed duration literal into a ``timedelta``.

    Raises:
        ValueError: if ``text`` is not a valid duration literal or does not
            fit in a signed 64-bit nanosecond count.
    """
    orig = text
    neg = False
    if text[:1] in ("-", "+"):
        neg = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {orig!r}")

    total_ns = 0
    pos = 0
    while pos < len(text):
        match = _COMPONENT_RE.match(text, pos)
        whole, frac, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not frac:
            # "." alone or a unit with no number
            raise ValueError(f"invalid duration {orig!r}")
        if unit is None:
            raise ValueError(f"missing unit in duration {orig!r}")

        scale = UNITS[unit]
        value = int(whole or "0") * scale
        if frac:
            value += int(frac) * scale // (10 ** len(frac))
        total_ns += value
        if total_ns > _MAX_NANOS + neg:
            raise ValueError(f"invalid duration {orig!r}")
        pos = match.end()

    if neg:
        total_ns = -total_ns
    # timedelta resolution is one microsecond; truncate toward zero
    micros = abs(total_ns) // _NANOS_PER_MICRO
    return timedelta(microseconds=-micros if neg else micros)


# ─── Formatting ──────────────────────────────────────────────────


def round_seconds(d: timedelta) -> int:
    """Round ``d`` to whole seconds, halfway values away from zero."""
    micros = d // timedelta(microseconds=1)
    secs, rem = divmod(abs(micros), _MICROS_PER_SECOND)
    if rem * 2 >= _MICROS_PER_SECOND:
        secs += 1
    return secs if micros >= 0 else -secs


def format_duration(d: timedelta) -> str:
    """
    Format a duration as ``MM:SS``, or ``HH:MM:SS`` once it reaches an hour.

    Fields are split with truncating division, so a negative duration keeps
    its sign on every non-zero field (``-61s`` → ``-1:-1``). Hours are not
    capped and simply grow wider.
    """
    total = round_seconds(d)
    sign = -1 if total < 0 else 1
    hours, rem = divmod(abs(total), 3600)
    minutes, seconds = divmod(rem, 60)
    hours, minutes, seconds = sign * hours, sign * minutes, sign * seconds

    if hours < 1:
        return f"{minutes:02d}:{seconds:02d}"
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
