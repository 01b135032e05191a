"""
countdown — a full-screen terminal countdown / countup clock.

Renders a large block-digit clock centered in the terminal, ticks once per
second, and reacts to pause (p), resume (c) and quit (Esc / CTRL+C) keys.
"""

__version__ = "1.0.0"
