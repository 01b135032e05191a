"""
Rich console singletons: stdout for the clock screen, stderr for messages
printed before or after it.
"""

from rich.console import Console
from rich.markup import escape

from .config import USAGE

# ─── Singleton Consoles ──────────────────────────────────────────

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


# ─── Messages ────────────────────────────────────────────────────


def show_error(msg: str):
    """Display an error message on stderr."""
    err_console.print(f"[bold red]❌ {escape(msg)}[/bold red]")


def show_usage():
    """Display the usage banner on stderr."""
    err_console.print(USAGE, markup=False, end="")
