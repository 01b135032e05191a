"""
Exception types for countdown.

Usage errors and terminal failures are raised where they are detected and
turned into exit codes by the CLI entry point.
"""


class CountdownError(Exception):
    """Base class for all countdown errors."""

    exit_code = 1


class UsageError(CountdownError):
    """Malformed or wrong-arity command-line arguments."""

    exit_code = 2

    def __init__(self, message: str = "", show_usage: bool = False):
        super().__init__(message)
        self.message = message
        self.show_usage = show_usage


class TerminalInitError(CountdownError):
    """The terminal could not be switched into raw / full-screen mode."""


class UserQuit(CountdownError):
    """Raised when the user quits with Esc or CTRL+C."""

    def __init__(self, exit_code: int = 1):
        super().__init__("quit by user")
        self.exit_code = exit_code
