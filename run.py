#!/usr/bin/env python3
"""
countdown — full-screen terminal countdown / countup clock.

Entry point script. Validates dependencies, then hands off to the CLI.

Usage:
    python run.py 25s
    python run.py 1m50s -up
    python run.py 2h45m50s "Deep work"
"""

import sys
from pathlib import Path


def check_dependencies():
    """Ensure required packages are installed before importing anything else."""
    try:
        import rich  # noqa: F401
    except ImportError:
        print("╔═══════════════════════════════════════════════════════════╗")
        print("║  ❌ Missing dependency: 'rich' is not installed.        ║")
        print("║                                                          ║")
        print("║  Quick fix:                                              ║")
        print("║    pip install rich                                      ║")
        print("╚═══════════════════════════════════════════════════════════╝")
        sys.exit(1)


def main():
    check_dependencies()

    # Ensure our package is importable
    pkg_dir = str(Path(__file__).resolve().parent)
    if pkg_dir not in sys.path:
        sys.path.insert(0, pkg_dir)

    from countdown.cli import main as cli_main
    from countdown.config import ENV_DEBUG

    try:
        sys.exit(cli_main(sys.argv[1:]))

    except KeyboardInterrupt:
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Fatal error: {e}", file=sys.stderr)

        import os

        if os.environ.get(ENV_DEBUG, "").lower() in ("1", "true", "yes"):
            import traceback

            traceback.print_exc()

        sys.exit(1)


if __name__ == "__main__":
    main()
