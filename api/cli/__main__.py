"""CLI entry point for running as `python -m api.cli`.

Usage:
    python -m api.cli compare old.pdf new.pdf   # Lost students report
    python -m api.cli compare old.pdf new.pdf --json --courses
    python -m api.cli parse roster.pdf          # Dump one roster
"""

import sys

from .commands import create_parser, run_cli


def main():
    """Entry point for `python -m api.cli`."""
    parser = create_parser()
    args = parser.parse_args()
    sys.exit(run_cli(args))


if __name__ == "__main__":
    main()
