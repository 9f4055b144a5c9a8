"""
Argument parsing for the ec2inst CLI.

The command takes a single positional field key. -v/--version and -h/--help
are handled here instead of by argparse so their output matches the tool's
own banner and usage text.
"""

from __future__ import annotations

import argparse


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Show information about the EC2 instance this command runs on.",
        add_help=False,
    )
    parser.add_argument("field", nargs="?", help="Information type to show (see usage).")
    parser.add_argument("-v", "--version", action="store_true", help="Show version information for this utility.")
    parser.add_argument("-h", "--help", action="store_true", help="Show usage information.")
    return parser


def parse_args(argv: list[str], prog: str | None = None) -> argparse.Namespace:
    """Parse command-line arguments for ec2inst."""
    return build_parser(prog).parse_args(argv)
