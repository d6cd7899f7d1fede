"""Command-line option parsing shared by every subcommand."""

from __future__ import annotations

import argparse
import sys

from .exitcodes import ExitCode

VERSION = "0.1.0"


class CliExit(Exception):
    """Raised when parsing ends the command early (help, version or bad usage)."""

    def __init__(self, exit_code):
        self.exit_code = ExitCode(exit_code)
        super().__init__(f"exit {int(self.exit_code)}")


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        sys.stderr.write(f"{self.prog}: {message}\n")
        raise CliExit(ExitCode.USAGE)


def print_version():
    """Write the program version to stderr."""
    sys.stderr.write(f"torc {VERSION}\n")


def new_parser(prog, usage=""):
    """Return a parser with ``-h/--help`` and ``-V/--version`` already bound.

    Option parsing stops at the first positional argument; it and every
    argument after it end up in the ``args`` list of the parsed namespace.
    """
    parser = _Parser(prog=prog, usage=usage or None, add_help=False)
    parser.add_argument("-h", "--help", action="store_true", help="Show this help")
    parser.add_argument("-V", "--version", action="store_true", help="Show version")
    parser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


def parse_args(parser, argv):
    """Parse *argv* with *parser*.

    Returns the namespace. Raises CliExit with ``ExitCode.OK`` after showing
    help or the version, and with ``ExitCode.USAGE`` on a usage error.
    """
    namespace = parser.parse_args(list(argv))
    if namespace.help:
        parser.print_help(sys.stderr)
        raise CliExit(ExitCode.OK)
    if namespace.version:
        print_version()
        raise CliExit(ExitCode.OK)
    return namespace