"""Process exit codes and the base error type carrying one."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following the sysexits convention."""

    OK = 0
    USAGE = 64  # bad command-line usage
    DATAERR = 65  # manifest parse error
    NOINPUT = 66  # file not found
    UNAVAILABLE = 69  # network/download failure
    CANTCREAT = 73  # cannot create directory
    IOERR = 74  # I/O error
    CONFIG = 78  # bad configuration


class TorcError(Exception):
    """An error reported to the user with a context and an exit code."""

    def __init__(self, context, message, exit_code):
        super().__init__(f"{context}: {message}")
        self.context = context
        self.message = message
        self.exit_code = ExitCode(exit_code)