"""Injection of the torc block into an existing Makefile."""

from __future__ import annotations

import os
import shutil

from . import diag
from .exitcodes import ExitCode, TorcError

_BLOCK_BEGIN = "# ── BEGIN torc"
_BLOCK_END = "# ── END torc"

_TORC_BLOCK = (
    "# ── BEGIN torc ─────────────────────────\n"
    "-include extdep.mak\n"
    "CXXFLAGS += $(TORC_CXXFLAGS)\n"
    "LDFLAGS  += $(TORC_LDFLAGS)\n"
    "LDLIBS   += $(TORC_LIBS)\n"
    "# ── END torc ───────────────────────────\n"
)


def _read_lines(path):
    with open(path, encoding="utf-8", newline="") as f:
        lines = f.read().split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _joined(lines):
    return "".join(f"{line}\n" for line in lines)


def _is_rule(line):
    return bool(line) and line[0] not in "# \t" and ":" in line


def _insert_position(lines):
    return next((i for i, line in enumerate(lines) if _is_rule(line)), len(lines))


def _with_block_inserted(lines):
    at = _insert_position(lines)
    head, tail = lines[:at], lines[at:]
    if tail:
        return _joined(head) + "\n" + _TORC_BLOCK + "\n" + _joined(tail)
    return _joined(head) + "\n" + _TORC_BLOCK


def _with_block_replaced(lines, begin, end):
    return _joined(lines[:begin]) + _TORC_BLOCK + _joined(lines[end + 1 :])


def _last_index(lines, marker):
    return max((i for i, line in enumerate(lines) if marker in line), default=-1)


def cmd_hook(makefile="Makefile"):
    """Insert or refresh the torc block in *makefile*, keeping a ``.bak`` copy."""
    if not os.path.exists(makefile):
        raise TorcError("hook", f"file not found: {makefile}", ExitCode.NOINPUT)

    try:
        lines = _read_lines(makefile)
    except OSError as e:
        raise TorcError("hook", f"cannot read: {makefile}", ExitCode.IOERR) from e

    begin = _last_index(lines, _BLOCK_BEGIN)
    end = _last_index(lines, _BLOCK_END)
    if begin >= 0 and end > begin:
        content = _with_block_replaced(lines, begin, end)
    else:
        content = _with_block_inserted(lines)

    try:
        shutil.copyfile(makefile, makefile + ".bak")
        with open(makefile, "w", encoding="utf-8", newline="") as out:
            out.write(content)
    except OSError as e:
        raise TorcError("hook", f"cannot write: {makefile}", ExitCode.IOERR) from e

    diag.info(f"hooked torc into {makefile}")