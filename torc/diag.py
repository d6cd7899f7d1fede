"""Diagnostic output: every user-facing message goes through here."""

from __future__ import annotations

import functools
import os
import sys

_RED = "\033[31m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RESET = "\033[0m"


def is_terminal():
    """Return True if stderr is a terminal."""
    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty())


@functools.cache
def use_color():
    """Return True if colour output is enabled (terminal and no NO_COLOR)."""
    return is_terminal() and os.environ.get("NO_COLOR") is None


def _paint(code):
    return code if use_color() else ""


def _write(text):
    sys.stderr.write(text)


def error(context, msg):
    _write(f"{_paint(_RED)}torc: error:{_paint(_RESET)} {context}: {msg}\n")


def warn(context, msg):
    _write(f"{_paint(_YELLOW)}torc: warning:{_paint(_RESET)} {context}: {msg}\n")


def info(msg):
    _write(f"{_paint(_GREEN)}torc:{_paint(_RESET)} {msg}\n")


def progress(label, current, total):
    """Redraw a progress line; silent when stderr is not a terminal."""
    if not is_terminal():
        return
    _write(f"\r{_paint(_GREEN)}torc:{_paint(_RESET)} {label} [{current}/{total}]")
    sys.stderr.flush()


def progress_done(label):
    if not is_terminal():
        return
    _write(f"\r{_paint(_GREEN)}torc:{_paint(_RESET)} {label} — done\033[K\n")