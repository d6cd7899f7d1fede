"""Discovery of C++ source files."""

from __future__ import annotations

import os

_EXTENSION = ".cpp"


def _is_source(name):
    return os.path.splitext(name)[1] == _EXTENSION


def find_sources(src_dir, recursive):
    """Return the sorted paths of ``.cpp`` entries under *src_dir*.

    A missing directory yields an empty list.
    """
    if not os.path.isdir(src_dir):
        return []
    if recursive:
        found = [
            os.path.join(root, name)
            for root, dirs, files in os.walk(src_dir)
            for name in (*dirs, *files)
            if _is_source(name)
        ]
    else:
        with os.scandir(src_dir) as entries:
            found = [os.path.join(src_dir, e.name) for e in entries if _is_source(e.name)]
    return sorted(found)