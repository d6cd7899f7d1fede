"""Housekeeping: find and remove installed versions not in the manifest."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass

from . import diag
from .manifest import expand_path


@dataclass(frozen=True)
class StaleEntry:
    path: str
    package: str
    version: str


def _subdirs(path):
    try:
        with os.scandir(path) as entries:
            return sorted((e for e in entries if e.is_dir()), key=lambda e: e.name)
    except OSError:
        return []


def find_stale(manifest):
    """Return installed ``<package>/<version>`` directories the manifest does not list."""
    depdir = expand_path(manifest.depdir)
    expected = {f"{pkg.name}/{pkg.version}" for pkg in manifest.packages}
    return [
        StaleEntry(version_entry.path, pkg_entry.name, version_entry.name)
        for pkg_entry in _subdirs(depdir)
        for version_entry in _subdirs(pkg_entry.path)
        if f"{pkg_entry.name}/{version_entry.name}" not in expected
    ]


def remove_stale(entry):
    """Delete *entry* from disk; report and return False on failure."""
    try:
        if os.path.isdir(entry.path) and not os.path.islink(entry.path):
            shutil.rmtree(entry.path)
        else:
            os.remove(entry.path)
    except FileNotFoundError:
        pass
    except OSError as e:
        diag.error("clean", f"failed to remove {entry.path}: {e.strerror or e}")
        return False
    return True