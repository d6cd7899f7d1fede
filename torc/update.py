"""The update command: report and optionally apply newer package versions."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from . import diag
from .checker import build_checkers
from .exitcodes import ExitCode, TorcError


@dataclass
class VersionInfo:
    name: str
    current: str
    latest: str | None = None

    @property
    def has_update(self):
        return bool(self.latest) and self.latest != self.current


def check_packages(manifest, checkers):
    """Query each package with the first checker that accepts its source."""
    infos = []
    for pkg in manifest.packages:
        info = VersionInfo(pkg.name, pkg.version)
        checker = next((c for c in checkers if c.can_check(pkg.source)), None)
        if checker is None:
            status = "(cannot check)"
        else:
            info.latest = checker.query_latest(pkg.source) or None
            if not info.latest:
                status = "(query failed)"
            elif info.has_update:
                status = f"→ {info.latest}"
            else:
                status = "(up to date)"
        sys.stderr.write(f"  {pkg.name:<20} {info.current} {status}\n")
        infos.append(info)
    return infos


def rewrite_manifest(path, updates):
    """Replace every occurrence of each outdated version in the file at *path*."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
        for info in updates:
            if info.has_update and info.current:
                content = content.replace(info.current, info.latest)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise TorcError("update", f"cannot rewrite {path}: {e.strerror or e}", ExitCode.IOERR) from e


def cmd_update(manifest, manifest_path, apply=False):
    """Check every package; with *apply*, rewrite the manifest. Return the update count."""
    if not manifest.packages:
        diag.info("no packages to check")
        return 0

    infos = check_packages(manifest, build_checkers(manifest.checkers))
    updates = sum(1 for info in infos if info.has_update)
    if updates == 0:
        diag.info("all packages up to date")
        return 0

    diag.info(f"{updates} update(s) available")
    if apply:
        rewrite_manifest(manifest_path, infos)
        diag.info(f"updated {manifest_path}")
        diag.warn("update", "sha256 checksums need manual verification")
    return updates