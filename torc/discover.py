"""Transitive dependency discovery through per-package scripts."""

from __future__ import annotations

import shlex
import subprocess

from .exitcodes import ExitCode, TorcError
from .manifest import ManifestError, Package
from .miniyaml import YamlError, parse


class DiscoverError(TorcError):
    """Raised when a discover script produces unusable output."""

    def __init__(self, package, message):
        super().__init__(package, message, ExitCode.DATAERR)


def _run_script(command):
    try:
        result = subprocess.run(
            command, shell=True, stdout=subprocess.PIPE, text=True, check=False
        )
    except OSError:
        return ""
    return result.stdout if result.returncode == 0 else ""


def discover_deps(package, prefix):
    """Run *package*'s discover script and return the packages it lists.

    The script is called as ``<discover> <name> <version> <prefix>`` and
    must print a YAML list of package maps. No script, a failing script or
    empty output yields an empty list; malformed output raises DiscoverError.
    """
    if not package.discover:
        return []

    args = " ".join(shlex.quote(a) for a in (package.name, package.version, prefix))
    output = _run_script(f"{package.discover} {args}")
    if not output:
        return []

    try:
        root = parse(output)
    except YamlError as e:
        raise DiscoverError(package.name, "discover script produced invalid YAML") from e
    if not isinstance(root, list):
        raise DiscoverError(package.name, "discover output must be a YAML list")

    deps = []
    for item in root:
        if not isinstance(item, dict):
            continue
        try:
            dep = Package.from_mapping(item)
        except ManifestError as e:
            raise DiscoverError(
                package.name, f"discover script produced invalid YAML: {e.message}"
            ) from e
        if dep.name:
            deps.append(dep)
    return deps