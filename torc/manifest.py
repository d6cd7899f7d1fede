"""Manifest model, parsed from torc.yaml."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from .exitcodes import ExitCode, TorcError
from .miniyaml import YamlError, parse


class ManifestError(TorcError):
    """Raised when a manifest cannot be read or understood."""

    def __init__(self, message):
        super().__init__("manifest", message, ExitCode.DATAERR)


def _scalar(mapping, key):
    value = mapping.get(key, "")
    if not isinstance(value, str):
        raise ManifestError(f"field '{key}' must be a scalar")
    return value


@dataclass
class Package:
    name: str = ""
    version: str = ""
    source: str = ""
    sha256: str = ""
    build: str = ""
    discover: str = ""
    lib_name: str = ""

    @classmethod
    def from_mapping(cls, data):
        """Build a package from a parsed YAML map; ``lib`` defaults to the name."""
        pkg = cls(
            name=_scalar(data, "name"),
            version=_scalar(data, "version"),
            source=_scalar(data, "source"),
            sha256=_scalar(data, "sha256"),
            build=_scalar(data, "build"),
            discover=_scalar(data, "discover"),
            lib_name=_scalar(data, "lib"),
        )
        if not pkg.lib_name:
            pkg.lib_name = pkg.name
        return pkg


@dataclass
class Toolchain:
    name: str = ""
    cxx: str = ""
    cxxflags: str = ""
    out: str = ""


@dataclass
class Manifest:
    depdir: str = ""
    parallel: int = 4
    packages: list = field(default_factory=list)
    checkers: list = field(default_factory=list)
    ldlibs: str = ""
    toolchains: list = field(default_factory=list)

    def __post_init__(self):
        self.parallel = max(1, self.parallel)

    def find_toolchain(self, name):
        """Return the toolchain called *name*, or None."""
        return next((tc for tc in self.toolchains if tc.name == name), None)


def expand_path(path):
    """Replace a leading ``~`` with the user's home directory."""
    if not path.startswith("~"):
        return path
    home = os.environ.get("HOME")
    if home is None:
        try:
            import pwd

            home = pwd.getpwuid(os.getuid()).pw_dir
        except (ImportError, KeyError, AttributeError):
            home = "/tmp"
    return home + path[1:]


def default_depdir():
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return xdg + "/torc"
    return expand_path("~/.local/share/torc")


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text):
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def load_manifest(path):
    """Load the manifest at *path*; raise ManifestError on failure."""
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except OSError:
        raise ManifestError(f"cannot open: {path}") from None

    try:
        root = parse(text)
    except YamlError as e:
        raise ManifestError(f"parse error at line {e.line}: {e.message}") from e

    if not isinstance(root, dict):
        raise ManifestError("manifest root must be a map")

    m = Manifest(depdir=default_depdir())

    depdir = root.get("depdir")
    if isinstance(depdir, str):
        m.depdir = expand_path(depdir)

    parallel = root.get("parallel")
    if isinstance(parallel, str):
        m.parallel = max(1, _atoi(parallel))

    packages = root.get("packages")
    if isinstance(packages, list):
        for item in packages:
            if not isinstance(item, dict):
                continue
            pkg = Package.from_mapping(item)
            if pkg.name:
                m.packages.append(pkg)

    checkers = root.get("checkers")
    if isinstance(checkers, list):
        m.checkers.extend(item for item in checkers if isinstance(item, str))

    ldlibs = root.get("ldlibs")
    if isinstance(ldlibs, str):
        m.ldlibs = ldlibs

    toolchains = root.get("toolchains")
    if isinstance(toolchains, dict):
        for key, value in toolchains.items():
            if not isinstance(value, dict):
                continue
            m.toolchains.append(
                Toolchain(
                    name=key,
                    cxx=_scalar(value, "cxx"),
                    cxxflags=_scalar(value, "cxxflags"),
                    out=_scalar(value, "out"),
                )
            )

    return m