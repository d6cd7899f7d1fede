"""Local dependency graph between in-tree libraries and targets."""

from __future__ import annotations

from dataclasses import dataclass, field

from .miniyaml import YamlError, parse


@dataclass
class LocalLib:
    name: str = ""
    dir: str = ""
    include: str = ""
    deps: list = field(default_factory=list)


@dataclass
class LocalTarget:
    name: str = ""
    dir: str = ""
    deps: list = field(default_factory=list)


@dataclass
class LocalDeps:
    libs: list = field(default_factory=list)
    targets: list = field(default_factory=list)


def libs_in_build_order(local):
    """Return the libraries leaves first (Kahn's algorithm).

    Libraries whose dependencies cannot all be satisfied (unknown names
    or cycles) are left out.
    """
    by_name = {lib.name: lib for lib in local.libs}
    incoming = {lib.name: set() for lib in local.libs}
    for lib in local.libs:
        incoming[lib.name].update(lib.deps)
    names = sorted(incoming)

    stack = [name for name in names if not incoming[name]]
    ordered = []
    while stack:
        current = stack.pop()
        ordered.append(by_name[current])
        for name in names:
            deps = incoming[name]
            if current in deps:
                deps.discard(current)
                if not deps:
                    stack.append(name)
    return ordered


def _archive(lib):
    return f"{lib.dir}/build/lib{lib.name}.a"


def _dep_archives(libs, deps):
    parts = []
    for dep in deps:
        match = next((lib for lib in libs if lib.name == dep), None)
        if match is not None:
            parts.append(f" {_archive(match)}")
    return "".join(parts)


def generate_localdep_mak(local):
    """Return the localdep.mak text for *local*."""
    out = ["# Auto-generated by torc — local dependencies\n\n"]

    order = "".join(f" {lib.dir}" for lib in libs_in_build_order(local))
    out.append(f"LOCALDEP_ORDER ={order}\n\n")

    includes = "".join(
        f" -I{lib.include or lib.dir + '/include'}" for lib in local.libs
    )
    out.append(f"LOCALDEP_CXXFLAGS ={includes}\n")
    out.append("LOCALDEP_LDFLAGS =" + "".join(f" -L{lib.dir}/build" for lib in local.libs) + "\n")
    out.append("LOCALDEP_LIBS =" + "".join(f" -l{lib.name}" for lib in local.libs) + "\n\n")

    for lib in local.libs:
        if lib.deps:
            out.append(f"{_archive(lib)}:{_dep_archives(local.libs, lib.deps)}\n")

    for target in local.targets:
        if target.deps:
            out.append(
                f"{target.dir}/build/{target.name}:{_dep_archives(local.libs, target.deps)}\n"
            )

    return "".join(out)


def _text(mapping, key):
    value = mapping.get(key, "")
    return value if isinstance(value, str) else ""


def _deps(mapping):
    deps = mapping.get("deps")
    if not isinstance(deps, list):
        return []
    return [d for d in deps if isinstance(d, str)]


def load_local_deps(manifest_path):
    """Read the ``local:`` section of a manifest; empty if absent or unreadable."""
    local = LocalDeps()
    try:
        with open(manifest_path, encoding="utf-8") as f:
            root = parse(f.read())
    except (OSError, YamlError):
        return local
    if not isinstance(root, dict):
        return local

    section = root.get("local")
    if not isinstance(section, dict):
        return local

    libs = section.get("libs")
    if isinstance(libs, list):
        for item in libs:
            if not isinstance(item, dict):
                continue
            lib = LocalLib(
                name=_text(item, "name"),
                dir=_text(item, "dir"),
                include=_text(item, "include"),
                deps=_deps(item),
            )
            if lib.name:
                local.libs.append(lib)

    targets = section.get("targets")
    if isinstance(targets, list):
        for item in targets:
            if not isinstance(item, dict):
                continue
            target = LocalTarget(
                name=_text(item, "name"), dir=_text(item, "dir"), deps=_deps(item)
            )
            if target.name:
                local.targets.append(target)

    return local