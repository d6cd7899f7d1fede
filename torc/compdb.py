"""Generation of compile_commands.json for editor integration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass

from . import diag
from .exitcodes import ExitCode, TorcError
from .manifest import expand_path
from .sources import find_sources

_OUTPUT = "compile_commands.json"


@dataclass
class CompdbOptions:
    src_dir: str = "src"
    out_dir: str = "build"
    std_ver: str = "c++20"
    recursive: bool = False


def _compile_flags(manifest, options):
    flags = f"-std={options.std_ver} -Wall -Wextra -Werror -pedantic -I{options.src_dir}"
    depdir = expand_path(manifest.depdir)
    for pkg in manifest.packages:
        inc = f"{depdir}/{pkg.name}/{pkg.version}/include"
        if os.path.isdir(inc):
            flags += f" -I{inc}"
    return flags


def _entry(src, cxx, flags, directory, options):
    rel = os.path.relpath(src, options.src_dir)
    obj = os.path.splitext(f"{options.out_dir}/{rel}")[0] + ".o"
    return {
        "directory": directory,
        "command": f"{cxx} {flags} -MMD -MP -c -o {obj} {src}",
        "file": src,
    }


def cmd_compdb(manifest, options):
    """Write compile_commands.json in the current directory; return the entry count."""
    cxx = os.environ.get("CXX", "g++")
    flags = _compile_flags(manifest, options)
    directory = os.getcwd()
    entries = [
        _entry(src, cxx, flags, directory, options)
        for src in find_sources(options.src_dir, options.recursive)
    ]

    try:
        with open(_OUTPUT, "w", encoding="utf-8") as out:
            out.write(json.dumps(entries, indent=2, ensure_ascii=False) + "\n")
    except OSError as e:
        raise TorcError("compdb", f"cannot write {_OUTPUT}", ExitCode.IOERR) from e

    if not entries:
        raise TorcError(
            "compdb", f"no .cpp files found in {options.src_dir}", ExitCode.NOINPUT
        )

    diag.info(f"wrote {_OUTPUT} ({len(entries)} entries)")
    return len(entries)