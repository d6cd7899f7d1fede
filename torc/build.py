"""The build command: compile and link sources directly, without a Makefile."""

from __future__ import annotations

import functools
import os
import subprocess
from dataclasses import dataclass

from . import diag
from .exitcodes import ExitCode, TorcError
from .manifest import expand_path
from .parallel import run_parallel
from .sources import find_sources


@dataclass
class BuildOptions:
    src_dir: str = "src"
    out_dir: str = "build"
    target: str = ""
    std_ver: str = "c++20"
    toolchain: str = ""
    cxx: str = ""
    extra_cxxflags: str = ""
    release: bool = False
    recursive: bool = False


def _obj_path(src, out_dir, src_dir):
    rel = os.path.relpath(src, src_dir)
    return os.path.splitext(os.path.join(out_dir, rel))[0] + ".o"


def _mtime(path):
    return os.stat(path).st_mtime_ns


def _needs_rebuild(src, obj):
    if not os.path.exists(obj):
        return True
    obj_time = _mtime(obj)
    if _mtime(src) > obj_time:
        return True

    depfile = os.path.splitext(obj)[0] + ".d"
    try:
        with open(depfile, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError:
        return True

    for line in lines:
        _, colon, rest = line.partition(":")
        if colon:
            line = rest
        if line.endswith("\\"):
            line = line[:-1]
        for dep in line.split():
            if dep == "\\":
                continue
            if os.path.exists(dep) and _mtime(dep) > obj_time:
                return True
    return False


def _toolchain(manifest, options):
    if not options.toolchain:
        return None
    return manifest.find_toolchain(options.toolchain)


def _resolve_cxx(manifest, options):
    if options.cxx:
        return options.cxx
    tc = _toolchain(manifest, options)
    if tc is not None and tc.cxx:
        return tc.cxx
    return os.environ.get("CXX", "g++")


def _resolve_out_dir(manifest, options):
    tc = _toolchain(manifest, options)
    if tc is not None and tc.out:
        return tc.out
    return options.out_dir


def _package_dirs(manifest, sub):
    depdir = expand_path(manifest.depdir)
    for pkg in manifest.packages:
        path = f"{depdir}/{pkg.name}/{pkg.version}/{sub}"
        if os.path.isdir(path):
            yield path


def _cxxflags(manifest, options):
    flags = f"-std={options.std_ver} -Wall -Wextra -Werror -pedantic"
    flags += f" -I{options.src_dir}"
    flags += " -O2 -DNDEBUG" if options.release else " -O0 -g"
    if options.extra_cxxflags:
        flags += " " + options.extra_cxxflags
    tc = _toolchain(manifest, options)
    if tc is not None and tc.cxxflags:
        flags += " " + tc.cxxflags
    flags += "".join(f" -I{inc}" for inc in _package_dirs(manifest, "include"))
    return flags


def _ldflags(manifest):
    return "".join(f" -L{lib}" for lib in _package_dirs(manifest, "lib"))


def _libs(manifest):
    libs = "".join(f" -l{pkg.lib_name}" for pkg in manifest.packages)
    if manifest.ldlibs:
        libs += " " + manifest.ldlibs
    return libs


def _run(cmd):
    return subprocess.run(cmd, shell=True, check=False).returncode


def _compile(to_compile, cxx, cxxflags, parallel):
    total = len(to_compile)
    diag.info(f"compiling {total} file(s)")
    tasks = [
        (src, functools.partial(_run, f"{cxx} {cxxflags} -MMD -MP -c -o {obj} {src}"))
        for src, obj in to_compile
    ]
    failed = None
    for done, (name, rc) in enumerate(run_parallel(tasks, parallel), start=1):
        diag.progress("compiling", done, total)
        if rc != 0 and failed is None:
            failed = name
    diag.progress_done("compiling")
    if failed is not None:
        raise TorcError("build", f"compilation failed: {failed}", ExitCode.IOERR)


def _link(objs, target_path, cxx, cxxflags, ldflags, libs):
    diag.info(f"linking {target_path}")
    cmd = f"{cxx} {cxxflags}{ldflags} -o {target_path}"
    cmd += "".join(f" {obj}" for obj in objs)
    cmd += libs
    if _run(cmd) != 0:
        raise TorcError("build", "link failed", ExitCode.IOERR)


def cmd_build(manifest, options):
    """Compile what is out of date and link the target; return the target path."""
    srcs = find_sources(options.src_dir, options.recursive)
    if not srcs:
        raise TorcError(
            "build", f"no .cpp files found in {options.src_dir}", ExitCode.NOINPUT
        )

    cxx = _resolve_cxx(manifest, options)
    out_dir = _resolve_out_dir(manifest, options)
    cxxflags = _cxxflags(manifest, options)
    objs = [_obj_path(src, out_dir, options.src_dir) for src in srcs]

    try:
        os.makedirs(out_dir, exist_ok=True)
        for obj in objs:
            os.makedirs(os.path.dirname(obj) or ".", exist_ok=True)
    except OSError as e:
        raise TorcError(
            "build", f"cannot create {out_dir}: {e.strerror or e}", ExitCode.CANTCREAT
        ) from e

    target_name = options.target or os.path.basename(os.getcwd())
    target_path = f"{out_dir}/{target_name}"

    to_compile = [(src, obj) for src, obj in zip(srcs, objs) if _needs_rebuild(src, obj)]

    if not to_compile and os.path.exists(target_path):
        diag.info("up to date")
        return target_path
    if to_compile:
        _compile(to_compile, cxx, cxxflags, manifest.parallel)
    diag.info(f"built {target_path}")
    _link(objs, target_path, cxx, cxxflags, _ldflags(manifest), _libs(manifest))
    return target_path