"""Subcommands: parse their options, run them and turn errors into exit codes."""

from __future__ import annotations

import functools
import sys

from . import diag
from .build import BuildOptions, cmd_build
from .clean import find_stale, remove_stale
from .cli import CliExit, new_parser, parse_args
from .compdb import CompdbOptions, cmd_compdb
from .exitcodes import ExitCode, TorcError
from .generate import generate_extdep_mak, write_mak
from .hook import cmd_hook
from .install import cmd_install
from .localdep import generate_localdep_mak, load_local_deps
from .manifest import load_manifest
from .scaffold import InitOptions, NewOptions, cmd_init, cmd_new
from .update import cmd_update

MANIFEST_FILE = "torc.yaml"


def _command(func):
    @functools.wraps(func)
    def wrapper(argv=None):
        try:
            func(list(argv or []))
        except CliExit as e:
            return int(e.exit_code)
        except TorcError as e:
            diag.error(e.context, e.message)
            return int(e.exit_code)
        return int(ExitCode.OK)

    return wrapper


def _set(values):
    return {key: value for key, value in values.items() if value}


def _write(path, content, what):
    try:
        write_mak(path, content)
    except OSError as e:
        raise TorcError("generate", f"failed to write {what}", ExitCode.IOERR) from e
    diag.info(f"wrote {what}")


@_command
def run_install(argv=None):
    parser = new_parser("torc install", "torc install [options]")
    parser.add_argument("-F", "--force", action="store_true", help="Force reinstall")
    ns = parse_args(parser, argv)
    cmd_install(load_manifest(MANIFEST_FILE), ns.force)


@_command
def run_generate(argv=None):
    manifest = load_manifest(MANIFEST_FILE)
    _write("extdep.mak", generate_extdep_mak(manifest), "extdep.mak")
    local = load_local_deps(MANIFEST_FILE)
    if local.libs or local.targets:
        _write("localdep.mak", generate_localdep_mak(local), "localdep.mak")


@_command
def run_build(argv=None):
    parser = new_parser("torc build", "torc build [options]")
    parser.add_argument("-s", "--src", default="", metavar="DIR",
                        help="Source directory (default: src)")
    parser.add_argument("-o", "--out", default="", metavar="DIR",
                        help="Output directory (default: build)")
    parser.add_argument("-t", "--target", default="", metavar="NAME", help="Binary name")
    parser.add_argument("--std", default="", metavar="STD",
                        help="C++ standard (default: c++20)")
    parser.add_argument("-T", "--toolchain", default="", metavar="NAME",
                        help="Use named toolchain")
    parser.add_argument("--cxx", default="", metavar="CMD", help="Override compiler")
    parser.add_argument("--cxxflags", default="", metavar="FLAGS",
                        help="Extra compiler flags")
    parser.add_argument("-r", "--release", action="store_true",
                        help="Optimize (-O2 -DNDEBUG)")
    parser.add_argument("-R", "--recursive", action="store_true",
                        help="Recurse into subdirectories")
    ns = parse_args(parser, argv)

    options = BuildOptions(
        release=ns.release,
        recursive=ns.recursive,
        **_set(
            {
                "src_dir": ns.src,
                "out_dir": ns.out,
                "target": ns.target,
                "std_ver": ns.std,
                "toolchain": ns.toolchain,
                "cxx": ns.cxx,
                "extra_cxxflags": ns.cxxflags,
            }
        ),
    )
    cmd_build(load_manifest(MANIFEST_FILE), options)


@_command
def run_compdb(argv=None):
    parser = new_parser("torc compdb", "torc compdb [options]")
    parser.add_argument("-s", "--src", default="", metavar="DIR",
                        help="Source directory (default: src)")
    parser.add_argument("-o", "--out", default="", metavar="DIR",
                        help="Output dir for .o paths (default: build)")
    parser.add_argument("--std", default="", metavar="STD",
                        help="C++ standard (default: c++20)")
    parser.add_argument("-R", "--recursive", action="store_true",
                        help="Recurse into subdirectories")
    ns = parse_args(parser, argv)

    options = CompdbOptions(
        recursive=ns.recursive,
        **_set({"src_dir": ns.src, "out_dir": ns.out, "std_ver": ns.std}),
    )
    cmd_compdb(load_manifest(MANIFEST_FILE), options)


@_command
def run_update(argv=None):
    parser = new_parser("torc update", "torc update [options]")
    parser.add_argument("-a", "--apply", action="store_true",
                        help="Rewrite manifest with new versions")
    ns = parse_args(parser, argv)
    cmd_update(load_manifest(MANIFEST_FILE), MANIFEST_FILE, ns.apply)


@_command
def run_clean(argv=None):
    manifest = load_manifest(MANIFEST_FILE)
    stale = find_stale(manifest)
    removed = sum(1 for entry in stale if remove_stale(entry))
    if not stale:
        diag.info("nothing to clean")
    else:
        diag.info(f"removed {removed} stale version(s)")


@_command
def run_list(argv=None):
    manifest = load_manifest(MANIFEST_FILE)
    for pkg in manifest.packages:
        sys.stdout.write(f"{pkg.name:<20} {pkg.version}\n")


@_command
def run_new(argv=None):
    parser = new_parser("torc new", "torc new <name> [options]")
    parser.add_argument("-l", "--lib", action="store_true", help="Create library skeleton")
    parser.add_argument("--no-git", action="store_true", help="Skip git init")
    ns = parse_args(parser, argv)
    name = ns.args[0] if ns.args else ""
    cmd_new(NewOptions(name=name, lib=ns.lib, no_git=ns.no_git))


@_command
def run_init(argv=None):
    parser = new_parser("torc init", "torc init [options]")
    parser.add_argument("-d", "--dir", default="", metavar="PATH",
                        help="Target directory (default: .)")
    parser.add_argument("-n", "--name", default="", metavar="NAME", help="Project name")
    parser.add_argument("-f", "--force", action="store_true",
                        help="Overwrite existing Makefile")
    ns = parse_args(parser, argv)
    cmd_init(InitOptions(force=ns.force, **_set({"dir": ns.dir, "name": ns.name})))


@_command
def run_hook(argv=None):
    parser = new_parser("torc hook", "torc hook [options]")
    parser.add_argument("-m", "--makefile", default="", metavar="PATH",
                        help="Makefile path (default: Makefile)")
    ns = parse_args(parser, argv)
    cmd_hook(ns.makefile or "Makefile")