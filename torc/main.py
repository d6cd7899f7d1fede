"""Entry point: dispatch to a subcommand."""

from __future__ import annotations

import sys

from . import commands, diag
from .cli import print_version
from .exitcodes import ExitCode

_COMMANDS = {
    "install": commands.run_install,
    "generate": commands.run_generate,
    "build": commands.run_build,
    "compdb": commands.run_compdb,
    "update": commands.run_update,
    "clean": commands.run_clean,
    "list": commands.run_list,
    "new": commands.run_new,
    "init": commands.run_init,
    "hook": commands.run_hook,
}


def print_main_help(prog):
    """Write the top-level usage text to stderr."""
    sys.stderr.write(
        f"Usage: {prog} <command> [options]\n\n"
        "Commands:\n"
        "  install        Fetch, build, install packages\n"
        "  generate       Emit extdep.mak (+ localdep.mak)\n"
        "  build          Compile sources directly\n"
        "  compdb         Generate compile_commands.json\n"
        "  update         Check for newer versions\n"
        "  clean          Remove stale versions\n"
        "  list           List declared packages\n"
        "  new            Create a new project\n"
        "  init           Generate a Makefile\n"
        "  hook           Inject torc into Makefile\n\n"
        "Run 'torc <command> --help' for command-specific options.\n"
    )


def main(argv=None):
    """Run the command named by the first argument; return the exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    prog = "torc"
    if not argv:
        print_main_help(prog)
        return int(ExitCode.USAGE)

    cmd, rest = argv[0], argv[1:]
    if cmd in ("-h", "--help"):
        print_main_help(prog)
        return int(ExitCode.OK)
    if cmd in ("-V", "--version"):
        print_version()
        return int(ExitCode.OK)

    run = _COMMANDS.get(cmd)
    if run is None:
        diag.error("cli", f"unknown command: {cmd}")
        return int(ExitCode.USAGE)
    return run(rest)


if __name__ == "__main__":
    sys.exit(main())