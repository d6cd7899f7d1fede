"""Project scaffolding: create new projects and generate Makefiles."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from datetime import datetime

from . import diag
from .exitcodes import ExitCode, TorcError


@dataclass
class NewOptions:
    name: str = ""
    lib: bool = False
    no_git: bool = False


@dataclass
class InitOptions:
    dir: str = "."
    name: str = ""
    force: bool = False


_MAKEFILE_HEADER = """\
# Generated by torc — customize freely
CXX       ?= g++
CXXSTD    ?= -std=c++20
WARNINGS  ?= -Wall -Wextra -Werror -pedantic
CXXFLAGS  += $(CXXSTD) $(WARNINGS) -Isrc

# ── torc dependencies ─────────────────────────────
-include extdep.mak
CXXFLAGS += $(TORC_CXXFLAGS)
LDFLAGS  += $(TORC_LDFLAGS)
LDLIBS   += $(TORC_LIBS)

SRC_DIR   = src
BUILD_DIR = build
SRCS      = $(wildcard $(SRC_DIR)/*.cpp)
OBJS      = $(patsubst $(SRC_DIR)/%.cpp,$(BUILD_DIR)/%.o,$(SRCS))
TARGET    = $(BUILD_DIR)/"""

_MAKEFILE_RULES = """
DEPFLAGS  = -MMD -MP

.PHONY: all clean deps

all: $(TARGET)

$(TARGET): $(OBJS) | $(BUILD_DIR)
\t$(CXX) $(CXXFLAGS) $(LDFLAGS) -o $@ $^ $(LDLIBS)

$(BUILD_DIR)/%.o: $(SRC_DIR)/%.cpp | $(BUILD_DIR)
\t$(CXX) $(CXXFLAGS) $(DEPFLAGS) -c -o $@ $<

$(BUILD_DIR):
\tmkdir -p $@

# Fetch/build external deps and regenerate extdep.mak
deps:
\ttorc install
\ttorc generate

clean:
\trm -rf $(BUILD_DIR)

# ── Local header dependencies (auto-generated by -MMD) ──
-include $(OBJS:.o=.d)
"""

_TORC_YAML = """\
depdir: ~/.local/share/torc
parallel: 4

packages: []
"""

_GITIGNORE = """\
build/
*.o
*.d
extdep.mak
"""

_CLANG_FORMAT = """\
BasedOnStyle: LLVM
IndentWidth: 4
ColumnLimit: 100
"""

_MAIN_CPP = """\
#include <cstdio>

int main() {
    std::puts("hello, world");
    return 0;
}
"""

_TEST_MAIN = r"""#include <cstdio>
#include <cstdlib>

#define ASSERT(cond) do { \
    if (!(cond)) { \
        std::fprintf(stderr, "FAIL: %s:%d: %s\n", __FILE__, __LINE__, #cond); \
        std::exit(1); \
    } \
} while(0)

int main() {
    ASSERT(1 + 1 == 2);
    std::puts("all tests passed");
    return 0;
}
"""


def makefile_content(name):
    """Return the generated Makefile text for a binary called *name*."""
    return f"{_MAKEFILE_HEADER}{name}\n{_MAKEFILE_RULES}"


def _lib_hpp(name):
    return f"#pragma once\n\nnamespace {name} {{\n\nint version();\n\n}} // namespace {name}\n"


def _lib_cpp(name):
    return (
        f'#include "{name}/{name}.hpp"\n\nnamespace {name} {{\n\n'
        f"int version() {{ return 1; }}\n\n}} // namespace {name}\n"
    )


def _write_file(path, content):
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def _timestamp_suffix():
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def cmd_new(options):
    """Create a project directory with a full skeleton; return its path."""
    root = options.name
    if not root:
        raise TorcError("new", "project name required", ExitCode.USAGE)
    if os.path.exists(root):
        raise TorcError("new", f"directory already exists: {root}", ExitCode.CANTCREAT)

    base = os.path.basename(os.path.normpath(root))
    files = {
        "torc.yaml": _TORC_YAML,
        "Makefile": makefile_content(base),
        ".gitignore": _GITIGNORE,
        ".clang-format": _CLANG_FORMAT,
        "tests/test_main.cpp": _TEST_MAIN,
    }
    if options.lib:
        files[f"src/{base}.cpp"] = _lib_cpp(base)
        files[f"include/{base}/{base}.hpp"] = _lib_hpp(base)
    else:
        files["src/main.cpp"] = _MAIN_CPP

    try:
        for sub in ("src", "tests", f"include/{base}"):
            os.makedirs(os.path.join(root, sub), exist_ok=True)
        for rel, content in files.items():
            _write_file(os.path.join(root, rel), content)
    except OSError as e:
        raise TorcError("new", f"cannot create {root}: {e.strerror or e}", ExitCode.CANTCREAT) from e

    if not options.no_git:
        try:
            rc = subprocess.run(["git", "init", "-q"], cwd=root, check=False).returncode
        except OSError:
            rc = -1
        if rc != 0:
            diag.error("new", "git init failed")

    diag.info(f"created project: {root}")
    return root


def cmd_init(options):
    """Write a Makefile into an existing directory; return its path."""
    makefile = f"{options.dir}/Makefile"

    if os.path.exists(makefile):
        if not options.force:
            raise TorcError(
                "init", "Makefile already exists (use --force to overwrite)", ExitCode.CANTCREAT
            )
        backup = f"{makefile}.{_timestamp_suffix()}.bak"
        try:
            os.rename(makefile, backup)
        except OSError as e:
            raise TorcError(
                "init", f"cannot backup Makefile: {e.strerror or e}", ExitCode.IOERR
            ) from e
        diag.info(f"backed up Makefile → {backup}")

    name = options.name or os.path.basename(os.path.abspath(options.dir))

    try:
        _write_file(makefile, makefile_content(name))
    except OSError as e:
        raise TorcError("init", "failed to write Makefile", ExitCode.IOERR) from e

    diag.info(f"wrote {makefile}")
    return makefile