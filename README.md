# torc

torc manages the external dependencies of a C++ project and helps build it.
You declare the dependencies in a `torc.yaml` manifest. torc downloads each
source archive, checks its SHA-256 and unpacks it. It then runs the package's
build command so that the package is installed into a shared directory.
Last, it writes Makefile fragments that point the compiler and linker at the
installed packages. torc can also compile a project directly, write
`compile_commands.json`, scaffold new projects and look for newer package
versions.

## Installation

```
pip install .
```

This installs the `torc` command. The package has no third-party Python
dependencies. Downloads, checksums and archive extraction use the Python
standard library. Some external programs must be on `PATH`:

- a C++ compiler for `torc build`. This is `g++` by default, or `$CXX`, or
  the one set by `--cxx` or a toolchain.
- `git` for `torc new`, unless you pass `--no-git`.
- a POSIX shell. Package build commands, discover scripts and checker
  scripts are run through the shell.

## The manifest

```yaml
depdir: ~/.local/share/torc
parallel: 4

packages:
  - name: fmt
    version: 10.1.1
    source: https://github.com/fmtlib/fmt/archive/10.1.1.tar.gz
    sha256: <hex digest>
    lib: fmt
    build: |
      cmake -B b -DCMAKE_INSTALL_PREFIX=${PREFIX}
      cmake --build b -j${JOBS} --target install

checkers:
  - ./scripts/my-checker

ldlibs: -lpthread

toolchains:
  clang:
    cxx: clang++
    cxxflags: -stdlib=libc++
    out: build-clang

local:
  libs:
    - name: util
      dir: lib/util
      include: lib/util/include
    - name: core
      dir: lib/core
      deps:
        - util
  targets:
    - name: myapp
      dir: src
      deps:
        - core
```

- `depdir` is where packages are installed, as `<depdir>/<name>/<version>`.
  A leading `~` is expanded. If `depdir` is not given, torc uses
  `$XDG_DATA_HOME/torc`. When that variable is unset or empty, it uses
  `~/.local/share/torc`.
- `parallel` caps how many packages are installed, or files compiled, at
  once. It defaults to 4 and is never less than 1.
- In a package's `build` command, `${PREFIX}` is replaced by the install
  prefix and `${JOBS}` by `parallel`. The command runs inside the unpacked
  source. `lib` is the library name used for `-l`, and it defaults to the
  package name. `sha256` is optional.
- `discover` names an optional script that is run after installation as
  `<script> <name> <version> <prefix>`. It prints a YAML list of further
  packages, in the same form as above. Those packages are then installed too.
- `checkers` lists commands used by `torc update`. Each one is asked
  `<cmd> --can-check <url>`, where exit status 0 means yes. It is then asked
  `<cmd> --latest <url>` and prints the version. For GitHub URLs there is a
  built-in checker. It asks the GitHub API for the latest release, and falls
  back to the latest tag.
- `toolchains` are named compiler settings for `torc build --toolchain`.
- `local` describes in-tree libraries and binaries for `localdep.mak`.

The manifest is read by a small YAML subset parser. It handles maps, lists,
plain scalars, `|` block scalars and `#` comment lines. It does not handle
anchors, aliases, tags or flow style. A flow value such as `packages: []` is
read as plain text, which in that place means "no packages".

## Commands

```
torc install [-F|--force]     fetch, verify, build and install packages
torc generate                 write extdep.mak (and localdep.mak)
torc build [options]          compile and link sources directly, incrementally
torc compdb [options]         write compile_commands.json
torc update [-a|--apply]      look for newer package versions
torc clean                    remove installed versions no longer declared
torc list                     list declared packages
torc new <name> [options]     create a new project skeleton
torc init [options]           write a Makefile into an existing directory
torc hook [-m|--makefile PATH]
                              insert the torc block into a Makefile
torc --help
torc --version
```

Every command except `new` reads `torc.yaml` from the current directory.
Every command accepts `-h/--help` and `-V/--version`. Run
`torc <command> --help` to see the options of a command.

- `install` runs the package installs in parallel and skips packages that
  are already installed. `--force` removes them first.
- `generate` always writes `extdep.mak`, which defines `TORC_CXXFLAGS`,
  `TORC_LDFLAGS` and `TORC_LIBS`. It also writes `localdep.mak` when the
  manifest has a `local:` section. That file holds `LOCALDEP_ORDER` in build
  order with leaves first, then `LOCALDEP_CXXFLAGS`, `LOCALDEP_LDFLAGS`,
  `LOCALDEP_LIBS` and the archive dependency rules.
- `build` takes these options:
  - `-s/--src DIR`, default `src`
  - `-o/--out DIR`, default `build`
  - `-t/--target NAME`, default: the name of the current directory
  - `--std STD`, default `c++20`
  - `-T/--toolchain NAME`
  - `--cxx CMD`
  - `--cxxflags FLAGS`
  - `-r/--release`, which compiles with `-O2 -DNDEBUG`
  - `-R/--recursive`

  A file is recompiled only when its object file is older than the source
  or than any dependency listed in the `.d` file the compiler wrote.
- `compdb` takes `-s/--src`, `-o/--out`, `--std` and `-R/--recursive`.
- `update` prints one line per package. `--apply` replaces each outdated
  version string everywhere in `torc.yaml`. It does not change checksums,
  so re-check `sha256` values by hand.
- `new` takes `-l/--lib` to create a library skeleton and `--no-git` to skip
  `git init`.
- `init` takes `-d/--dir PATH`, `-n/--name NAME` and `-f/--force`. If a
  Makefile already exists, `--force` moves it aside to
  `Makefile.<timestamp>.bak` before writing the new one.
- `hook` inserts the block before the first rule, or replaces an existing
  torc block. It keeps the previous file as `<makefile>.bak`.

Messages go to stderr. They are coloured when stderr is a terminal and
`NO_COLOR` is not set. `torc list` prints to stdout.

Exit codes follow the `sysexits.h` convention (`torc.exitcodes.ExitCode`):

| code | meaning                                          |
|------|--------------------------------------------------|
| 0    | success                                          |
| 64   | bad command-line usage                           |
| 65   | manifest parse error or checksum mismatch        |
| 66   | input not found (no sources, no Makefile)        |
| 69   | download failure                                 |
| 73   | cannot create a file or directory                |
| 74   | I/O, compile, link or package build failure      |

## Using it from Python

Each command is also a plain function. On failure it raises
`torc.exitcodes.TorcError`, which carries `context`, `message` and
`exit_code`. An example:

```python
from torc.manifest import load_manifest
from torc.generate import generate_extdep_mak, write_mak
from torc.build import BuildOptions, cmd_build

manifest = load_manifest("torc.yaml")
write_mak("extdep.mak", generate_extdep_mak(manifest))
target = cmd_build(manifest, BuildOptions(target="hello", release=True))
```

Other entry points:

- `torc.miniyaml.parse`
- `torc.localdep.load_local_deps` and `torc.localdep.generate_localdep_mak`
- `torc.compdb.cmd_compdb`
- `torc.install.cmd_install`
- `torc.update.cmd_update`
- `torc.clean.find_stale` and `torc.clean.remove_stale`
- `torc.scaffold.cmd_new` and `torc.scaffold.cmd_init`
- `torc.hook.cmd_hook`

## Typical workflow

```
torc new hello --no-git
cd hello
torc install
torc generate
torc build --target hello
torc compdb
```

## What torc does not do

- It does not resolve versions. Every package is installed at exactly the
  version the manifest gives, and there is no lock file.
- Archives must be gzip-compressed tarballs with a single top-level
  directory.
- The manifest parser is a YAML subset. It is not a full YAML
  implementation.