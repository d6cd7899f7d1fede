"""The install command: fetch, verify, build and install packages."""

from __future__ import annotations

import functools
import os
import shlex
import shutil
import subprocess

from . import diag
from .discover import DiscoverError, discover_deps
from .exitcodes import ExitCode, TorcError
from .fetch import FetchError, download, extract_tarball, verify_sha256
from .manifest import expand_path
from .parallel import run_parallel


def substitute_vars(cmd, prefix, jobs):
    """Expand ``${PREFIX}`` and ``${JOBS}`` in a build command."""
    return cmd.replace("${PREFIX}", prefix).replace("${JOBS}", str(jobs))


def install_package(package, depdir, jobs):
    """Install one package under *depdir*.

    Returns True if it was built, False if it was already installed.
    Raises TorcError on failure.
    """
    ident = f"{package.name}/{package.version}"
    prefix = f"{depdir}/{ident}"
    tmp_dir = f"{depdir}/.tmp/{package.name}-{package.version}"
    archive = f"{tmp_dir}/source.tar.gz"
    src_dir = f"{tmp_dir}/src"

    if os.path.exists(f"{prefix}/include") or os.path.exists(f"{prefix}/lib"):
        diag.info(f"{ident} already installed")
        return False

    diag.info(f"installing {ident}")

    try:
        download(package.source, archive)
        if package.sha256:
            verify_sha256(archive, package.sha256)
        extract_tarball(archive, src_dir)
    except FetchError as e:
        raise TorcError(package.name, e.message, e.exit_code) from e

    build_cmd = substitute_vars(package.build, prefix, jobs)
    rc = subprocess.run(
        f"cd {shlex.quote(src_dir)} && {build_cmd}", shell=True, check=False
    ).returncode
    if rc != 0:
        raise TorcError(package.name, f"build failed (exit {rc})", ExitCode.IOERR)

    shutil.rmtree(tmp_dir, ignore_errors=True)
    return True


def _install_reporting(package, depdir, jobs):
    try:
        install_package(package, depdir, jobs)
    except TorcError as e:
        diag.error(e.context, e.message)
        return False
    return True


def cmd_install(manifest, force):
    """Install every manifest package, then their discovered dependencies."""
    depdir = expand_path(manifest.depdir)
    try:
        os.makedirs(depdir, exist_ok=True)
    except OSError as e:
        raise TorcError(
            "install", f"cannot create depdir: {e.strerror or e}", ExitCode.CANTCREAT
        ) from e

    tasks = []
    for pkg in manifest.packages:
        if force:
            shutil.rmtree(f"{depdir}/{pkg.name}/{pkg.version}", ignore_errors=True)
        tasks.append(
            (pkg.name, functools.partial(_install_reporting, pkg, depdir, manifest.parallel))
        )

    failures = sum(1 for _, ok in run_parallel(tasks, manifest.parallel) if not ok)
    if failures:
        raise TorcError("install", f"{failures} package(s) failed", ExitCode.IOERR)

    installed = {f"{pkg.name}/{pkg.version}" for pkg in manifest.packages}
    for pkg in manifest.packages:
        if not pkg.discover:
            continue
        prefix = f"{depdir}/{pkg.name}/{pkg.version}"
        try:
            deps = discover_deps(pkg, prefix)
        except DiscoverError as e:
            diag.warn(e.context, e.message)
            continue
        for dep in deps:
            key = f"{dep.name}/{dep.version}"
            if key in installed:
                continue
            installed.add(key)
            diag.info(f"transitive: {key}")
            _install_reporting(dep, depdir, manifest.parallel)

    diag.info(f"all packages installed to {depdir}")