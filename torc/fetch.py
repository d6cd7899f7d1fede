"""Fetching, verifying and unpacking source archives."""

from __future__ import annotations

import contextlib
import hashlib
import os
import shutil
import tarfile
import urllib.error
import urllib.request

from .exitcodes import ExitCode, TorcError

_CHUNK = 64 * 1024
_EXTRACT_KWARGS = {"filter": "tar"} if hasattr(tarfile, "tar_filter") else {}


class FetchError(TorcError):
    """Raised when an archive cannot be downloaded, verified or unpacked."""

    def __init__(self, message, exit_code=ExitCode.IOERR):
        super().__init__("fetch", message, exit_code)


def download(url, dest_path):
    """Download *url* to *dest_path*, creating parent directories."""
    parent = os.path.dirname(dest_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    try:
        with urllib.request.urlopen(url) as response, open(dest_path, "wb") as out:
            shutil.copyfileobj(response, out)
    except (OSError, ValueError) as e:
        with contextlib.suppress(OSError):
            os.remove(dest_path)
        raise FetchError(f"download failed: {e}", ExitCode.UNAVAILABLE) from e


def verify_sha256(path, expected):
    """Check that the SHA-256 of *path* equals the hex string *expected*."""
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK), b""):
                digest.update(chunk)
    except OSError as e:
        raise FetchError(f"cannot read {path}: {e.strerror or e}", ExitCode.DATAERR) from e
    actual = digest.hexdigest()
    if actual != expected:
        raise FetchError(
            f"checksum mismatch: expected {expected}, got {actual}", ExitCode.DATAERR
        )


def _strip_first(name):
    parts = [p for p in name.split("/") if p]
    return "/".join(parts[1:])


def extract_tarball(archive, dest_dir):
    """Unpack a gzip tarball into *dest_dir*, dropping its top-level directory."""
    os.makedirs(dest_dir, exist_ok=True)
    try:
        with tarfile.open(archive, "r:gz") as tar:
            members = tar.getmembers()
            for member in members:
                member.name = _strip_first(member.name)
                if member.islnk():
                    member.linkname = _strip_first(member.linkname)
            for member in members:
                if member.name:
                    tar.extract(member, dest_dir, **_EXTRACT_KWARGS)
    except (tarfile.TarError, OSError) as e:
        raise FetchError(f"extraction failed: {e}", ExitCode.IOERR) from e