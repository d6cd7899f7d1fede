"""Version checkers: find the newest release of a package's source."""

from __future__ import annotations

import abc
import re
import shlex
import subprocess
import urllib.request

_GITHUB_URL = re.compile(r"github\.com/([^/]+)/([^/]+)/")
_TAG_NAME = re.compile(r'"tag_name"\s*:\s*"v?([^"]+)"')
_NAME = re.compile(r'"name"\s*:\s*"v?([^"]+)"')


def _http_get(url):
    request = urllib.request.Request(url, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(request, timeout=30) as response:
            return response.read().decode("utf-8", errors="replace")
    except (OSError, ValueError):
        return ""


class VersionChecker(abc.ABC):
    """Something that can tell the latest version behind a source URL."""

    name = ""

    @abc.abstractmethod
    def can_check(self, source_url):
        """Return True if this checker understands *source_url*."""

    @abc.abstractmethod
    def query_latest(self, source_url):
        """Return the latest version string, or None if it cannot be found."""


def parse_github_url(url):
    """Return ``(owner, repo)`` from a GitHub URL, or None."""
    match = _GITHUB_URL.search(url)
    if match is None:
        return None
    return match.group(1), match.group(2)


class GithubChecker(VersionChecker):
    """Asks the GitHub API for the latest release, falling back to tags."""

    name = "github"

    def can_check(self, source_url):
        return "github.com/" in source_url

    def query_latest(self, source_url):
        parsed = parse_github_url(source_url)
        if parsed is None:
            return None
        owner, repo = parsed
        base = f"https://api.github.com/repos/{owner}/{repo}"

        match = _TAG_NAME.search(_http_get(f"{base}/releases/latest"))
        if match:
            return match.group(1)

        match = _NAME.search(_http_get(f"{base}/tags?per_page=1"))
        if match:
            return match.group(1)
        return None


class ScriptChecker(VersionChecker):
    """Wraps an external command as a checker.

    ``<cmd> --can-check <url>`` exits 0 when the command handles the URL;
    ``<cmd> --latest <url>`` prints the latest version on stdout.
    """

    name = "script"

    def __init__(self, command):
        self.command = command

    def __repr__(self):
        return f"ScriptChecker({self.command!r})"

    def can_check(self, source_url):
        cmd = f"{self.command} --can-check {shlex.quote(source_url)}"
        try:
            result = subprocess.run(
                cmd,
                shell=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            return False
        return result.returncode == 0

    def query_latest(self, source_url):
        cmd = f"{self.command} --latest {shlex.quote(source_url)}"
        try:
            result = subprocess.run(
                cmd,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                check=False,
            )
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return result.stdout.rstrip("\r\n") or None


def build_checkers(checker_scripts=()):
    """Return the checker chain: user scripts first, built-in checkers last."""
    checkers = [ScriptChecker(script) for script in checker_scripts]
    checkers.append(GithubChecker())
    return checkers