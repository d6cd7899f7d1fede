import json
import os
import stat
import urllib.error
from unittest import mock

import pytest

from torc.checker import (
    GithubChecker,
    ScriptChecker,
    build_checkers,
    parse_github_url,
)


class _FakeResponse:
    def __init__(self, body):
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _responder(bodies):
    def fake_urlopen(request, timeout=None):
        url = request.full_url
        for fragment, body in bodies.items():
            if fragment in url:
                return _FakeResponse(body)
        raise urllib.error.URLError("unreachable")

    return fake_urlopen


def _script(tmp_path, name, body):
    path = tmp_path / name
    path.write_text(body)
    path.chmod(stat.S_IRUSR | stat.S_IWUSR | stat.S_IXUSR)
    return str(path)


MOCK_CHECKER = (
    "#!/bin/sh\n"
    'case "$1" in\n'
    "  --can-check) echo \"$2\" | grep -q 'example.com' ;;\n"
    "  --latest) echo '2.0.0' ;;\n"
    "esac\n"
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://github.com/fmtlib/fmt/archive/10.1.1.tar.gz", True),
        ("https://example.com/foo-1.0.0.tar.gz", False),
    ],
)
def test_github_can_check(url, expected):
    assert GithubChecker().can_check(url) is expected


def test_parse_github_url():
    assert parse_github_url("https://github.com/fmtlib/fmt/archive/x.tar.gz") == (
        "fmtlib",
        "fmt",
    )
    assert parse_github_url("https://github.com/fmtlib") is None
    assert parse_github_url("https://example.com/a/b/c") is None


def test_github_query_latest_release():
    body = json.dumps({"tag_name": "v10.2.0"}).encode()
    with mock.patch("urllib.request.urlopen", _responder({"releases/latest": body})):
        latest = GithubChecker().query_latest(
            "https://github.com/fmtlib/fmt/archive/10.1.1.tar.gz"
        )
    assert latest == "10.2.0"


def test_github_query_falls_back_to_tags():
    bodies = {
        "releases/latest": b'{"message": "Not Found"}',
        "tags?per_page=1": json.dumps([{"name": "1.13.0"}]).encode(),
    }
    with mock.patch("urllib.request.urlopen", _responder(bodies)):
        latest = GithubChecker().query_latest(
            "https://github.com/gabime/spdlog/archive/v1.12.0.tar.gz"
        )
    assert latest == "1.13.0"


def test_github_query_network_failure():
    with mock.patch("urllib.request.urlopen", _responder({})):
        latest = GithubChecker().query_latest(
            "https://github.com/fmtlib/fmt/archive/10.1.1.tar.gz"
        )
    assert latest is None


def test_github_query_unparseable_url():
    assert GithubChecker().query_latest("https://github.com/only") is None


def test_script_checker_protocol(tmp_path):
    checker = ScriptChecker(_script(tmp_path, "my-checker", MOCK_CHECKER))
    assert checker.can_check("https://example.com/foo-1.0.0.tar.gz") is True
    assert checker.can_check("https://other.org/foo.tar.gz") is False
    assert checker.query_latest("https://example.com/foo-1.0.0.tar.gz") == "2.0.0"


def test_script_checker_failure_gives_none(tmp_path):
    checker = ScriptChecker(_script(tmp_path, "bad", "#!/bin/sh\necho 3.0\nexit 1\n"))
    assert checker.query_latest("https://example.com/x.tar.gz") is None
    assert checker.can_check("https://example.com/x.tar.gz") is False


def test_build_checkers_order():
    checkers = build_checkers(["first", "second"])
    assert [c.name for c in checkers] == ["script", "script", "github"]
    assert [c.command for c in checkers[:2]] == ["first", "second"]


def test_build_checkers_default():
    checkers = build_checkers()
    assert len(checkers) == 1
    assert checkers[0].name == "github"
    assert os.path.basename(type(checkers[0]).__name__) == "GithubChecker"