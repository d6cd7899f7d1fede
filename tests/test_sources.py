import os

import pytest

from torc.sources import find_sources


@pytest.fixture
def src_tree(tmp_path):
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    for rel in ("util.cpp", "main.cpp", "util.hpp", "notes.txt", "sub/extra.cpp"):
        (src / rel).write_text("// x\n")
    return str(src)


def test_flat_listing_sorted(src_tree):
    assert find_sources(src_tree, False) == [
        os.path.join(src_tree, "main.cpp"),
        os.path.join(src_tree, "util.cpp"),
    ]


def test_recursive_listing(src_tree):
    found = find_sources(src_tree, True)
    assert os.path.join(src_tree, "sub", "extra.cpp") in found
    assert len(found) == 3
    assert found == sorted(found)
    assert all(path.endswith(".cpp") for path in found)


def test_missing_directory(tmp_path):
    assert find_sources(str(tmp_path / "absent"), False) == []
    assert find_sources(str(tmp_path / "absent"), True) == []


def test_empty_directory(tmp_path):
    (tmp_path / "src").mkdir()
    assert find_sources(str(tmp_path / "src"), False) == []


def test_relative_paths_keep_prefix(src_tree, monkeypatch):
    monkeypatch.chdir(os.path.dirname(src_tree))
    assert find_sources("src", False) == ["src/main.cpp", "src/util.cpp"]