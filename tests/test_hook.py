import pytest

from torc.exitcodes import ExitCode, TorcError
from torc.hook import cmd_hook

END_LINE = "# ── END torc ───────────────────────────\n"


def test_hook_insert(tmp_path):
    mf = tmp_path / "Makefile"
    mf.write_text("CXX = g++\n\nall:\n\techo hi\n")
    cmd_hook(str(mf))
    content = mf.read_text()
    assert "BEGIN torc" in content
    assert "TORC_CXXFLAGS" in content
    assert content.index("BEGIN torc") < content.index("all:")
    assert content.startswith("CXX = g++\n")
    assert content.endswith("all:\n\techo hi\n")


def test_hook_replace(tmp_path):
    mf = tmp_path / "Makefile"
    mf.write_text(
        "CXX = g++\n"
        "# ── BEGIN torc ─────────────────────────\n"
        "OLD STUFF\n"
        "# ── END torc ───────────────────────────\n"
        "all:\n\techo hi\n"
    )
    cmd_hook(str(mf))
    content = mf.read_text()
    assert "OLD STUFF" not in content
    assert "TORC_CXXFLAGS" in content
    assert content.startswith("CXX = g++\n# ── BEGIN torc")
    assert content.endswith(END_LINE + "all:\n\techo hi\n")


def test_hook_keeps_backup(tmp_path):
    mf = tmp_path / "Makefile"
    original = "CXX = g++\n\nall:\n\techo hi\n"
    mf.write_text(original)
    cmd_hook(str(mf))
    hooked = mf.read_text()
    assert "BEGIN torc" in hooked
    assert hooked != original
    assert (tmp_path / "Makefile.bak").read_text() == original


def test_hook_is_idempotent(tmp_path):
    mf = tmp_path / "Makefile"
    mf.write_text("CXX = g++\n\nall:\n\techo hi\n")
    cmd_hook(str(mf))
    once = mf.read_text()
    cmd_hook(str(mf))
    assert mf.read_text() == once
    assert once.count("BEGIN torc") == 1


def test_hook_appends_when_no_rules(tmp_path):
    mf = tmp_path / "Makefile"
    mf.write_text("# comment\nCXX = g++\n")
    cmd_hook(str(mf))
    content = mf.read_text()
    assert content.startswith("# comment\nCXX = g++\n\n# ── BEGIN torc")
    assert content.endswith(END_LINE)


def test_hook_missing_file(tmp_path):
    with pytest.raises(TorcError) as exc:
        cmd_hook(str(tmp_path / "Makefile"))
    assert exc.value.exit_code == ExitCode.NOINPUT
    assert not (tmp_path / "Makefile.bak").exists()


def test_hook_default_path(tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    (work / "Makefile").write_text("all:\n\techo hi\n")
    cmd_hook()

    explicit = tmp_path / "explicit.mk"
    explicit.write_text("all:\n\techo hi\n")
    cmd_hook(str(explicit))

    default_result = (work / "Makefile").read_text()
    assert default_result == explicit.read_text()
    assert default_result.startswith("\n# ── BEGIN torc")