import pytest

from torc.main import main, print_main_help

COMMAND_NAMES = [
    "install", "generate", "build", "compdb", "update",
    "clean", "list", "new", "init", "hook",
]


def test_no_arguments_shows_help_and_fails(capsys):
    assert main([]) == 64
    assert "Usage: torc <command> [options]" in capsys.readouterr().err


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_flag(flag, capsys):
    assert main([flag]) == 0
    assert "Commands:" in capsys.readouterr().err


@pytest.mark.parametrize("flag", ["-V", "--version"])
def test_version_flag(flag, capsys):
    assert main([flag]) == 0
    assert capsys.readouterr().err == "torc 0.1.0\n"


def test_unknown_command(capsys):
    assert main(["frobnicate"]) == 64
    assert "unknown command: frobnicate" in capsys.readouterr().err


def test_dispatches_to_list(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "torc.yaml").write_text(
        "depdir: /opt/deps\npackages:\n  - name: fmt\n    version: 10.1.1\n",
        encoding="utf-8",
    )
    assert main(["list"]) == 0
    assert capsys.readouterr().out.split() == ["fmt", "10.1.1"]


def test_subcommand_arguments_are_passed(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["new", "--no-git", "proj"]) == 0
    assert (tmp_path / "proj" / "Makefile").exists()


def test_main_help_lists_every_command(capsys):
    print_main_help("torc")
    err = capsys.readouterr().err
    for name in COMMAND_NAMES:
        assert f"  {name} " in err