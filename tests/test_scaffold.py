import pytest

from torc.exitcodes import ExitCode, TorcError
from torc.generate import generate_extdep_mak
from torc.manifest import load_manifest
from torc.scaffold import InitOptions, NewOptions, cmd_init, cmd_new, makefile_content


def test_new_basic(tmp_path):
    root = tmp_path / "torc_test_new_basic"
    assert cmd_new(NewOptions(name=str(root), no_git=True)) == str(root)
    for rel in ("torc.yaml", "Makefile", "src/main.cpp", "tests/test_main.cpp", ".gitignore"):
        assert (root / rel).exists(), rel
    assert "TARGET    = $(BUILD_DIR)/torc_test_new_basic\n" in (root / "Makefile").read_text()
    assert (root / "src" / "main.cpp").read_text().startswith("#include <cstdio>")


def test_new_lib(tmp_path):
    base = "torc_test_new_lib"
    root = tmp_path / base
    cmd_new(NewOptions(name=str(root), lib=True, no_git=True))
    assert not (root / "src" / "main.cpp").exists()
    lib_cpp = root / "src" / f"{base}.cpp"
    lib_hpp = root / "include" / base / f"{base}.hpp"
    assert lib_cpp.exists()
    assert lib_hpp.exists()
    assert f'#include "{base}/{base}.hpp"' in lib_cpp.read_text()
    assert f"namespace {base} {{" in lib_hpp.read_text()


def test_new_requires_name():
    with pytest.raises(TorcError) as excinfo:
        cmd_new(NewOptions(no_git=True))
    assert excinfo.value.exit_code == ExitCode.USAGE


def test_new_existing_directory(tmp_path):
    with pytest.raises(TorcError) as excinfo:
        cmd_new(NewOptions(name=str(tmp_path), no_git=True))
    assert excinfo.value.exit_code == ExitCode.CANTCREAT


def test_new_project_manifest_and_generate(tmp_path):
    root = tmp_path / "torc_test_integration"
    cmd_new(NewOptions(name=str(root), no_git=True))
    m = load_manifest(str(root / "torc.yaml"))
    assert m.packages == []
    assert m.parallel == 4
    assert m.depdir.endswith("/.local/share/torc")
    assert not m.depdir.startswith("~")
    content = generate_extdep_mak(m)
    assert "TORC_CXXFLAGS =\n" in content


def test_init_no_overwrite(tmp_path):
    makefile = tmp_path / "Makefile"
    makefile.write_text("existing\n")
    with pytest.raises(TorcError) as excinfo:
        cmd_init(InitOptions(dir=str(tmp_path)))
    assert excinfo.value.exit_code == 73
    assert makefile.read_text() == "existing\n"


def test_init_force(tmp_path):
    (tmp_path / "Makefile").write_text("old\n")
    cmd_init(InitOptions(dir=str(tmp_path), force=True, name="myapp"))
    assert "myapp" in (tmp_path / "Makefile").read_text()
    backups = [p for p in tmp_path.iterdir() if ".bak" in p.name]
    assert len(backups) == 1
    assert backups[0].read_text() == "old\n"


def test_init_defaults_name_to_directory(tmp_path):
    target = tmp_path / "widget"
    target.mkdir()
    path = cmd_init(InitOptions(dir=str(target)))
    assert path == f"{target}/Makefile"
    assert "TARGET    = $(BUILD_DIR)/widget\n" in (target / "Makefile").read_text()


def test_makefile_content_recipes_use_tabs():
    content = makefile_content("demo")
    assert content.startswith("# Generated by torc")
    assert "TARGET    = $(BUILD_DIR)/demo\n" in content
    assert "\n\t$(CXX) $(CXXFLAGS) $(LDFLAGS) -o $@ $^ $(LDLIBS)\n" in content
    assert "\n\ttorc install\n\ttorc generate\n" in content
    assert content.endswith("-include $(OBJS:.o=.d)\n")