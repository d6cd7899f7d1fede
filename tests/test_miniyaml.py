from torc.miniyaml import YamlError, parse


def test_simple_map():
    root = parse("name: hello\nversion: 1.0\n")
    assert isinstance(root, dict)
    assert root["name"] == "hello"
    assert root["version"] == "1.0"


def test_nested_map():
    root = parse("top:\n  inner: value\n  other: 42\n")
    top = root["top"]
    assert isinstance(top, dict)
    assert top["inner"] == "value"
    assert top["other"] == "42"


def test_list():
    root = parse("items:\n  - alpha\n  - beta\n  - gamma\n")
    items = root["items"]
    assert isinstance(items, list)
    assert len(items) == 3
    assert items[0] == "alpha"
    assert items[2] == "gamma"


def test_list_of_maps():
    root = parse(
        "packages:\n"
        "  - name: fmt\n"
        "    version: 10.1.1\n"
        "  - name: spdlog\n"
        "    version: 1.12.0\n"
    )
    pkgs = root["packages"]
    assert isinstance(pkgs, list)
    assert len(pkgs) == 2
    assert pkgs[0]["name"] == "fmt"
    assert pkgs[1]["version"] == "1.12.0"


def test_block_scalar():
    root = parse("script: |\n  line one\n  line two\n")
    assert root["script"] == "line one\nline two"


def test_comments_ignored():
    root = parse("# comment\nkey: value\n# another comment\nkey2: value2\n")
    assert root["key"] == "value"
    assert root["key2"] == "value2"


def test_root_list_of_maps():
    root = parse(
        "- name: bar\n"
        "  version: 2.0\n"
        "- name: baz\n"
        "  version: 3.0\n"
    )
    assert root == [
        {"name": "bar", "version": "2.0"},
        {"name": "baz", "version": "3.0"},
    ]


def test_flow_text_kept_as_scalar():
    assert parse("packages: []\n") == {"packages": "[]"}


def test_first_duplicate_key_wins():
    assert parse("a: 1\na: 2\n") == {"a": "1"}


def test_empty_input():
    assert parse("") == ""
    assert parse("# only a comment\n\n") == ""


def test_plain_scalar_root():
    assert parse("hello\n") == "hello"


def test_nested_list_inside_list_item_map():
    root = parse(
        "libs:\n"
        "  - name: core\n"
        "    deps:\n"
        "      - util\n"
        "      - base\n"
    )
    assert root["libs"][0] == {"name": "core", "deps": ["util", "base"]}


def test_block_scalar_inside_list_item():
    root = parse(
        "pkgs:\n"
        "  - name: x\n"
        "    build: |\n"
        "      make\n"
        "      make install\n"
    )
    assert root["pkgs"][0]["build"] == "make\nmake install"


def test_unsupported_flow_input_still_parses():
    assert parse("not: [valid: yaml\n") == {"not": "[valid: yaml"}


def test_yaml_error_fields():
    err = YamlError(3, "bad indent")
    assert err.line == 3
    assert err.message == "bad indent"
    assert str(err) == "line 3: bad indent"