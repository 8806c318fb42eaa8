from __future__ import annotations

import pytest
import yaml

from testweaver.core.generator import generate_test_code


def test_nested_mapping_becomes_describe_blocks() -> None:
    content = {
        "Login": {"valid credentials": None, "shows error": "on bad password"},
        "Logout": ["clears session", {"redirect": True}],
    }
    assert generate_test_code(content, "it") == (
        "describe('Login', () => {\n"
        "  it.todo('valid credentials');\n"
        "  it.todo('shows error: on bad password');\n"
        "});\n"
        "\n"
        "describe('Logout', () => {\n"
        "  it.todo('clears session');\n"
        "  it.todo('redirect: true');\n"
        "});\n"
        "\n"
    )


def test_keyword_is_used_for_todos() -> None:
    assert generate_test_code({"works": None}, "test") == "test.todo('works');\n"


def test_quotes_are_escaped() -> None:
    code = generate_test_code({"it's fine": "back\\slash"}, "it")
    assert code == "it.todo('it\\'s fine: back\\\\slash');\n"


def test_numbers_and_false_values() -> None:
    code = generate_test_code({"retries": 3, "disabled": False, "zero": 0}, "it")
    assert code == "it.todo('retries: 3');\nit.todo('disabled');\nit.todo('zero');\n"


def test_top_level_sequence() -> None:
    code = generate_test_code(["first", None, {"second": None}], "it")
    assert code == "it.todo('first');\nit.todo('second');\n"


def test_deep_nesting_indents() -> None:
    code = generate_test_code({"a": {"b": {"c": None}}}, "it")
    assert "    it.todo('c');\n" in code
    assert code.startswith("describe('a', () => {\n  describe('b', () => {\n")


def test_scalar_document_yields_nothing() -> None:
    assert generate_test_code("just text", "it") == ""
    assert generate_test_code(None, "it") == ""


def test_recursive_anchor_is_rejected() -> None:
    loop: dict = {}
    loop["again"] = loop
    with pytest.raises(ValueError, match="refers to itself"):
        generate_test_code({"loop": loop}, "it")


def test_shared_anchor_is_rendered_each_time() -> None:
    content = yaml.safe_load("base: &b {works: }\nfirst: *b\nsecond: *b\n")
    code = generate_test_code(content, "it")
    assert code.count("  it.todo('works');\n") == 3
