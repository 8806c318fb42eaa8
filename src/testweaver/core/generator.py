from __future__ import annotations

from typing import Any

INDENT = "  "


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _todo(keyword: str, description: str, indent: str) -> str:
    return f"{indent}{keyword}.todo('{_quote(description)}');\n"


def _enter(container: dict | list, active: frozenset[int]) -> frozenset[int]:
    # YAML anchors can make a node contain itself.
    if id(container) in active:
        raise ValueError("yaml content refers to itself through an anchor")
    return active | {id(container)}


def _mapping(content: dict, keyword: str, indent: str, active: frozenset[int]) -> str:
    active = _enter(content, active)
    code = ""
    for key, value in content.items():
        if isinstance(value, (dict, list)):
            code += f"{indent}describe('{_quote(str(key))}', () => {{\n"
            code += _walk(value, keyword, indent + INDENT, active)
            code += f"{indent}}});\n\n"
        else:
            description = f"{key}: {_scalar(value)}" if value else str(key)
            code += _todo(keyword, description, indent)
    return code


def _walk(content: Any, keyword: str, indent: str, active: frozenset[int]) -> str:
    if isinstance(content, dict):
        return _mapping(content, keyword, indent, active)
    if isinstance(content, list):
        active = _enter(content, active)
        code = ""
        for item in content:
            if isinstance(item, dict):
                code += _mapping(item, keyword, indent, active)
            elif item is not None and not isinstance(item, list):
                code += _todo(keyword, _scalar(item), indent)
        return code
    return ""


def generate_test_code(content: Any, test_keyword: str, indent: str = "") -> str:
    """
    Turn a parsed YAML document into nested ``describe``/``<kw>.todo`` blocks.

    Mapping keys with mapping or sequence values open a ``describe`` block;
    scalar values become ``todo`` entries. Sequence items that are scalars
    become ``todo`` entries, and mapping items are walked like mappings.

    Raises ValueError when the content contains itself (a recursive anchor).
    An anchor reused in sibling positions is fine.
    """
    return _walk(content, test_keyword, indent, frozenset())
