from __future__ import annotations

import logging

from testweaver.core.config import EffectiveConfig
from testweaver.core.processor import process_file


def test_writes_test_file_next_to_source(tmp_path) -> None:
    source = tmp_path / "login.yaml"
    source.write_text("Login:\n  works:\n", encoding="utf-8")

    assert process_file(source, EffectiveConfig(test_keyword="test")) is True

    output = tmp_path / "login.test.js"
    assert output.read_text(encoding="utf-8") == "describe('Login', () => {\n  test.todo('works');\n});\n\n"


def test_dry_run_writes_nothing(tmp_path, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="testweaver")
    source = tmp_path / "login.yaml"
    source.write_text("Login:\n  works:\n", encoding="utf-8")

    assert process_file(source, EffectiveConfig(is_dry_run=True)) is True

    assert not (tmp_path / "login.test.js").exists()
    assert any("[dry run]" in r.getMessage() for r in caplog.records)


def test_invalid_yaml_fails_without_raising(tmp_path, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="testweaver")
    source = tmp_path / "broken.yaml"
    source.write_text("Login: [unclosed\n", encoding="utf-8")

    assert process_file(source, EffectiveConfig()) is False

    assert not (tmp_path / "broken.test.js").exists()
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_empty_yaml_is_skipped(tmp_path) -> None:
    source = tmp_path / "empty.yaml"
    source.write_text("", encoding="utf-8")
    assert process_file(source, EffectiveConfig()) is False
    assert not (tmp_path / "empty.test.js").exists()


def test_missing_file_fails(tmp_path) -> None:
    assert process_file(tmp_path / "absent.yaml", EffectiveConfig()) is False


def test_non_utf8_file_fails_without_raising(tmp_path, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="testweaver")
    source = tmp_path / "latin.yaml"
    source.write_bytes(b"Caf\xe9:\n  serves coffee:\n")

    assert process_file(source, EffectiveConfig()) is False

    assert not (tmp_path / "latin.test.js").exists()
    assert any("latin.yaml" in r.getMessage() and r.levelno == logging.ERROR for r in caplog.records)


def test_recursive_anchor_fails_without_raising(tmp_path, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="testweaver")
    source = tmp_path / "loop.yaml"
    source.write_text("loop: &a {again: *a}\n", encoding="utf-8")

    assert process_file(source, EffectiveConfig()) is False

    assert not (tmp_path / "loop.test.js").exists()
    assert any("loop.yaml" in r.getMessage() and r.levelno == logging.ERROR for r in caplog.records)
