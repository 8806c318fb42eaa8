from __future__ import annotations

from pathlib import Path

from testweaver.core.matcher import is_ignored, match, matches_any


def _touch(root: Path, *names: str) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("a: b\n", encoding="utf-8")


def test_brace_and_globstar_patterns(tmp_path) -> None:
    root = tmp_path.resolve()
    _touch(root, "tests/a.yaml", "tests/deep/b.yml", "tests/c.json", "other/d.yaml")

    found = match("tests/**/*.{yaml,yml}", root=root)

    assert found == [root / "tests/a.yaml", root / "tests/deep/b.yml"]


def test_ignore_patterns_exclude_files_and_directories(tmp_path) -> None:
    root = tmp_path.resolve()
    _touch(root, "specs/a.yaml", "node_modules/pkg/b.yaml", "temp_files/x/c.yml")

    found = match("**/*.{yaml,yml}", ["node_modules", "temp_files/**/*.{yaml,yml}"], root=root)

    assert found == [root / "specs/a.yaml"]


def test_directories_are_not_returned(tmp_path) -> None:
    root = tmp_path.resolve()
    (root / "odd.yaml").mkdir()
    _touch(root, "real.yaml")
    assert match("*.yaml", root=root) == [root / "real.yaml"]


def test_is_ignored_relative_and_absolute(tmp_path) -> None:
    root = tmp_path.resolve()
    assert is_ignored("node_modules/x/a.yaml", ["node_modules"], root)
    assert is_ignored(root / "gen/a.test.js", ["**/*.test.js"], root)
    assert not is_ignored("src/a.yaml", ["node_modules"], root)
    assert not is_ignored("src/a.yaml", [], root)


def test_matches_any(tmp_path) -> None:
    root = tmp_path.resolve()
    patterns = ["**/*.spec.{yaml,yml}", "features/**/*.yaml"]
    assert matches_any(root / "a/b/login.spec.yml", patterns, root)
    assert matches_any("features/x.yaml", patterns, root)
    assert not matches_any(root / "a/login.yaml", patterns, root)
    assert not matches_any(Path("/elsewhere/features/x.yaml"), patterns, root)
