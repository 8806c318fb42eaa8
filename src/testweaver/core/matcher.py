from __future__ import annotations

from pathlib import Path, PurePath
from typing import Sequence

from wcmatch import glob as wcglob

SEARCH_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.NODIR
MATCH_FLAGS = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.DOTGLOB


def _candidates(path: Path, root: Path) -> list[str]:
    try:
        relative = PurePath(path.relative_to(root))
    except ValueError:
        relative = PurePath(path)
    # A path is also covered by a pattern naming one of its parent directories.
    return [relative.as_posix(), *(parent.as_posix() for parent in relative.parents if parent.as_posix() != ".")]


def is_ignored(path: str | Path, ignore: Sequence[str], root: str | Path | None = None) -> bool:
    if not ignore:
        return False
    root = Path(root) if root is not None else Path.cwd()
    path = Path(path)
    if not path.is_absolute():
        path = root / path
    return any(wcglob.globmatch(candidate, list(ignore), flags=MATCH_FLAGS) for candidate in _candidates(path, root))


def matches_any(path: str | Path, patterns: Sequence[str], root: str | Path | None = None) -> bool:
    root = Path(root) if root is not None else Path.cwd()
    path = Path(path)
    if not path.is_absolute():
        path = root / path
    for pattern in patterns:
        if PurePath(pattern).is_absolute():
            target = path.as_posix()
        else:
            try:
                target = path.relative_to(root).as_posix()
            except ValueError:
                continue
        if wcglob.globmatch(target, pattern, flags=MATCH_FLAGS):
            return True
    return False


def match(pattern: str, ignore: Sequence[str] = (), root: str | Path | None = None) -> list[Path]:
    """Absolute paths of the files matching ``pattern`` that no ignore pattern covers."""
    root = Path(root) if root is not None else Path.cwd()
    found = wcglob.glob(pattern, flags=SEARCH_FLAGS, root_dir=str(root))
    results = []
    for entry in found:
        path = (root / entry).resolve()
        if path.is_file() and not is_ignored(path, ignore, root.resolve()):
            results.append(path)
    return sorted(set(results))
