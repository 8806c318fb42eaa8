from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler, FileSystemMovedEvent
from watchdog.observers import Observer

from testweaver.core import matcher, paths
from testweaver.core.config import EffectiveConfig
from testweaver.core.logger import get_logger

log = get_logger("watcher")

ProcessFn = Callable[[Path, EffectiveConfig], bool]


def cleanup_generated(source: str | Path, config: EffectiveConfig) -> Path | None:
    if config.no_cleanup:
        log.info("cleanup disabled. keeping generated test file for: %s", source)
        return None
    output = paths.output_path_for(source)
    if not output.exists():
        return None
    if config.is_dry_run:
        log.info("[dry run] would delete %s", output)
        return None
    try:
        output.unlink()
    except OSError as exc:
        log.error("could not delete '%s': %s", output, exc)
        return None
    log.info("deleted corresponding test file: %s", output)
    return output


class YamlEventHandler(FileSystemEventHandler):
    """Routes filesystem events for matching YAML files to the processing callback."""

    def __init__(self, config: EffectiveConfig, process_file: ProcessFn, root: Path) -> None:
        super().__init__()
        self.config = config
        self.process_file = process_file
        self.root = root
        # Overlapping events for the same file must not write concurrently.
        self._lock = threading.Lock()

    def wanted(self, path: str | Path) -> bool:
        path = Path(path)
        return matcher.matches_any(path, self.config.effective_patterns, self.root) and not matcher.is_ignored(
            path, self.config.effective_ignore_patterns, self.root
        )

    def _process(self, path: str | Path, action: str) -> None:
        log.info("file %s: %s", action, path)
        with self._lock:
            try:
                self.process_file(Path(path), self.config)
            except Exception as exc:  # noqa: BLE001
                # Errors must not reach the observer thread.
                log.error("could not process '%s': %s", path, exc)

    def _remove(self, path: str | Path) -> None:
        log.info("file deleted: %s", path)
        with self._lock:
            try:
                cleanup_generated(path, self.config)
            except Exception as exc:  # noqa: BLE001
                log.error("could not clean up after '%s': %s", path, exc)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self.wanted(str(event.src_path)):
            self._process(str(event.src_path), "added")

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self.wanted(str(event.src_path)):
            self._process(str(event.src_path), "changed")

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self.wanted(str(event.src_path)):
            self._remove(str(event.src_path))

    def on_moved(self, event: FileSystemMovedEvent) -> None:
        if event.is_directory:
            return
        if self.wanted(str(event.src_path)):
            self._remove(str(event.src_path))
        if self.wanted(str(event.dest_path)):
            self._process(str(event.dest_path), "added")


def initial_scan(handler: YamlEventHandler) -> int:
    processed = 0
    for pattern in handler.config.effective_patterns:
        for path in matcher.match(pattern, handler.config.effective_ignore_patterns, handler.root):
            handler._process(path, "added")
            processed += 1
    return processed


def start_watcher(
    config: EffectiveConfig,
    process_file: ProcessFn,
    root: str | Path | None = None,
    observer_factory: Callable[[], Observer] = Observer,
) -> None:
    """Watch ``root`` until interrupted. Runs one pass over existing files first."""
    root = Path(root).resolve() if root is not None else Path.cwd().resolve()
    handler = YamlEventHandler(config, process_file, root)
    initial_scan(handler)

    observer = observer_factory()
    observer.schedule(handler, str(root), recursive=True)
    observer.start()
    log.info("initial scan complete. watching for changes...")
    try:
        while observer.is_alive():
            observer.join(timeout=1)
        log.error("watcher stopped unexpectedly.")
    except KeyboardInterrupt:
        log.info("stopping watcher.")
    finally:
        observer.stop()
        observer.join()
