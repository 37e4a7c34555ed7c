"""Single-file change watching for the editor's open document.

One process-wide watcher holds at most one target. Watching a new path
replaces the previous target; the observer thread is started on the first
watch and lives until ``stop_watching`` or process exit.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler, FileSystemMovedEvent
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver, ObservedWatch

from core_types import PathLike
from search.paths import path_key

logger = logging.getLogger(__name__)

type ChangeCallback = Callable[[str], None]
type ObserverFactory = Callable[[], BaseObserver]


class TargetChangeHandler(FileSystemEventHandler):
    """Forward modifications of one file to ``callback`` as a path string.

    The handler is scheduled on the file's parent directory, so it filters
    sibling events out. A rename onto the target (an atomic save) counts as
    a modification.
    """

    def __init__(self, target: str, callback: ChangeCallback) -> None:
        super().__init__()
        self.target = target
        self._key = path_key(target)
        self._callback = callback

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._emit()

    def on_moved(self, event: FileSystemMovedEvent) -> None:
        if not event.is_directory and self._is_target(event.dest_path):
            self._emit()

    def _is_target(self, raw: str | bytes) -> bool:
        return bool(raw) and path_key(os.fsdecode(raw)) == self._key

    def _emit(self) -> None:
        logger.debug("File changed: %s", self.target)
        self._callback(self.target)


class FileWatcher:
    """Own one observer and at most one watched file.

    Every public method takes the same lock, so callers on any thread see
    a single consistent target.
    """

    def __init__(self, observer_factory: ObserverFactory = Observer) -> None:
        self._factory = observer_factory
        self._lock = threading.Lock()
        self._observer: BaseObserver | None = None
        self._watch: ObservedWatch | None = None
        self._target: str | None = None

    @property
    def target(self) -> str | None:
        """Absolute path currently watched, if any."""
        with self._lock:
            return self._target

    def watch(self, path: PathLike, callback: ChangeCallback) -> bool:
        """Watch ``path`` for modification, replacing any previous target.

        A path that does not exist clears the previous target and starts
        nothing.

        Returns
        -------
        bool
            ``True`` when a watch was installed.
        """
        target = os.path.abspath(os.fspath(path))
        with self._lock:
            self._clear_locked()
            if not os.path.isfile(target):
                logger.debug("Not watching missing file %s", target)
                return False
            observer = self._observer_locked()
            handler = TargetChangeHandler(target, callback)
            self._watch = observer.schedule(handler, os.path.dirname(target), recursive=False)
            self._target = target
        logger.debug("Watching %s", target)
        return True

    def unwatch(self, path: PathLike) -> bool:
        """Stop watching ``path`` if it is the current target.

        Returns
        -------
        bool
            ``True`` when the target was removed.
        """
        key = path_key(path)
        with self._lock:
            if self._target is None or path_key(self._target) != key:
                return False
            self._clear_locked()
        return True

    def stop(self) -> None:
        """Drop the target and shut the observer thread down."""
        with self._lock:
            self._clear_locked()
            observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
            observer.join()

    def _observer_locked(self) -> BaseObserver:
        if self._observer is None:
            self._observer = self._factory()
            self._observer.start()
        return self._observer

    def _clear_locked(self) -> None:
        if self._watch is not None and self._observer is not None:
            self._observer.unschedule(self._watch)
        self._watch = None
        self._target = None


_WATCHER = FileWatcher()


def watch_file(path: PathLike, callback: ChangeCallback) -> bool:
    """Watch ``path`` with the process-wide watcher.

    Returns
    -------
    bool
        ``True`` when a watch was installed.
    """
    return _WATCHER.watch(path, callback)


def unwatch_file(path: PathLike) -> bool:
    """Stop the process-wide watch on ``path``.

    Returns
    -------
    bool
        ``True`` when ``path`` was being watched.
    """
    return _WATCHER.unwatch(path)


def stop_watching() -> None:
    """Shut the process-wide watcher down."""
    _WATCHER.stop()


__all__ = [
    "ChangeCallback",
    "FileWatcher",
    "TargetChangeHandler",
    "stop_watching",
    "unwatch_file",
    "watch_file",
]
