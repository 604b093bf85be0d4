from __future__ import annotations

import os
import threading
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .error_handling import log_watchdog_error
from .logger import log


class _DebouncedFileHandler(FileSystemEventHandler):
    """Fire ``callback`` once per burst of events touching a single file."""

    def __init__(self, file_path: str, callback: Callable[[], None], debounce_ms: int = 100) -> None:
        self._file_path = os.path.abspath(file_path)
        self._callback = callback
        self._debounce = max(0, int(debounce_ms)) / 1000.0
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def _fire(self) -> None:
        try:
            self._callback()
        except (RuntimeError, OSError) as e:
            log_watchdog_error(self._file_path, "running change callback", e)

    def _schedule(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._debounce, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def touches_file(self, event: FileSystemEvent) -> bool:
        """True when the event's source or destination is the watched file."""
        paths = [getattr(event, "src_path", ""), getattr(event, "dest_path", "")]
        for p in paths:
            if isinstance(p, bytes):
                p = os.fsdecode(p)
            if p and os.path.abspath(p) == self._file_path:
                return True
        return False

    def on_any_event(self, event: FileSystemEvent):  # type: ignore[override]
        # Editors often save by writing a temp file and moving it into place
        if getattr(event, "event_type", "") not in ("modified", "created", "moved", "deleted"):
            return
        if not self.touches_file(event):
            return
        log.debug("[WATCHDOG] Event:", event.event_type, "on", self._file_path)
        self._schedule()


def watch_file(
    file_path: str, on_change: Callable[[], None], *, debounce_ms: int = 100
) -> tuple[object, Callable[[], None]]:
    """
    Watch a single file and return (observer, stop_fn).

    The observer watches the file's directory (so atomic-rename saves are
    seen) and filters events down to the file itself. stop_fn() is
    idempotent and cancels any pending debounced callback.
    """
    abs_path = os.path.abspath(file_path)
    directory = os.path.dirname(abs_path) or "."
    log.debug(f"[WATCHDOG] Watching file: {abs_path}")
    handler = _DebouncedFileHandler(abs_path, on_change, debounce_ms=debounce_ms)
    observer = Observer()
    observer.schedule(handler, directory, recursive=False)
    observer.start()

    _stopped = False
    _lock = threading.Lock()

    def stop() -> None:
        nonlocal _stopped
        with _lock:
            if _stopped:
                return
            _stopped = True
        handler.cancel()
        try:
            observer.stop()
            observer.join(timeout=0.5)
        except (RuntimeError, OSError) as e:
            log_watchdog_error(abs_path, "stopping observer", e)

    return observer, stop
