from __future__ import annotations

import os
import sys
import tempfile
import traceback
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, TextIO

# Levelled logger shared by the whole package.
# Use: from twinpane.utils.logger import log
# log.info("[PANES] built", extra={"rows": 12})
# log.error("[IO] read failed", exc_info=sys.exc_info())


class LogLevel(IntEnum):
    """Log severity levels."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    WARNING = 30  # Alias for WARN
    ERROR = 40
    CRITICAL = 50


_LEVEL_COLORS = {
    LogLevel.DEBUG: "\033[90m",
    LogLevel.INFO: "\033[0m",
    LogLevel.WARN: "\033[93m",
    LogLevel.ERROR: "\033[91m",
    LogLevel.CRITICAL: "\033[95m",
}


def default_debug_log_path() -> Path:
    """Location of the debug log sink enabled by TWINPANE_DEBUG=1."""
    return Path(tempfile.gettempdir()) / "twinpane_debug.log"


class Logger:
    """Logger with levels, an optional file sink, and headless-aware stdout."""

    def __init__(self):
        self._level = LogLevel.INFO
        self._file_handle: TextIO | None = None
        self._file_path: Path | None = None
        self._headless_cached: bool | None = None
        self._format_string = "{timestamp} [{level:8}] {message}"

        self._configure_from_env()

    def _configure_from_env(self) -> None:
        """Configure level and file sink from TWINPANE_* environment variables."""
        if os.environ.get("TWINPANE_DEBUG") == "1":
            self._level = LogLevel.DEBUG
            self.set_file_output(default_debug_log_path())

        level_str = os.environ.get("TWINPANE_LOG_LEVEL", "").upper()
        if level_str in LogLevel.__members__:
            self._level = LogLevel[level_str]

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def file_path(self) -> Path | None:
        return self._file_path

    def set_level(self, level: LogLevel) -> None:
        """Set the minimum log level."""
        self._level = level

    def set_file_output(self, path: Path, append: bool = True) -> None:
        """Send log records to ``path`` in addition to stdout."""
        try:
            if self._file_handle:
                self._file_handle.close()
            self._file_handle = open(path, "a" if append else "w", encoding="utf-8")
            self._file_path = path
        except OSError:
            # Nowhere to report a broken sink
            self._file_handle = None
            self._file_path = None

    def close(self) -> None:
        """Close the file sink, if any."""
        if self._file_handle:
            try:
                self._file_handle.close()
            except OSError:
                pass
        self._file_handle = None
        self._file_path = None

    def reset_headless_cache(self) -> None:
        """Forget the cached headless check (a new App may be running)."""
        self._headless_cached = None

    def _can_write_stdout(self) -> bool:
        """Stdout belongs to Textual while an app runs; stay quiet when headless."""
        if self._headless_cached is not None:
            return not self._headless_cached

        try:
            from textual.app import App  # lazy import

            app = getattr(App, "app", None)
            if app is None:
                self._headless_cached = False
                return True

            is_headless = bool(getattr(app, "is_headless", False))
            self._headless_cached = is_headless
            return not is_headless
        except (ImportError, AttributeError, RuntimeError):
            self._headless_cached = False
            return False

    def _format_message(
        self,
        level: LogLevel,
        message: str,
        extra: dict | None = None,
        exc_info: tuple | None = None,
    ) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        formatted = self._format_string.format(timestamp=timestamp, level=level.name, message=message)

        if extra:
            formatted += f" | {extra}"

        if exc_info and exc_info[0] is not None:
            formatted += "\n" + "".join(traceback.format_exception(*exc_info))

        return formatted

    def _write(
        self,
        level: LogLevel,
        *args: Any,
        sep: str = " ",
        extra: dict | None = None,
        exc_info: tuple | None = None,
    ) -> None:
        if level < self._level:
            return

        message = sep.join(str(a) for a in args)
        formatted = self._format_message(level, message, extra, exc_info)

        if self._file_handle:
            try:
                self._file_handle.write(formatted + "\n")
                self._file_handle.flush()
            except OSError:
                pass

        if self._can_write_stdout():
            try:
                if sys.stdout.isatty():
                    color = _LEVEL_COLORS.get(level, "\033[0m")
                    sys.stdout.write(f"{color}{formatted}\033[0m\n")
                else:
                    sys.stdout.write(formatted + "\n")
                sys.stdout.flush()
            except (OSError, ValueError):
                # Never raise from logging
                pass

    def debug(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.DEBUG, *args, **kwargs)

    def info(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.INFO, *args, **kwargs)

    def warn(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.WARN, *args, **kwargs)

    def warning(self, *args: Any, **kwargs) -> None:
        """Alias for warn()."""
        self.warn(*args, **kwargs)

    def error(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.ERROR, *args, **kwargs)

    def critical(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.CRITICAL, *args, **kwargs)

    def __call__(self, *args: Any, sep: str = " ") -> None:
        """Shorthand for ``log.info``."""
        self.info(*args, sep=sep)


log = Logger()
