from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .logger import log

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


class ConfigError(Exception):
    """Configuration validation error."""

    pass


@dataclass
class SessionConfig:
    """What to compare in one run: optional input files, a forced mode, and watching."""

    left_path: str | None = None
    right_path: str | None = None
    mode: str | None = None
    watch: bool = True

    @classmethod
    def from_args(cls, args) -> SessionConfig:
        """Create SessionConfig from parsed command line arguments."""
        return cls(
            left_path=args.left,
            right_path=args.right,
            mode=args.mode,
            watch=not getattr(args, "no_watch", False),
        )

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Create SessionConfig from environment variables."""
        return cls(
            left_path=os.environ.get('TWINPANE_LEFT'),
            right_path=os.environ.get('TWINPANE_RIGHT'),
            mode=os.environ.get('TWINPANE_MODE'),
        )

    def merge_with_env(self) -> SessionConfig:
        """Fill unset values from the environment, keeping explicit ones."""
        env = SessionConfig.from_env()
        return SessionConfig(
            left_path=self.left_path or env.left_path,
            right_path=self.right_path or env.right_path,
            mode=self.mode or env.mode,
            watch=self.watch,
        )


class Config:
    """TwinPane tuning knobs with environment variable overrides and validation."""

    _DEFAULT_MAX_PREVIEW_CHARS: Final[int] = 500
    _DEFAULT_DEBOUNCE_MS: Final[int] = 150
    _DEFAULT_RENDER_CACHE_SIZE: Final[int] = 32
    _DEFAULT_MAX_DIFF_CHARS: Final[int] = 200_000
    _DEFAULT_WATCH_DEBOUNCE_MS: Final[int] = 300
    _DEFAULT_MAX_PATH_LENGTH: Final[int] = 4096
    _DEFAULT_SEMANTIC_CLEANUP: Final[bool] = True

    _MIN_PREVIEW_CHARS: Final[int] = 50
    _MAX_PREVIEW_CHARS: Final[int] = 10000
    _MIN_DEBOUNCE_MS: Final[int] = 0
    _MAX_DEBOUNCE_MS: Final[int] = 2000
    _MIN_RENDER_CACHE_SIZE: Final[int] = 1
    _MAX_RENDER_CACHE_SIZE: Final[int] = 1024
    _MIN_MAX_DIFF_CHARS: Final[int] = 1000
    _MAX_MAX_DIFF_CHARS: Final[int] = 5_000_000
    _MIN_WATCH_DEBOUNCE_MS: Final[int] = 50
    _MAX_WATCH_DEBOUNCE_MS: Final[int] = 5000
    _MIN_MAX_PATH_LENGTH: Final[int] = 1024
    _MAX_MAX_PATH_LENGTH: Final[int] = 65536

    def __init__(self):
        """Initialize configuration with environment variable overrides."""
        self.max_preview_chars = self._get_int_env("TWINPANE_MAX_PREVIEW_CHARS", self._DEFAULT_MAX_PREVIEW_CHARS)
        self.debounce_ms = self._get_int_env("TWINPANE_DEBOUNCE_MS", self._DEFAULT_DEBOUNCE_MS)
        self.render_cache_size = self._get_int_env("TWINPANE_RENDER_CACHE_SIZE", self._DEFAULT_RENDER_CACHE_SIZE)
        self.max_diff_chars = self._get_int_env("TWINPANE_MAX_DIFF_CHARS", self._DEFAULT_MAX_DIFF_CHARS)
        self.watch_debounce_ms = self._get_int_env("TWINPANE_WATCH_DEBOUNCE_MS", self._DEFAULT_WATCH_DEBOUNCE_MS)
        self.max_path_length = self._get_int_env("TWINPANE_MAX_PATH_LENGTH", self._DEFAULT_MAX_PATH_LENGTH)
        self.semantic_cleanup = self._get_bool_env("TWINPANE_SEMANTIC_CLEANUP", self._DEFAULT_SEMANTIC_CLEANUP)

        self._validate_all()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable with fallback to default."""
        value = os.environ.get(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError as e:
            log.warning(f"Invalid integer value for {key}='{value}', using default {default}: {e}")
            return default

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean environment variable (1/0, true/false, yes/no, on/off)."""
        value = os.environ.get(key)
        if value is None:
            return default

        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        log.warning(f"Invalid boolean value for {key}='{value}', using default {default}")
        return default

    def _validate_all(self) -> None:
        """Validate all configuration values."""
        self._validate_int(
            "max_preview_chars", self.max_preview_chars, self._MIN_PREVIEW_CHARS, self._MAX_PREVIEW_CHARS
        )
        self._validate_int("debounce_ms", self.debounce_ms, self._MIN_DEBOUNCE_MS, self._MAX_DEBOUNCE_MS)
        self._validate_int(
            "render_cache_size", self.render_cache_size, self._MIN_RENDER_CACHE_SIZE, self._MAX_RENDER_CACHE_SIZE
        )
        self._validate_int("max_diff_chars", self.max_diff_chars, self._MIN_MAX_DIFF_CHARS, self._MAX_MAX_DIFF_CHARS)
        self._validate_int(
            "watch_debounce_ms", self.watch_debounce_ms, self._MIN_WATCH_DEBOUNCE_MS, self._MAX_WATCH_DEBOUNCE_MS
        )
        self._validate_int(
            "max_path_length", self.max_path_length, self._MIN_MAX_PATH_LENGTH, self._MAX_MAX_PATH_LENGTH
        )
        if not isinstance(self.semantic_cleanup, bool):
            raise ConfigError(f"semantic_cleanup must be a boolean, got {type(self.semantic_cleanup).__name__}")

    def _validate_int(self, name: str, value: int, min_val: int, max_val: int) -> None:
        """Validate integer configuration value."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{name} must be an integer, got {type(value).__name__}")
        if not (min_val <= value <= max_val):
            raise ConfigError(f"{name} must be between {min_val} and {max_val}, got {value}")

    def __repr__(self) -> str:
        return (
            f"Config(max_preview_chars={self.max_preview_chars}, "
            f"debounce_ms={self.debounce_ms}, "
            f"render_cache_size={self.render_cache_size}, "
            f"max_diff_chars={self.max_diff_chars}, "
            f"watch_debounce_ms={self.watch_debounce_ms}, "
            f"max_path_length={self.max_path_length}, "
            f"semantic_cleanup={self.semantic_cleanup})"
        )


# Global configuration instance
config = Config()
