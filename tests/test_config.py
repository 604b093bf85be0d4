"""Tests for the configuration system."""

import argparse

import pytest

from twinpane.utils.config import Config, ConfigError, SessionConfig


class TestConfig:
    """Test the Config class functionality."""

    def test_config_defaults(self, monkeypatch):
        """Test that config uses correct default values."""
        for key in (
            "TWINPANE_MAX_PREVIEW_CHARS",
            "TWINPANE_DEBOUNCE_MS",
            "TWINPANE_RENDER_CACHE_SIZE",
            "TWINPANE_MAX_DIFF_CHARS",
            "TWINPANE_WATCH_DEBOUNCE_MS",
            "TWINPANE_MAX_PATH_LENGTH",
            "TWINPANE_SEMANTIC_CLEANUP",
        ):
            monkeypatch.delenv(key, raising=False)
        config = Config()
        assert config.max_preview_chars == 500
        assert config.debounce_ms == 150
        assert config.render_cache_size == 32
        assert config.max_diff_chars == 200_000
        assert config.watch_debounce_ms == 300
        assert config.max_path_length == 4096
        assert config.semantic_cleanup is True

    def test_config_environment_variables(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("TWINPANE_MAX_PREVIEW_CHARS", "200")
        monkeypatch.setenv("TWINPANE_DEBOUNCE_MS", "0")
        monkeypatch.setenv("TWINPANE_RENDER_CACHE_SIZE", "8")
        monkeypatch.setenv("TWINPANE_MAX_DIFF_CHARS", "5000")
        monkeypatch.setenv("TWINPANE_WATCH_DEBOUNCE_MS", "1000")
        monkeypatch.setenv("TWINPANE_SEMANTIC_CLEANUP", "off")

        config = Config()
        assert config.max_preview_chars == 200
        assert config.debounce_ms == 0
        assert config.render_cache_size == 8
        assert config.max_diff_chars == 5000
        assert config.watch_debounce_ms == 1000
        assert config.semantic_cleanup is False

    def test_config_invalid_environment_variables(self, monkeypatch):
        """Test that unparseable environment variables fall back to defaults."""
        monkeypatch.setenv("TWINPANE_DEBOUNCE_MS", "not_a_number")
        monkeypatch.setenv("TWINPANE_SEMANTIC_CLEANUP", "maybe")

        config = Config()
        assert config.debounce_ms == 150
        assert config.semantic_cleanup is True

    def test_config_out_of_bounds_environment_variable(self, monkeypatch):
        """Test that parseable but out-of-range values are rejected."""
        monkeypatch.setenv("TWINPANE_DEBOUNCE_MS", "99999")
        with pytest.raises(ConfigError, match="debounce_ms must be between"):
            Config()

    def test_config_validation_bounds(self):
        """Test that configuration values are validated against bounds."""
        with pytest.raises(ConfigError, match="max_preview_chars must be between"):
            config = Config()
            config.max_preview_chars = 10
            config._validate_all()

        with pytest.raises(ConfigError, match="render_cache_size must be between"):
            config = Config()
            config.render_cache_size = 0
            config._validate_all()

    def test_config_validation_types(self):
        """Test that configuration values must be correct types."""
        config = Config()
        with pytest.raises(ConfigError, match="max_diff_chars must be an integer"):
            config.max_diff_chars = "lots"
            config._validate_all()

        config = Config()
        with pytest.raises(ConfigError, match="debounce_ms must be an integer"):
            config.debounce_ms = True
            config._validate_all()

        config = Config()
        with pytest.raises(ConfigError, match="semantic_cleanup must be a boolean"):
            config.semantic_cleanup = "yes"
            config._validate_all()

    def test_config_repr(self):
        assert repr(Config()).startswith("Config(max_preview_chars=")


class TestSessionConfig:
    """Test the per-run session settings."""

    def test_from_args(self):
        args = argparse.Namespace(left="a.txt", right="b.txt", mode="json", no_watch=True)
        session = SessionConfig.from_args(args)
        assert session == SessionConfig(left_path="a.txt", right_path="b.txt", mode="json", watch=False)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TWINPANE_LEFT", "/tmp/left.txt")
        monkeypatch.delenv("TWINPANE_RIGHT", raising=False)
        monkeypatch.setenv("TWINPANE_MODE", "diff")
        session = SessionConfig.from_env()
        assert session.left_path == "/tmp/left.txt"
        assert session.right_path is None
        assert session.mode == "diff"
        assert session.watch is True

    def test_merge_with_env_keeps_explicit_values(self, monkeypatch):
        monkeypatch.setenv("TWINPANE_LEFT", "/env/left.txt")
        monkeypatch.setenv("TWINPANE_RIGHT", "/env/right.txt")
        monkeypatch.delenv("TWINPANE_MODE", raising=False)
        merged = SessionConfig(left_path="cli.txt", watch=False).merge_with_env()
        assert merged.left_path == "cli.txt"
        assert merged.right_path == "/env/right.txt"
        assert merged.mode is None
        assert merged.watch is False
