"""Unit tests for configuration settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from strata_fs.config import LogLevel, WatchConfig, get_config, reload_config, set_config
from strata_fs.models import ConfigurationError


class TestWatchConfig:
    """Test cases for WatchConfig."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("STRATA_FS_LOG_LEVEL", raising=False)
        config = WatchConfig(_env_file=None)

        assert config.observer_join_timeout == 5.0
        assert config.log_level == LogLevel.INFO
        assert config.log_file is None
        assert config.debug_mode is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("STRATA_FS_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("STRATA_FS_OBSERVER_JOIN_TIMEOUT", "2.5")

        config = WatchConfig(_env_file=None)

        assert config.log_level == LogLevel.WARNING
        assert config.observer_join_timeout == 2.5

    def test_join_timeout_bounds(self):
        with pytest.raises(ValidationError):
            WatchConfig(_env_file=None, observer_join_timeout=0)

    def test_log_format_requires_message(self):
        with pytest.raises(ConfigurationError) as exc_info:
            WatchConfig(_env_file=None, log_format="%(levelname)s")

        assert exc_info.value.context["config_key"] == "log_format"

    def test_empty_log_file_means_stream(self):
        config = WatchConfig(_env_file=None, log_file="")

        assert config.log_file is None
        assert config.get_log_config()["handlers"]["default"]["class"] == "logging.StreamHandler"

    def test_log_config_with_file(self, tmp_path):
        log_file = tmp_path / "watch.log"
        config = WatchConfig(_env_file=None, log_file=str(log_file), log_level="ERROR")

        log_config = config.get_log_config()

        assert isinstance(config.log_file, Path)
        assert log_config["handlers"]["default"]["class"] == "logging.FileHandler"
        assert log_config["handlers"]["default"]["filename"] == str(log_file)
        assert log_config["loggers"]["strata_fs"]["level"] == "ERROR"

    def test_debug_mode_forces_debug_level(self):
        config = WatchConfig(_env_file=None, debug_mode=True, log_level="ERROR")

        assert config.effective_log_level == "DEBUG"
        assert config.get_log_config()["handlers"]["default"]["level"] == "DEBUG"


class TestGlobalConfig:
    """Test cases for the global configuration helpers."""

    def test_set_and_get_config(self):
        custom = WatchConfig(_env_file=None, observer_join_timeout=1.5)
        set_config(custom)
        try:
            assert get_config() is custom
        finally:
            reload_config()

    def test_reload_creates_new_instance(self):
        first = get_config()
        second = reload_config()

        assert second is not first
        assert get_config() is second
