"""Unit tests for MeltSettings and get_settings."""

import json

import pytest
from pydantic import ValidationError

from melt.observability.logging import get_logger
from melt.settings import MeltSettings, configure_logging, get_settings, reload_settings


class TestMeltSettings:
    """Tests for MeltSettings model."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings have quiet defaults."""
        monkeypatch.delenv("MELT_LOG_LEVEL", raising=False)
        monkeypatch.delenv("MELT_LOG_FORMAT", raising=False)
        settings = MeltSettings()
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """MELT_* environment variables override defaults."""
        monkeypatch.setenv("MELT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("MELT_LOG_FORMAT", "json")
        settings = MeltSettings()
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_invalid_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MELT_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            MeltSettings()


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_instance(self) -> None:
        """Repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_reload_picks_up_changes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """reload_settings re-reads the environment."""
        monkeypatch.setenv("MELT_LOG_LEVEL", "INFO")
        first = get_settings()
        monkeypatch.setenv("MELT_LOG_LEVEL", "ERROR")
        assert get_settings().log_level == first.log_level
        assert reload_settings().log_level == "ERROR"


class TestConfigureLogging:
    """Tests for applying settings to logging."""

    def test_applies_level_and_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(MeltSettings(log_level="INFO", log_format="json"))
        logger = get_logger("test")

        logger.debug("hidden_event")
        logger.info("shown_event", key="value")

        lines = [line for line in capsys.readouterr().err.splitlines() if line]
        assert len(lines) == 1
        parsed = json.loads(lines[0])
        assert parsed["event"] == "shown_event"
        assert parsed["key"] == "value"
        assert parsed["level"] == "info"
