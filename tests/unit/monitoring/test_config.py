"""Tests for threshold defaults and settings overrides."""

import pytest

from app.core import thresholds
from app.core.config import Settings
from app.monitoring.config import DEFAULT_CONFIG, MonitoringConfig


class TestMonitoringConfig:
    def test_unset_settings_match_defaults(self):
        assert MonitoringConfig.from_settings(Settings(_env_file=None)) == DEFAULT_CONFIG

    def test_defaults_come_from_thresholds(self):
        assert DEFAULT_CONFIG.load.zone_upper == thresholds.ACWR_UPPER
        assert DEFAULT_CONFIG.window.unlock_reopen_hours == thresholds.UNLOCK_REOPEN_HOURS
        assert DEFAULT_CONFIG.snapshot.response_rate_threshold == thresholds.RESPONSE_RATE_THRESHOLD

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ACWR_UPPER", "1.3")
        monkeypatch.setenv("SOURCE_TIMEOUT_SECONDS", "2")
        cfg = MonitoringConfig.from_settings(Settings(_env_file=None))
        assert cfg.load.zone_upper == 1.3
        assert cfg.snapshot.source_timeout_seconds == 2.0
        assert cfg.load.zone_lower == thresholds.ACWR_LOWER

    def test_inconsistent_override_rejected(self, monkeypatch):
        monkeypatch.setenv("ACWR_LOWER", "1.6")
        with pytest.raises(ValueError):
            MonitoringConfig.from_settings(Settings(_env_file=None))
