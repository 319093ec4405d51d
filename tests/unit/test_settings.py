"""Unit tests for notification settings."""

from __future__ import annotations

import pytest

from admin_notifications.config import NotificationSettings
from admin_notifications.core.exceptions import ConfigurationMissingError


class TestEnvironmentLoading:
    def test_reads_smtp_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("SMTP_HOST", "smtp.gmail.com")
        monkeypatch.setenv("SMTP_PORT", "587")
        monkeypatch.setenv("SMTP_USER", "alerts@careermap.test")
        monkeypatch.setenv("SMTP_PASS", "abcd efgh ijkl mnop")

        settings = NotificationSettings(_env_file=None)

        assert settings.SMTP_HOST == "smtp.gmail.com"
        assert settings.SMTP_PORT == 587
        assert settings.SMTP_PASS == "abcdefghijklmnop"
        assert settings.missing_smtp_settings() == []

    def test_blank_values_count_as_unset(self, monkeypatch):
        monkeypatch.setenv("SMTP_HOST", "   ")
        monkeypatch.setenv("SMTP_PORT", "")
        monkeypatch.setenv("SMTP_USER", "")
        monkeypatch.setenv("SMTP_PASS", " ")

        settings = NotificationSettings(_env_file=None)

        assert settings.SMTP_HOST is None
        assert settings.SMTP_PORT is None
        assert settings.missing_smtp_settings() == [
            "SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS",
        ]

    def test_whitespace_only_password_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("SMTP_PASS", "\t\n")

        settings = NotificationSettings(_env_file=None)

        assert settings.SMTP_PASS is None
        assert "SMTP_PASS" in settings.missing_smtp_settings()

    def test_defaults(self, unconfigured_settings):
        assert unconfigured_settings.CLIENT_URL == "http://localhost:5005"
        assert unconfigured_settings.COMPANY_NAME == "CareerMap Solutions"
        assert unconfigured_settings.SMTP_TIMEOUT == 30
        assert unconfigured_settings.USERS_COLLECTION == "users"

    def test_client_url_trailing_slash_removed(self):
        settings = NotificationSettings(_env_file=None, CLIENT_URL="https://careermap.test/")

        assert settings.CLIENT_URL == "https://careermap.test"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError):
            NotificationSettings(_env_file=None, LOG_LEVEL="LOUD")


class TestSenderResolution:
    def test_smtp_from_wins(self, settings):
        settings.SMTP_FROM = "alerts@careermap.test"

        assert settings.default_from_address() == "alerts@careermap.test"

    def test_falls_back_to_smtp_user(self, settings):
        assert settings.default_from_address() == "test@test.com"

    def test_falls_back_to_noreply(self, unconfigured_settings):
        assert unconfigured_settings.default_from_address() == "noreply@careermapsolutions.com"


class TestTransportConfig:
    def test_starttls_port(self, settings):
        config = settings.transport_config()

        assert config.host == "smtp.test.com"
        assert config.port == 587
        assert config.secure is False
        assert config.default_sender == "test@test.com"

    def test_implicit_tls_port(self, settings):
        settings.SMTP_PORT = 465

        assert settings.transport_config().secure is True

    def test_missing_settings_raise(self, unconfigured_settings):
        with pytest.raises(ConfigurationMissingError) as exc_info:
            unconfigured_settings.transport_config()

        assert exc_info.value.missing == ["SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS"]
        assert "SMTP_HOST" in str(exc_info.value)

    def test_partial_settings_name_only_missing(self):
        settings = NotificationSettings(
            _env_file=None, SMTP_HOST="smtp.test.com", SMTP_PORT=587, SMTP_USER="u@x.com"
        )

        with pytest.raises(ConfigurationMissingError) as exc_info:
            settings.transport_config()

        assert exc_info.value.missing == ["SMTP_PASS"]
