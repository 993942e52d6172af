"""Tests for the structlog processor chain."""

import structlog

from stockopname.config import Settings
from stockopname.config.logging import REDACTED, build_processors, redact_keys, service_context


class TestRedaction:
    def test_masks_listed_keys_only(self):
        redact = redact_keys(["password", "signature_data"])
        event = {"event": "login_attempt", "username": "alice", "password": "secret123"}

        assert redact(None, "info", event) == {
            "event": "login_attempt",
            "username": "alice",
            "password": REDACTED,
        }

    def test_default_keys_cover_credentials_and_signatures(self):
        settings = Settings(_env_file=None)
        assert {"password", "password_hash", "signature_data"} <= set(settings.log.redact_keys)


class TestServiceContext:
    def test_stamps_without_overwriting(self):
        settings = Settings(_env_file=None, environment="staging")
        stamp = service_context(settings)

        event = stamp(None, "info", {"event": "x", "version": "custom"})

        assert event["app"] == settings.app_name
        assert event["environment"] == "staging"
        assert event["version"] == "custom"


class TestRendererChoice:
    def test_console_in_development(self, monkeypatch):
        monkeypatch.delenv("LOG_JSON_OUTPUT", raising=False)
        settings = Settings(_env_file=None, environment="development")
        assert isinstance(build_processors(settings)[-1], structlog.dev.ConsoleRenderer)

    def test_json_in_production(self, monkeypatch):
        monkeypatch.delenv("LOG_JSON_OUTPUT", raising=False)
        settings = Settings(_env_file=None, environment="production")
        assert isinstance(build_processors(settings)[-1], structlog.processors.JSONRenderer)

    def test_explicit_override(self, monkeypatch):
        monkeypatch.setenv("LOG_JSON_OUTPUT", "true")
        settings = Settings(_env_file=None, environment="development")
        assert settings.renders_json is True
