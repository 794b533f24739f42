"""Tests for BraidSettings environment loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from braid.core.settings import BraidSettings, get_settings


class TestBraidSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BRAID_ADAPTERS", raising=False)
        settings = BraidSettings(_env_file=None)
        assert settings.port == 8000
        assert settings.log_level == "INFO"
        assert settings.service_name == "braid-mcp-server"
        assert settings.max_body_bytes == 1024 * 1024
        assert settings.enforce_timeouts is True
        assert settings.adapters == ["mock", "business"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BRAID_PORT", "9100")
        monkeypatch.setenv("BRAID_ADAPTERS", '["mock"]')
        monkeypatch.setenv("BRAID_ENFORCE_TIMEOUTS", "false")
        settings = BraidSettings(_env_file=None)
        assert settings.port == 9100
        assert settings.adapters == ["mock"]
        assert settings.enforce_timeouts is False

    def test_log_level_normalized(self):
        assert BraidSettings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(ValidationError):
            BraidSettings(_env_file=None, log_level="chatty")

    def test_max_body_must_be_positive(self):
        with pytest.raises(ValidationError):
            BraidSettings(_env_file=None, max_body_bytes=0)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
