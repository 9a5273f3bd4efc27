"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from f1_racing_agent.config import DEFAULT_API_BASE, Settings, load_settings


class TestLoadSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("F1_API_BASE", "F1_LATEST_COMPLETE_SEASON", "F1_HTTP_TIMEOUT", "F1_AGENT_DOMAIN"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.api_base == DEFAULT_API_BASE
        assert settings.latest_complete_season == "2025"
        assert settings.timeout_seconds == 30.0
        assert settings.agent_domain is None

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("F1_API_BASE", "https://mirror.example.com/ergast/f1/")
        monkeypatch.setenv("F1_LATEST_COMPLETE_SEASON", "2024")
        monkeypatch.setenv("F1_HTTP_TIMEOUT", "5")
        monkeypatch.setenv("F1_AGENT_DOMAIN", "f1.example.com")

        settings = load_settings()

        assert settings.api_base == "https://mirror.example.com/ergast/f1"
        assert settings.latest_complete_season == "2024"
        assert settings.timeout_seconds == 5.0
        assert settings.agent_domain == "f1.example.com"

    def test_bad_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("F1_HTTP_TIMEOUT", "soon")

        with pytest.raises(ValueError):
            load_settings()

    def test_bad_season(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("F1_LATEST_COMPLETE_SEASON", "current")

        with pytest.raises(ValueError):
            load_settings()

    def test_base_url_must_be_http(self) -> None:
        with pytest.raises(ValueError):
            Settings(api_base="ftp://ergast")
