"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from datalist.config import DEFAULT_LIMIT, DEFAULT_LOG_LEVEL, get_settings


class TestGetSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATALIST_LOG_LEVEL", raising=False)
        monkeypatch.delenv("DATALIST_DEFAULT_LIMIT", raising=False)
        settings = get_settings()
        assert settings.log_level == DEFAULT_LOG_LEVEL
        assert settings.default_limit == DEFAULT_LIMIT

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATALIST_LOG_LEVEL", "debug")
        monkeypatch.setenv("DATALIST_DEFAULT_LIMIT", "5")
        settings = get_settings()
        assert settings.log_level == "DEBUG"
        assert settings.default_limit == 5

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_limit_falls_back(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("DATALIST_DEFAULT_LIMIT", raw)
        assert get_settings().default_limit == DEFAULT_LIMIT

    def test_invalid_log_level_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATALIST_LOG_LEVEL", "chatty")
        assert get_settings().log_level == DEFAULT_LOG_LEVEL
