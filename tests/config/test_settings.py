# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
from __future__ import annotations

import pytest
from pydantic import ValidationError

from stocktracker_api.config.settings import Environment, Settings, get_settings


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings should hydrate deterministically from environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@localhost:5432/stocktracker")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("MAX_SERIES_LIMIT", "12")
    monkeypatch.setenv("DEFAULT_METRIC_UNIT", "LKR")

    s = Settings()

    assert s.environment == Environment.STAGING
    assert s.database_url.startswith("postgresql+asyncpg://")
    assert s.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert s.max_series_limit == 12
    assert s.default_metric_unit == "LKR"


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

    s = Settings()

    assert s.store_timeout_s == 5.0
    assert s.max_series_limit == 40
    assert s.compare_max_symbols == 5
    assert s.default_metric_unit == "USD"
    assert s.cors_allow_origins == []


def test_wildcard_cors_only_outside_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")

    monkeypatch.setenv("ENVIRONMENT", "test")
    assert Settings().cors_allow_origins == ["*"]

    monkeypatch.setenv("ENVIRONMENT", "production")
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [("STORE_TIMEOUT_S", "0"), ("MAX_SERIES_LIMIT", "0"), ("COMPARE_MAX_SYMBOLS", "1")],
)
def test_out_of_range_values_are_rejected(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_wraps_invalid_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL")

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        get_settings()
