"""Tests for environment settings."""

from decimal import Decimal

import pytest

from cashplan.config import DEFAULT_ADVISOR_URL, Settings


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.advisor_url == DEFAULT_ADVISOR_URL
    assert settings.advisor_api_key is None
    assert settings.horizon_days == 90
    assert settings.max_deferral_days == 30
    assert settings.eur_usd == Decimal("1.08")
    assert settings.usd_egp == Decimal("48.50")
    assert settings.log_level == "WARNING"


def test_environment_overrides():
    settings = Settings.from_env(
        {
            "CASHPLAN_ADVISOR_API_KEY": "abc",
            "CASHPLAN_ADVISOR_MODEL": "other-model",
            "CASHPLAN_HORIZON_DAYS": "30",
            "CASHPLAN_MAX_DEFERRAL_DAYS": "45",
            "CASHPLAN_EUR_USD": "1.1",
            "CASHPLAN_USD_EGP": "50",
            "CASHPLAN_LOG_LEVEL": "debug",
        }
    )

    assert settings.advisor_api_key == "abc"
    assert settings.advisor_model == "other-model"
    assert settings.horizon_days == 30
    assert settings.max_deferral_days == 45
    assert settings.eur_usd == Decimal("1.1")
    assert settings.usd_egp == Decimal("50")
    assert settings.log_level == "DEBUG"


def test_empty_api_key_is_missing():
    assert Settings.from_env({"CASHPLAN_ADVISOR_API_KEY": ""}).advisor_api_key is None


def test_invalid_number_raises():
    with pytest.raises(ValueError):
        Settings.from_env({"CASHPLAN_HORIZON_DAYS": "ninety"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CASHPLAN_MAX_DEFERRAL_DAYS", "12")
    assert Settings.from_env().max_deferral_days == 12
