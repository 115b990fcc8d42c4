"""
Test settings loading from the environment.

Every section reads its exact variable names; unset variables fall back
to the documented defaults.
"""
from __future__ import annotations

from decimal import Decimal

import pytest

from core.settings import build_app_settings
from core.settings.modules import AuthSettings, CheckoutSettings, RazorpaySettings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # Keep a developer's .env out of these tests
    monkeypatch.chdir(tmp_path)
    for name in (
        "STORE_BASE_CURRENCY",
        "STORE_TAX_RATE",
        "SHIPPING_BASE_FEE",
        "RAZORPAY_ENABLED",
        "RAZORPAY_KEY_ID",
        "SESSION_TTL_DAYS",
        "STOREFRONT_SLACK_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = build_app_settings()

    assert settings.checkout.base_currency == "INR"
    assert settings.checkout.tax_rate == Decimal("0.10")
    assert settings.razorpay.enabled is False
    assert settings.auth.session_ttl_days == 30
    assert settings.slack.enabled is False

    tariff = settings.tariff
    assert tariff.base_currency == "INR"
    assert tariff.base_fee == Decimal("50")
    assert tariff.increment_fee == Decimal("40")


def test_sections_read_exact_variable_names(monkeypatch):
    monkeypatch.setenv("STORE_BASE_CURRENCY", "USD")
    monkeypatch.setenv("STORE_TAX_RATE", "0.08")
    monkeypatch.setenv("SHIPPING_BASE_FEE", "5")
    monkeypatch.setenv("RAZORPAY_ENABLED", "true")
    monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_live_abc")
    monkeypatch.setenv("SESSION_TTL_DAYS", "7")

    settings = build_app_settings()

    assert settings.checkout.base_currency == "USD"
    assert settings.checkout.tax_rate == Decimal("0.08")
    assert settings.tariff.base_currency == "USD"
    assert settings.tariff.base_fee == Decimal("5")
    assert settings.razorpay.enabled is True
    assert settings.razorpay.key_id == "rzp_live_abc"
    assert settings.auth.session_ttl_days == 7


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("STORE_BASE_CURRENCY=EUR\nRAZORPAY_KEY_ID=rzp_file\n", encoding="utf-8")

    assert CheckoutSettings().base_currency == "EUR"
    assert RazorpaySettings().key_id == "rzp_file"


def test_overrides_replace_whole_sections():
    auth = AuthSettings(session_secret="override", session_ttl_days=1)

    settings = build_app_settings(auth=auth)

    assert settings.auth.session_secret == "override"
    assert settings.auth.session_ttl_days == 1
    assert settings.checkout.base_currency == "INR"
