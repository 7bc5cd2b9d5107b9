"""Tests for environment-driven configuration."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from booking_pricing.core.config import Settings
from booking_pricing.core.settings import get_pricing_settings
from booking_pricing.services.pricing_service import FeeSchedule


def test_fee_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOOKING_FEE", "75")
    monkeypatch.setenv("TRANSACTION_FEE_RATE", "0.025")
    monkeypatch.setenv("CORS_ALLOWLIST", "https://book.example.ph, http://localhost:5173")
    settings = Settings()
    assert settings.booking_fee == Decimal("75")
    assert settings.transaction_fee_rate == Decimal("0.025")
    assert settings.partial_payment_rate == Decimal("0.5")
    assert settings.cors_allowlist == ["https://book.example.ph", "http://localhost:5173"]


@pytest.mark.parametrize("rate", ["-0.1", "1.5"])
def test_rates_must_be_fractions(monkeypatch: pytest.MonkeyPatch, rate: str) -> None:
    monkeypatch.setenv("PARTIAL_PAYMENT_RATE", rate)
    with pytest.raises(ValidationError):
        Settings()


def test_fee_schedule_defaults_match_settings() -> None:
    schedule = FeeSchedule.from_settings(get_pricing_settings())
    assert schedule.booking_fee == Decimal("50")
    assert schedule.transaction_fee_rate == Decimal("0.03")
    assert schedule.partial_payment_rate == Decimal("0.5")
    assert schedule.currency_symbol == "₱"
