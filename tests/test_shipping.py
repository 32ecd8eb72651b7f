"""Tests for the shipping rule and store settings."""

from __future__ import annotations

from decimal import Decimal

import pytest

from kbmedic.config import AppConfig
from kbmedic.shipping import ShippingQuote, ShippingRule, StoreSettings

RULE = ShippingRule(flat_fee=Decimal("300"), free_threshold=Decimal("5000"))


@pytest.mark.parametrize(
    ("subtotal", "fee"),
    [
        ("0", "0"),
        ("250", "300"),
        ("4999.99", "300"),
        ("5000", "0"),
        ("12000", "0"),
    ],
)
def test_fee_for(subtotal: str, fee: str) -> None:
    assert RULE.fee_for(Decimal(subtotal)) == Decimal(fee)


def test_no_threshold_always_charges() -> None:
    rule = ShippingRule(flat_fee=Decimal("15"))
    assert rule.fee_for(Decimal("1000000")) == Decimal("15")


def test_quote() -> None:
    assert RULE.quote(Decimal("1700")) == ShippingQuote(
        subtotal=Decimal("1700"),
        delivery_fee=Decimal("300"),
        total=Decimal("2000"),
    )


def test_settings_from_config() -> None:
    config = AppConfig(store_name="KB-Medic Oran", delivery_fee=Decimal("200"), free_shipping_threshold=None)

    settings = StoreSettings.from_config(config)

    assert settings.store_name == "KB-Medic Oran"
    assert settings.shipping == ShippingRule(flat_fee=Decimal("200"), free_threshold=None)


def test_default_settings() -> None:
    settings = StoreSettings.from_config(AppConfig(_env_file=None))

    assert settings.store_name == "KB-Medic"
    assert settings.shipping.flat_fee == Decimal("300")
    assert settings.shipping.free_threshold == Decimal("5000")
