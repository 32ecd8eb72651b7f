"""
Shipping — flat delivery fee, waived above a threshold.

Quotes only: the fee is shown at checkout but never folded into an
order's stored total.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from kbmedic.config import AppConfig

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class ShippingQuote:
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal


@dataclass(frozen=True, slots=True)
class ShippingRule:
    flat_fee: Decimal
    free_threshold: Decimal | None = None

    def fee_for(self, subtotal: Decimal) -> Decimal:
        if subtotal <= ZERO:
            return ZERO
        if self.free_threshold is not None and subtotal >= self.free_threshold:
            return ZERO
        return self.flat_fee

    def quote(self, subtotal: Decimal) -> ShippingQuote:
        fee = self.fee_for(subtotal)
        return ShippingQuote(subtotal=subtotal, delivery_fee=fee, total=subtotal + fee)


@dataclass(frozen=True, slots=True)
class StoreSettings:
    store_name: str
    phone: str
    shipping: ShippingRule

    @classmethod
    def from_config(cls, config: AppConfig) -> StoreSettings:
        return cls(
            store_name=config.store_name,
            phone=config.store_phone,
            shipping=ShippingRule(
                flat_fee=config.delivery_fee,
                free_threshold=config.free_shipping_threshold,
            ),
        )


__all__ = ("ShippingQuote", "ShippingRule", "StoreSettings")
