"""
Wire codecs — pydantic request/response models.

Request models decode into domain values with ``to_domain()``; response
models encode domain values with ``from_domain()``. Nothing below the HTTP
layer sees a pydantic model.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from kbmedic.domain import (
    Contact,
    CreatedOrder,
    CreateOrder,
    LineRequest,
    Order,
    OrderItem,
    OrderStats,
    ProductId,
)
from kbmedic.shipping import ShippingQuote, StoreSettings


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


# Largest id a SQLite INTEGER column can hold.
MAX_ID = 2**63 - 1


class LineIn(BaseModel):
    # A client-sent ``price`` is dropped here; the catalog decides the price.
    model_config = ConfigDict(extra="ignore")

    product_id: int = Field(ge=1, le=MAX_ID)
    quantity: StrictInt

    def to_domain(self) -> LineRequest:
        return LineRequest(product_id=ProductId(self.product_id), quantity=self.quantity)


class CreateOrderIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: list[LineIn] | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None

    def to_domain(self) -> CreateOrder:
        return CreateOrder(
            items=tuple(line.to_domain() for line in self.items or ()),
            contact=Contact(
                name=self.customer_name,
                phone=self.customer_phone,
                address=self.customer_address,
            ),
        )


class StatusIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Checked by the access policy, after the admin guard.
    status: Any = None


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class CreatedOrderOut(BaseModel):
    message: str
    order_id: int
    total: Decimal
    created_at: datetime

    @classmethod
    def from_domain(cls, dom: CreatedOrder) -> CreatedOrderOut:
        return cls(
            message="Order created successfully",
            order_id=dom.order_id.value,
            total=dom.total,
            created_at=dom.created_at,
        )


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    product_name: str
    price: Decimal
    quantity: int
    line_total: Decimal

    @classmethod
    def from_domain(cls, dom: OrderItem) -> OrderItemOut:
        return cls(
            id=dom.id,
            product_id=dom.product_id.value,
            product_name=dom.product_name,
            price=dom.price,
            quantity=dom.quantity,
            line_total=dom.line_total,
        )


class OrderOut(BaseModel):
    id: int
    user_id: int | None
    total: Decimal
    status: str
    customer_name: str | None
    customer_phone: str | None
    customer_address: str | None
    created_at: datetime
    owner_name: str | None = None
    owner_email: str | None = None
    items: list[OrderItemOut] | None = None

    @classmethod
    def from_domain(cls, dom: Order, with_items: bool = False) -> OrderOut:
        return cls(
            id=dom.id.value,
            user_id=dom.owner_id.value if dom.owner_id else None,
            total=dom.total,
            status=dom.status.value,
            customer_name=dom.contact.name,
            customer_phone=dom.contact.phone,
            customer_address=dom.contact.address,
            created_at=dom.created_at,
            owner_name=dom.owner.name if dom.owner else None,
            owner_email=dom.owner.email if dom.owner else None,
            items=[OrderItemOut.from_domain(i) for i in dom.items] if with_items else None,
        )


class StatusUpdatedOut(BaseModel):
    message: str
    order: OrderOut

    @classmethod
    def from_domain(cls, dom: Order) -> StatusUpdatedOut:
        return cls(message="Order status updated", order=OrderOut.from_domain(dom, with_items=True))


class OrderStatsOut(BaseModel):
    total_orders: int
    pending_orders: int
    completed_orders: int
    total_revenue: Decimal

    @classmethod
    def from_domain(cls, dom: OrderStats) -> OrderStatsOut:
        return cls(
            total_orders=dom.total_orders,
            pending_orders=dom.pending_orders,
            completed_orders=dom.completed_orders,
            total_revenue=dom.total_revenue,
        )


class SettingsOut(BaseModel):
    store_name: str
    phone: str
    delivery_fee: Decimal
    free_shipping_threshold: Decimal | None

    @classmethod
    def from_domain(cls, dom: StoreSettings) -> SettingsOut:
        return cls(
            store_name=dom.store_name,
            phone=dom.phone,
            delivery_fee=dom.shipping.flat_fee,
            free_shipping_threshold=dom.shipping.free_threshold,
        )


class ShippingQuoteOut(BaseModel):
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal

    @classmethod
    def from_domain(cls, dom: ShippingQuote) -> ShippingQuoteOut:
        return cls(subtotal=dom.subtotal, delivery_fee=dom.delivery_fee, total=dom.total)


class HealthOut(BaseModel):
    status: str
    timestamp: datetime


class ErrorOut(BaseModel):
    error: str
    kind: str


__all__ = (
    "MAX_ID",
    "LineIn",
    "CreateOrderIn",
    "StatusIn",
    "CreatedOrderOut",
    "OrderItemOut",
    "OrderOut",
    "StatusUpdatedOut",
    "OrderStatsOut",
    "SettingsOut",
    "ShippingQuoteOut",
    "HealthOut",
    "ErrorOut",
)
