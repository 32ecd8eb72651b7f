"""
Domain — pharmacy storefront checkout and order history.

An order is written once, together with its line items, and afterwards
only its status moves. Prices and contact details are snapshots taken at
checkout, so later catalog or profile edits never rewrite history.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


# ═══════════════════════════════════════════════════════════════════════════════
# IDs
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class UserId:
    value: int


@dataclass(frozen=True, slots=True)
class ProductId:
    value: int


@dataclass(frozen=True, slots=True)
class OrderId:
    value: int


# ═══════════════════════════════════════════════════════════════════════════════
# Callers
# ═══════════════════════════════════════════════════════════════════════════════


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"

    @classmethod
    def parse(cls, raw: str | None) -> Role:
        """Unknown or missing roles never grant admin rights."""
        return cls.ADMIN if raw == cls.ADMIN.value else cls.CUSTOMER


@dataclass(frozen=True, slots=True)
class Identity:
    """A verified caller, as stored in the user directory."""

    id: UserId
    name: str
    email: str
    role: Role = Role.CUSTOMER
    phone: str | None = None
    address: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True, slots=True)
class Anonymous:
    """No (valid) credential was presented."""


ANONYMOUS = Anonymous()

type Caller = Identity | Anonymous


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Product:
    id: ProductId
    name: str
    price: Decimal


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout Input
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class LineRequest:
    product_id: ProductId
    quantity: int


@dataclass(frozen=True, slots=True)
class Contact:
    name: str | None = None
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True, slots=True)
class CreateOrder:
    items: tuple[LineRequest, ...]
    contact: Contact = Contact()


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class PricedLine:
    """A validated line: catalog name and price captured for the snapshot."""

    product_id: ProductId
    product_name: str
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True, slots=True)
class OrderItem:
    id: int
    product_id: ProductId
    product_name: str
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True, slots=True)
class Owner:
    """Display details of the registered user owning an order."""

    name: str
    email: str


@dataclass(frozen=True, slots=True)
class Order:
    id: OrderId
    owner_id: UserId | None
    total: Decimal
    status: OrderStatus
    contact: Contact
    created_at: datetime
    owner: Owner | None = None
    items: tuple[OrderItem, ...] = ()

    def is_owned_by(self, identity: Identity) -> bool:
        return self.owner_id is not None and self.owner_id == identity.id


@dataclass(frozen=True, slots=True)
class CreatedOrder:
    order_id: OrderId
    total: Decimal
    created_at: datetime


@dataclass(frozen=True, slots=True)
class OrderStats:
    total_orders: int
    pending_orders: int
    completed_orders: int
    total_revenue: Decimal
