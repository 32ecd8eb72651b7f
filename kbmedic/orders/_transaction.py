"""
Order Transaction Manager — checkout as one atomic write.

Every line is priced from the catalog before anything is written, so a
rejected request leaves no trace. The header and all item rows then go
through a single unit of work: either the whole order exists or none of it.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from kungfu import Error, Ok, Result
from sqlalchemy.exc import SQLAlchemyError

from kbmedic.catalog import CatalogLookup
from kbmedic.db import Database
from kbmedic.domain import (
    ANONYMOUS,
    Caller,
    Contact,
    CreatedOrder,
    CreateOrder,
    Errors,
    Identity,
    LineRequest,
    OrderId,
    PricedLine,
    StorefrontError,
    UserId,
)
from kbmedic.logging import get_logger
from kbmedic.orders._repository import OrderRepository

logger = get_logger(__name__)

GUEST_NAME = "Guest"


# ═══════════════════════════════════════════════════════════════════════════════
# Pure Steps
# ═══════════════════════════════════════════════════════════════════════════════


def validate_lines(items: tuple[LineRequest, ...]) -> Result[tuple[LineRequest, ...], StorefrontError]:
    if not items:
        return Error(Errors.items_required())
    for line in items:
        q = line.quantity
        if isinstance(q, bool) or not isinstance(q, int) or q <= 0:
            return Error(Errors.invalid_quantity(line.product_id.value, q))
    return Ok(items)


def order_total(lines: tuple[PricedLine, ...]) -> Decimal:
    return sum((line.line_total for line in lines), Decimal("0"))


def resolve_contact(requested: Contact, caller: Caller) -> Contact:
    """
    Fill each contact field independently.

    A non-empty field from the request wins, then the caller's stored
    profile, then the guest default.
    """
    profile = caller if isinstance(caller, Identity) else None
    return Contact(
        name=requested.name or (profile.name if profile else None) or GUEST_NAME,
        phone=requested.phone or (profile.phone if profile else None) or "",
        address=requested.address or (profile.address if profile else None) or "",
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Manager
# ═══════════════════════════════════════════════════════════════════════════════


class OrderTransactionManager:
    def __init__(self, database: Database, catalog: CatalogLookup) -> None:
        self._database = database
        self._catalog = catalog

    async def create(
        self,
        request: CreateOrder,
        caller: Caller = ANONYMOUS,
    ) -> Result[CreatedOrder, StorefrontError]:
        match validate_lines(request.items):
            case Error(e):
                logger.warning("Rejected order: {}", e.message)
                return Error(e)
            case Ok(items):
                pass

        match await self._price(items):
            case Error(e):
                logger.warning("Rejected order: {}", e.message)
                return Error(e)
            case Ok(lines):
                pass

        total = order_total(lines)
        contact = resolve_contact(request.contact, caller)
        owner_id = caller.id if isinstance(caller, Identity) else None
        created_at = datetime.now()

        try:
            order_id = await self._write(owner_id, total, contact, lines, created_at)
        except SQLAlchemyError as e:
            logger.exception("Order write rolled back")
            return Error(Errors.storage(f"Failed to save order: {e}"))

        logger.info(
            "Created order {} ({} items, total {})",
            order_id.value,
            len(lines),
            total,
        )
        return Ok(CreatedOrder(order_id=order_id, total=total, created_at=created_at))

    async def _price(
        self, items: tuple[LineRequest, ...]
    ) -> Result[tuple[PricedLine, ...], StorefrontError]:
        priced: list[PricedLine] = []
        for line in items:
            match await self._catalog.get(line.product_id):
                case Ok(product):
                    priced.append(
                        PricedLine(
                            product_id=product.id,
                            product_name=product.name,
                            price=product.price,
                            quantity=line.quantity,
                        )
                    )
                case Error(e):
                    return Error(e)
        return Ok(tuple(priced))

    async def _write(
        self,
        owner_id: UserId | None,
        total: Decimal,
        contact: Contact,
        lines: tuple[PricedLine, ...],
        created_at: datetime,
    ) -> OrderId:
        async with self._database.transaction() as session:
            repo = OrderRepository(session)
            order_id = await repo.insert_order(owner_id, total, contact, created_at)
            await repo.insert_items(order_id, lines)
            return order_id


__all__ = (
    "GUEST_NAME",
    "OrderTransactionManager",
    "validate_lines",
    "order_total",
    "resolve_contact",
)
