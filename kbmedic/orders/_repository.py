"""
Order repository — SQL for orders and order items, bound to one session.

The caller owns the session and therefore the transaction boundary.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kbmedic.db import OrderItemTable, OrderTable, UserTable
from kbmedic.domain import (
    Contact,
    Order,
    OrderId,
    OrderItem,
    OrderStats,
    OrderStatus,
    Owner,
    PricedLine,
    ProductId,
    UserId,
)

REVENUE_STATUSES = (OrderStatus.COMPLETED.value, OrderStatus.SHIPPED.value)


class OrderRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ── writes ──────────────────────────────────────────────────────────────

    async def insert_order(
        self,
        owner_id: UserId | None,
        total: Decimal,
        contact: Contact,
        created_at: datetime,
    ) -> OrderId:
        row = OrderTable(
            user_id=owner_id.value if owner_id else None,
            total=total,
            status=OrderStatus.PENDING.value,
            customer_name=contact.name,
            customer_phone=contact.phone,
            customer_address=contact.address,
            created_at=created_at,
        )
        self._session.add(row)
        await self._session.flush()
        return OrderId(row.id)

    async def insert_items(self, order_id: OrderId, lines: Sequence[PricedLine]) -> None:
        self._session.add_all(
            OrderItemTable(
                order_id=order_id.value,
                product_id=line.product_id.value,
                product_name=line.product_name,
                quantity=line.quantity,
                price=line.price,
            )
            for line in lines
        )
        await self._session.flush()

    async def update_status(self, order_id: OrderId, status: OrderStatus) -> bool:
        result: Any = await self._session.execute(
            update(OrderTable)
            .where(OrderTable.id == order_id.value)
            .values(status=status.value)
        )
        return bool(result.rowcount)

    # ── reads ───────────────────────────────────────────────────────────────

    async def list_all(self) -> list[Order]:
        rows = await self._session.execute(_newest_first(_with_owner()))
        return [_to_order(row, owner_name, owner_email) for row, owner_name, owner_email in rows]

    async def list_for_owner(self, owner_id: UserId) -> list[Order]:
        rows = await self._session.execute(
            _newest_first(_with_owner().where(OrderTable.user_id == owner_id.value))
        )
        return [_to_order(row, owner_name, owner_email) for row, owner_name, owner_email in rows]

    async def get(self, order_id: OrderId) -> Order | None:
        found = (
            await self._session.execute(
                _with_owner()
                .where(OrderTable.id == order_id.value)
                .options(selectinload(OrderTable.items))
            )
        ).one_or_none()
        if found is None:
            return None
        row, owner_name, owner_email = found
        return _to_order(row, owner_name, owner_email, with_items=True)

    async def stats(self) -> OrderStats:
        def count(*criteria: Any) -> Select[tuple[int]]:
            return select(func.count()).select_from(OrderTable).where(*criteria)

        total_orders = await self._session.scalar(count())
        pending = await self._session.scalar(
            count(OrderTable.status == OrderStatus.PENDING.value)
        )
        completed = await self._session.scalar(
            count(OrderTable.status == OrderStatus.COMPLETED.value)
        )
        revenue = await self._session.scalar(
            select(func.coalesce(func.sum(OrderTable.total), 0)).where(
                OrderTable.status.in_(REVENUE_STATUSES)
            )
        )
        return OrderStats(
            total_orders=int(total_orders or 0),
            pending_orders=int(pending or 0),
            completed_orders=int(completed or 0),
            total_revenue=Decimal(str(revenue or 0)),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Query Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _with_owner() -> Select[tuple[OrderTable, str | None, str | None]]:
    return select(OrderTable, UserTable.name, UserTable.email).outerjoin(
        UserTable, OrderTable.user_id == UserTable.id
    )


def _newest_first[S: Select[Any]](stmt: S) -> S:
    return stmt.order_by(OrderTable.created_at.desc(), OrderTable.id.desc())


def _to_order(
    row: OrderTable,
    owner_name: str | None,
    owner_email: str | None,
    with_items: bool = False,
) -> Order:
    owner = None
    if row.user_id is not None and owner_name is not None:
        owner = Owner(name=owner_name, email=owner_email or "")

    items: tuple[OrderItem, ...] = ()
    if with_items:
        items = tuple(
            OrderItem(
                id=item.id,
                product_id=ProductId(item.product_id),
                product_name=item.product_name,
                price=Decimal(item.price),
                quantity=item.quantity,
            )
            for item in row.items
        )

    return Order(
        id=OrderId(row.id),
        owner_id=UserId(row.user_id) if row.user_id is not None else None,
        total=Decimal(row.total),
        status=OrderStatus(row.status),
        contact=Contact(
            name=row.customer_name,
            phone=row.customer_phone,
            address=row.customer_address,
        ),
        created_at=row.created_at,
        owner=owner,
        items=items,
    )


__all__ = ("OrderRepository", "REVENUE_STATUSES")
