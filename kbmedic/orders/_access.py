"""
Order Access Policy — who may see or change which orders.

Authorization is decided before any order data leaves the store: customers
only ever receive their own orders, admins receive everything.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from kungfu import Error, Ok, Result
from sqlalchemy.exc import SQLAlchemyError

from kbmedic.db import Database
from kbmedic.domain import (
    Caller,
    Errors,
    Order,
    OrderId,
    OrderStats,
    OrderStatus,
    StorefrontError,
)
from kbmedic.identity import require_admin, require_identity
from kbmedic.logging import get_logger
from kbmedic.orders._repository import OrderRepository

logger = get_logger(__name__)


def parse_status(raw: object) -> Result[OrderStatus, StorefrontError]:
    if raw is None:
        return Error(Errors.invalid_status(raw))
    try:
        return Ok(OrderStatus(raw))
    except (ValueError, TypeError):
        return Error(Errors.invalid_status(raw))


class OrderAccessPolicy:
    def __init__(self, database: Database) -> None:
        self._database = database

    async def list(self, caller: Caller) -> Result[list[Order], StorefrontError]:
        """All orders for an admin, otherwise only the caller's own; newest first."""
        match require_identity(caller):
            case Error(e):
                return Error(e)
            case Ok(identity):
                pass

        if identity.is_admin:
            return await self._read(lambda repo: repo.list_all())
        return await self._read(lambda repo: repo.list_for_owner(identity.id))

    async def get(self, order_id: OrderId, caller: Caller) -> Result[Order, StorefrontError]:
        match require_identity(caller):
            case Error(e):
                return Error(e)
            case Ok(identity):
                pass

        match await self._read(lambda repo: repo.get(order_id)):
            case Error(e):
                return Error(e)
            case Ok(None):
                return Error(Errors.order_not_found(order_id.value))
            case Ok(order):
                pass

        if not identity.is_admin and not order.is_owned_by(identity):
            logger.warning("User {} denied order {}", identity.id.value, order_id.value)
            return Error(Errors.access_denied())
        return Ok(order)

    async def set_status(
        self,
        order_id: OrderId,
        status: object,
        caller: Caller,
    ) -> Result[Order, StorefrontError]:
        """
        Move an order to ``status``. Admin only.

        Only the status column changes; total, items and contact stay as
        they were captured at checkout.
        """
        match require_admin(caller):
            case Error(e):
                return Error(e)
            case Ok(admin):
                pass

        match parse_status(status):
            case Error(e):
                return Error(e)
            case Ok(new_status):
                pass

        async def update(repo: OrderRepository) -> Order | None:
            if not await repo.update_status(order_id, new_status):
                return None
            return await repo.get(order_id)

        match await self._write(update):
            case Error(e):
                return Error(e)
            case Ok(None):
                return Error(Errors.order_not_found(order_id.value))
            case Ok(order):
                logger.info(
                    "Order {} set to {} by user {}",
                    order_id.value,
                    new_status.value,
                    admin.id.value,
                )
                return Ok(order)

    async def stats(self, caller: Caller) -> Result[OrderStats, StorefrontError]:
        match require_admin(caller):
            case Error(e):
                return Error(e)
            case Ok(_):
                return await self._read(lambda repo: repo.stats())

    # ── sessions ────────────────────────────────────────────────────────────

    async def _read[T](
        self, query: Callable[[OrderRepository], Awaitable[T]]
    ) -> Result[T, StorefrontError]:
        try:
            async with self._database.session() as session:
                return Ok(await query(OrderRepository(session)))
        except SQLAlchemyError as e:
            logger.exception("Order read failed")
            return Error(Errors.storage(f"Failed to load orders: {e}"))

    async def _write[T](
        self, change: Callable[[OrderRepository], Awaitable[T]]
    ) -> Result[T, StorefrontError]:
        try:
            async with self._database.transaction() as session:
                return Ok(await change(OrderRepository(session)))
        except SQLAlchemyError as e:
            logger.exception("Order update rolled back")
            return Error(Errors.storage(f"Failed to update order: {e}"))


__all__ = ("OrderAccessPolicy", "parse_status")
