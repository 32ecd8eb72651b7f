"""
Routes — thin HTTP adapters over the order services.

Each handler decodes the request, calls one service operation, and either
encodes the ``Ok`` value or raises the ``Error`` for the error handlers.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Body, Path, Query, status
from kungfu import Error, Ok, Result

from kbmedic.api._deps import CallerDep, ContainerDep
from kbmedic.api._schemas import (
    MAX_ID,
    CreatedOrderOut,
    CreateOrderIn,
    HealthOut,
    OrderOut,
    OrderStatsOut,
    SettingsOut,
    ShippingQuoteOut,
    StatusIn,
    StatusUpdatedOut,
)
from kbmedic.domain import OrderId, StorefrontError

OrderIdPath = Annotated[int, Path(ge=1, le=MAX_ID)]

router = APIRouter()


def unwrap[T](result: Result[T, StorefrontError]) -> T:
    match result:
        case Ok(value):
            return value
        case Error(e):
            raise e


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/orders", status_code=status.HTTP_201_CREATED, response_model=CreatedOrderOut)
async def create_order(
    body: CreateOrderIn, container: ContainerDep, caller: CallerDep
) -> CreatedOrderOut:
    created = unwrap(await container.orders.create(body.to_domain(), caller))
    return CreatedOrderOut.from_domain(created)


@router.get("/orders", response_model=list[OrderOut])
async def list_orders(container: ContainerDep, caller: CallerDep) -> list[OrderOut]:
    orders = unwrap(await container.access.list(caller))
    return [OrderOut.from_domain(o) for o in orders]


@router.get("/orders/stats/summary", response_model=OrderStatsOut)
async def order_stats(container: ContainerDep, caller: CallerDep) -> OrderStatsOut:
    return OrderStatsOut.from_domain(unwrap(await container.access.stats(caller)))


@router.get("/orders/{order_id}", response_model=OrderOut)
async def get_order(order_id: OrderIdPath, container: ContainerDep, caller: CallerDep) -> OrderOut:
    order = unwrap(await container.access.get(OrderId(order_id), caller))
    return OrderOut.from_domain(order, with_items=True)


@router.put("/orders/{order_id}", response_model=StatusUpdatedOut)
async def update_order_status(
    order_id: OrderIdPath,
    container: ContainerDep,
    caller: CallerDep,
    body: Annotated[StatusIn | None, Body()] = None,
) -> StatusUpdatedOut:
    new_status = body.status if body is not None else None
    order = unwrap(await container.access.set_status(OrderId(order_id), new_status, caller))
    return StatusUpdatedOut.from_domain(order)


# ═══════════════════════════════════════════════════════════════════════════════
# Store
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/settings", response_model=SettingsOut)
async def store_settings(container: ContainerDep) -> SettingsOut:
    return SettingsOut.from_domain(container.settings)


@router.get("/settings/shipping", response_model=ShippingQuoteOut)
async def shipping_quote(
    subtotal: Annotated[Decimal, Query(ge=0)], container: ContainerDep
) -> ShippingQuoteOut:
    return ShippingQuoteOut.from_domain(container.settings.shipping.quote(subtotal))


@router.get("/health", response_model=HealthOut)
async def health() -> HealthOut:
    return HealthOut(status="ok", timestamp=datetime.now())


__all__ = ("router", "unwrap")
