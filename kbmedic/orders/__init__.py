"""
Orders — atomic checkout and authorized order access.

    manager = OrderTransactionManager(database, SqlCatalog(database))
    created = await manager.create(CreateOrder(items=...), caller)

    policy = OrderAccessPolicy(database)
    orders = await policy.list(caller)
"""

from kbmedic.orders._access import OrderAccessPolicy, parse_status
from kbmedic.orders._repository import REVENUE_STATUSES, OrderRepository
from kbmedic.orders._transaction import (
    GUEST_NAME,
    OrderTransactionManager,
    order_total,
    resolve_contact,
    validate_lines,
)

__all__ = (
    "OrderTransactionManager",
    "OrderAccessPolicy",
    "OrderRepository",
    "REVENUE_STATUSES",
    "GUEST_NAME",
    "validate_lines",
    "order_total",
    "resolve_contact",
    "parse_status",
)
