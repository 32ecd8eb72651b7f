"""
Domain — types and errors shared by every storefront module.

    from kbmedic.domain import CreateOrder, LineRequest, ProductId, Errors
"""

from kbmedic.domain._models import (
    UserId,
    ProductId,
    OrderId,
    Role,
    Identity,
    Anonymous,
    ANONYMOUS,
    Caller,
    Product,
    LineRequest,
    Contact,
    CreateOrder,
    OrderStatus,
    PricedLine,
    OrderItem,
    Owner,
    Order,
    CreatedOrder,
    OrderStats,
)
from kbmedic.domain._errors import (
    ErrorKind,
    StorefrontError,
    ValidationError,
    NotFoundError,
    ForbiddenError,
    UnauthorizedError,
    StorageError,
    Errors,
)

__all__ = (
    # IDs
    "UserId",
    "ProductId",
    "OrderId",
    # Callers
    "Role",
    "Identity",
    "Anonymous",
    "ANONYMOUS",
    "Caller",
    # Catalog
    "Product",
    # Checkout
    "LineRequest",
    "Contact",
    "CreateOrder",
    # Orders
    "OrderStatus",
    "PricedLine",
    "OrderItem",
    "Owner",
    "Order",
    "CreatedOrder",
    "OrderStats",
    # Errors
    "ErrorKind",
    "StorefrontError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "UnauthorizedError",
    "StorageError",
    "Errors",
)
