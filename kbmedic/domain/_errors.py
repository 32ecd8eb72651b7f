"""
Errors — the storefront error taxonomy.

Every expected failure travels as ``Error(StorefrontError)`` inside a
``kungfu.Result``; the HTTP layer maps ``kind`` to a status code.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import ClassVar


class ErrorKind(Enum):
    """Stable error kinds exposed to callers."""

    VALIDATION = auto()  # Malformed or missing input, no side effects
    NOT_FOUND = auto()  # Referenced entity absent
    FORBIDDEN = auto()  # Authenticated but not permitted
    UNAUTHORIZED = auto()  # No or invalid credential where one is required
    STORAGE = auto()  # Persistence failure, unit of work rolled back


# ═══════════════════════════════════════════════════════════════════════════════
# Error Types
# ═══════════════════════════════════════════════════════════════════════════════


class StorefrontError(Exception):
    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(StorefrontError):
    kind = ErrorKind.VALIDATION


class NotFoundError(StorefrontError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, entity: str, key: int | str) -> None:
        super().__init__(message)
        self.entity = entity
        self.key = key


class ForbiddenError(StorefrontError):
    kind = ErrorKind.FORBIDDEN


class UnauthorizedError(StorefrontError):
    kind = ErrorKind.UNAUTHORIZED


class StorageError(StorefrontError):
    kind = ErrorKind.STORAGE


# ═══════════════════════════════════════════════════════════════════════════════
# Canonical Errors
# ═══════════════════════════════════════════════════════════════════════════════


class Errors:
    @staticmethod
    def items_required() -> ValidationError:
        return ValidationError("Order items are required")

    @staticmethod
    def invalid_quantity(product_id: int, quantity: object) -> ValidationError:
        return ValidationError(
            f"Quantity for product {product_id} must be a positive integer, got {quantity!r}"
        )

    @staticmethod
    def invalid_status(status: object) -> ValidationError:
        return ValidationError(f"Invalid status: {status!r}")

    @staticmethod
    def product_not_found(product_id: int) -> NotFoundError:
        return NotFoundError(f"Product {product_id} not found", "product", product_id)

    @staticmethod
    def order_not_found(order_id: int) -> NotFoundError:
        return NotFoundError("Order not found", "order", order_id)

    @staticmethod
    def token_required() -> UnauthorizedError:
        return UnauthorizedError("Access token required")

    @staticmethod
    def admin_required() -> ForbiddenError:
        return ForbiddenError("Admin access required")

    @staticmethod
    def access_denied() -> ForbiddenError:
        return ForbiddenError("Access denied")

    @staticmethod
    def storage(message: str) -> StorageError:
        return StorageError(message)


__all__ = (
    "ErrorKind",
    "StorefrontError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "UnauthorizedError",
    "StorageError",
    "Errors",
)
