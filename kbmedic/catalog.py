"""
Catalog — authoritative product lookup.

The order transaction trusts only the price returned here; a price sent by
the client is never consulted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

from combinators import lift as L
from kungfu import Error, Ok, Result
from sqlalchemy import select

from kbmedic.db import Database, ProductTable
from kbmedic.domain import Errors, Product, ProductId, StorefrontError


class CatalogLookup(Protocol):
    async def get(self, product_id: ProductId) -> Result[Product, StorefrontError]:
        """Current name and price, ``NotFoundError`` on a miss."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# SQL Catalog
# ═══════════════════════════════════════════════════════════════════════════════


class SqlCatalog:
    def __init__(self, database: Database) -> None:
        self._database = database

    async def get(self, product_id: ProductId) -> Result[Product, StorefrontError]:
        looked_up = await L.catching_async(
            lambda: self._fetch(product_id),
            on_error=lambda e: Errors.storage(f"Failed to load product {product_id.value}: {e}"),
        )
        match looked_up:
            case Ok(None):
                return Error(Errors.product_not_found(product_id.value))
            case Ok(product):
                return Ok(product)
            case Error(e):
                return Error(e)

    async def _fetch(self, product_id: ProductId) -> Product | None:
        async with self._database.session() as session:
            row = (
                await session.execute(
                    select(ProductTable).where(ProductTable.id == product_id.value)
                )
            ).scalar_one_or_none()
            if row is None:
                return None
            return Product(id=ProductId(row.id), name=row.name, price=Decimal(row.price))


# ═══════════════════════════════════════════════════════════════════════════════
# In-memory Catalog
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class MemoryCatalog:
    _products: dict[int, Product] = field(default_factory=dict[int, Product])

    def add(self, product_id: int, name: str, price: Decimal | int | str) -> Product:
        product = Product(ProductId(product_id), name, Decimal(price))
        self._products[product_id] = product
        return product

    def set_price(self, product_id: int, price: Decimal | int | str) -> None:
        current = self._products[product_id]
        self._products[product_id] = Product(current.id, current.name, Decimal(price))

    async def get(self, product_id: ProductId) -> Result[Product, StorefrontError]:
        product = self._products.get(product_id.value)
        return Ok(product) if product else Error(Errors.product_not_found(product_id.value))


__all__ = ("CatalogLookup", "SqlCatalog", "MemoryCatalog")
