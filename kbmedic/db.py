"""
Database layer — SQLAlchemy tables and the process-wide connection pool.

Business code never touches the engine: it receives a ``Database`` and asks
it for a scoped session or a unit of work.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from kbmedic.config import get_config
from kbmedic.logging import get_logger

logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Base
# ═══════════════════════════════════════════════════════════════════════════════


class Base(DeclarativeBase):
    pass


Money = Numeric(10, 2)


# ═══════════════════════════════════════════════════════════════════════════════
# Tables
# ═══════════════════════════════════════════════════════════════════════════════


class UserTable(Base):
    """Read by the identity resolver; owned by the user directory service."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="customer")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)


class ProductTable(Base):
    """The catalog; ``price`` is the authoritative current price."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Money, nullable=False)
    old_price: Mapped[Decimal | None] = mapped_column(Money, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)


class OrderTable(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, index=True
    )
    total: Mapped[Decimal] = mapped_column(Money, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="pending")

    # Contact snapshot
    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    customer_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    items: Mapped[list[OrderItemTable]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItemTable.id",
    )
    user: Mapped[UserTable | None] = relationship()


class OrderItemTable(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(Integer, nullable=False)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Money, nullable=False)

    order: Mapped[OrderTable] = relationship(back_populates="items")


# ═══════════════════════════════════════════════════════════════════════════════
# Database
# ═══════════════════════════════════════════════════════════════════════════════


class Database:
    """
    Owns the engine (and therefore the pool) for one database URL.

    The engine is created on first use and released by ``dispose()``.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(self.url, echo=self._echo)
            logger.debug("Created engine for {}", self._engine.url.render_as_string(hide_password=True))
        return self._engine

    def session(self) -> AsyncSession:
        """A scoped session; use as ``async with db.session() as s``."""
        if self._sessions is None:
            self._sessions = async_sessionmaker(self.engine, expire_on_commit=False)
        return self._sessions()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        One atomic unit of work.

        Commits when the block exits normally, rolls back on any exception,
        and always returns the connection to the pool.
        """
        async with self.session() as session:
            async with session.begin():
                yield session

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.debug("Disposed engine")
        self._engine = None
        self._sessions = None


# ═══════════════════════════════════════════════════════════════════════════════
# Process-wide Instance
# ═══════════════════════════════════════════════════════════════════════════════

_database: Database | None = None


def get_database() -> Database:
    """Return the process-wide Database, creating it from config on first use."""
    global _database
    if _database is None:
        config = get_config()
        _database = Database(config.database_url, echo=config.database_echo)
    return _database


async def dispose_database() -> None:
    global _database
    if _database is not None:
        await _database.dispose()
        _database = None


__all__ = (
    "Base",
    "UserTable",
    "ProductTable",
    "OrderTable",
    "OrderItemTable",
    "Database",
    "get_database",
    "dispose_database",
)
