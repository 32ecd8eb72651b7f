"""Shared pytest fixtures: a fresh SQLite database per test, seeded with users and products."""

from __future__ import annotations

from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio

from kbmedic.catalog import SqlCatalog
from kbmedic.db import Database, ProductTable, UserTable
from kbmedic.domain import Identity, Role, UserId
from kbmedic.orders import OrderAccessPolicy, OrderTransactionManager

from tests._support import OMEGA, PARACETAMOL, VITAMIN_C, Users


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncIterator[Database]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'kbmedic.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def users(database: Database) -> Users:
    seeded = Users(
        admin=Identity(UserId(1), "Admin", "admin@pharmacy.com", Role.ADMIN),
        alice=Identity(
            UserId(2),
            "Alice",
            "alice@example.com",
            phone="0550111111",
            address="12 Rue Didouche",
        ),
        bob=Identity(UserId(3), "Bob", "bob@example.com"),
    )
    async with database.transaction() as session:
        session.add_all(
            UserTable(
                id=u.id.value,
                name=u.name,
                email=u.email,
                role=u.role.value,
                phone=u.phone,
                address=u.address,
            )
            for u in (seeded.admin, seeded.alice, seeded.bob)
        )
        session.add_all(
            [
                ProductTable(id=PARACETAMOL.value, name="Paracetamol 500mg", price=Decimal("250")),
                ProductTable(id=OMEGA.value, name="Omega 3", price=Decimal("1200")),
                ProductTable(id=VITAMIN_C.value, name="Vitamin C", price=Decimal("19.99")),
            ]
        )
    return seeded


@pytest.fixture
def manager(database: Database) -> OrderTransactionManager:
    return OrderTransactionManager(database, SqlCatalog(database))


@pytest.fixture
def policy(database: Database) -> OrderAccessPolicy:
    return OrderAccessPolicy(database)
