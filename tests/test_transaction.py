"""Tests for atomic order creation."""

from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from kbmedic.catalog import MemoryCatalog
from kbmedic.db import Database, OrderItemTable, OrderTable, ProductTable
from kbmedic.domain import (
    ANONYMOUS,
    Contact,
    CreateOrder,
    ErrorKind,
    Identity,
    LineRequest,
    NotFoundError,
    OrderId,
    OrderStatus,
    ProductId,
    UserId,
)
from kbmedic.orders import (
    GUEST_NAME,
    OrderAccessPolicy,
    OrderRepository,
    OrderTransactionManager,
    resolve_contact,
)

from tests._support import OMEGA, PARACETAMOL, VITAMIN_C, Users, count_rows, err, ok


def order_of(*lines: tuple[ProductId, int], contact: Contact = Contact()) -> CreateOrder:
    return CreateOrder(
        items=tuple(LineRequest(product_id=p, quantity=q) for p, q in lines),
        contact=contact,
    )


class TestCreateOrder:
    @pytest.mark.asyncio
    async def test_guest_order_totals_catalog_prices(
        self, manager: OrderTransactionManager, policy: OrderAccessPolicy, users: Users
    ) -> None:
        created = ok(await manager.create(order_of((PARACETAMOL, 2), (OMEGA, 1))))
        assert created.total == Decimal("1700")

        order = ok(await policy.get(created.order_id, users.admin))
        assert order.owner_id is None
        assert order.status is OrderStatus.PENDING
        assert order.created_at == created.created_at
        assert order.contact == Contact(name=GUEST_NAME, phone="", address="")
        assert [(i.product_id, i.product_name, i.price, i.quantity) for i in order.items] == [
            (PARACETAMOL, "Paracetamol 500mg", Decimal("250"), 2),
            (OMEGA, "Omega 3", Decimal("1200"), 1),
        ]
        assert order.total == sum(i.line_total for i in order.items)

    @pytest.mark.asyncio
    async def test_fractional_prices_stay_exact(
        self, manager: OrderTransactionManager, users: Users
    ) -> None:
        created = ok(await manager.create(order_of((VITAMIN_C, 3))))
        assert created.total == Decimal("59.97")

    @pytest.mark.asyncio
    async def test_repeated_product_lines_are_kept(
        self, manager: OrderTransactionManager, policy: OrderAccessPolicy, users: Users
    ) -> None:
        created = ok(await manager.create(order_of((OMEGA, 1), (OMEGA, 2))))

        order = ok(await policy.get(created.order_id, users.admin))
        assert [i.quantity for i in order.items] == [1, 2]
        assert order.total == Decimal("3600")

    @pytest.mark.asyncio
    async def test_empty_items_rejected_without_writes(
        self, manager: OrderTransactionManager, database: Database, users: Users
    ) -> None:
        e = err(await manager.create(CreateOrder(items=())))

        assert e.kind is ErrorKind.VALIDATION
        assert e.message == "Order items are required"
        assert await count_rows(database, OrderTable) == 0

    @pytest.mark.parametrize("quantity", [0, -3, True])
    @pytest.mark.asyncio
    async def test_invalid_quantity_rejected(
        self, manager: OrderTransactionManager, database: Database, users: Users, quantity: int
    ) -> None:
        e = err(await manager.create(order_of((PARACETAMOL, 1), (OMEGA, quantity))))

        assert e.kind is ErrorKind.VALIDATION
        assert await count_rows(database, OrderTable) == 0

    @pytest.mark.asyncio
    async def test_unknown_product_aborts_before_any_write(
        self, manager: OrderTransactionManager, database: Database, users: Users
    ) -> None:
        e = err(await manager.create(order_of((PARACETAMOL, 1), (ProductId(999), 1), (OMEGA, 1))))

        assert isinstance(e, NotFoundError)
        assert e.entity == "product"
        assert e.key == 999
        assert "999" in e.message
        assert await count_rows(database, OrderTable) == 0
        assert await count_rows(database, OrderItemTable) == 0

    @pytest.mark.asyncio
    async def test_failed_item_insert_rolls_back_header(
        self,
        manager: OrderTransactionManager,
        database: Database,
        users: Users,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        async def broken_insert(self: OrderRepository, order_id: OrderId, lines: object) -> None:
            raise OperationalError("INSERT INTO order_items", {}, Exception("disk I/O error"))

        monkeypatch.setattr(OrderRepository, "insert_items", broken_insert)

        e = err(await manager.create(order_of((PARACETAMOL, 1))))

        assert e.kind is ErrorKind.STORAGE
        assert await count_rows(database, OrderTable) == 0
        assert await count_rows(database, OrderItemTable) == 0

    @pytest.mark.asyncio
    async def test_concurrent_orders_get_distinct_ids(
        self, manager: OrderTransactionManager, database: Database, users: Users
    ) -> None:
        results = await asyncio.gather(
            *(manager.create(order_of((PARACETAMOL, n))) for n in range(1, 6))
        )

        ids = {ok(r).order_id for r in results}
        assert len(ids) == 5
        assert await count_rows(database, OrderTable) == 5
        assert await count_rows(database, OrderItemTable) == 5


class TestSnapshots:
    @pytest.mark.asyncio
    async def test_catalog_price_change_does_not_touch_history(
        self, database: Database, policy: OrderAccessPolicy, users: Users
    ) -> None:
        catalog = MemoryCatalog()
        catalog.add(PARACETAMOL.value, "Paracetamol 500mg", "100")
        manager = OrderTransactionManager(database, catalog)

        first = ok(await manager.create(order_of((PARACETAMOL, 2))))
        catalog.set_price(PARACETAMOL.value, "150")
        second = ok(await manager.create(order_of((PARACETAMOL, 2))))

        assert first.total == Decimal("200")
        assert second.total == Decimal("300")
        old = ok(await policy.get(first.order_id, users.admin))
        assert old.total == Decimal("200")
        assert old.items[0].price == Decimal("100")

    @pytest.mark.asyncio
    async def test_stored_product_update_does_not_touch_history(
        self,
        manager: OrderTransactionManager,
        policy: OrderAccessPolicy,
        database: Database,
        users: Users,
    ) -> None:
        created = ok(await manager.create(order_of((OMEGA, 1))))
        async with database.transaction() as session:
            await session.execute(
                update(ProductTable)
                .where(ProductTable.id == OMEGA.value)
                .values(price=Decimal("999"), name="Omega 3 Forte")
            )

        order = ok(await policy.get(created.order_id, users.admin))
        assert order.items[0].price == Decimal("1200")
        assert order.items[0].product_name == "Omega 3"


class TestContact:
    @pytest.mark.asyncio
    async def test_profile_fills_missing_contact(
        self, manager: OrderTransactionManager, policy: OrderAccessPolicy, users: Users
    ) -> None:
        created = ok(await manager.create(order_of((OMEGA, 1)), users.alice))

        order = ok(await policy.get(created.order_id, users.alice))
        assert order.owner_id == users.alice.id
        assert order.contact == Contact("Alice", "0550111111", "12 Rue Didouche")

    @pytest.mark.asyncio
    async def test_explicit_fields_win_per_field(
        self, manager: OrderTransactionManager, policy: OrderAccessPolicy, users: Users
    ) -> None:
        request = order_of((OMEGA, 1), contact=Contact(name="Alice B.", address="5 Rue Larbi"))
        created = ok(await manager.create(request, users.alice))

        order = ok(await policy.get(created.order_id, users.alice))
        assert order.contact == Contact("Alice B.", "0550111111", "5 Rue Larbi")

    @pytest.mark.asyncio
    async def test_guest_order_keeps_explicit_contact(
        self, manager: OrderTransactionManager, policy: OrderAccessPolicy, users: Users
    ) -> None:
        contact = Contact("Karim", "0770000000", "3 Rue Ben M'hidi")
        created = ok(await manager.create(order_of((OMEGA, 1), contact=contact), ANONYMOUS))

        order = ok(await policy.get(created.order_id, users.admin))
        assert order.owner_id is None
        assert order.owner is None
        assert order.contact == contact
        assert order.total == Decimal("1200")

    def test_user_without_profile_details(self) -> None:
        bob = Identity(UserId(3), "Bob", "bob@example.com")
        assert resolve_contact(Contact(), bob) == Contact("Bob", "", "")

    def test_guest_defaults(self) -> None:
        assert resolve_contact(Contact(), ANONYMOUS) == Contact(GUEST_NAME, "", "")
        assert resolve_contact(Contact(phone="0661"), ANONYMOUS) == Contact(GUEST_NAME, "0661", "")
