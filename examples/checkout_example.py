"""
Checkout — atomic order creation and order access rules.

Run: python -m examples.checkout_example

Level 3: kbmedic.orders
Level 2: kungfu.Result
"""

from decimal import Decimal

from kungfu import Error, Ok

from examples._infra import banner, run, scratch_database
from kbmedic.catalog import SqlCatalog
from kbmedic.domain import (
    ANONYMOUS,
    Contact,
    CreateOrder,
    LineRequest,
    ProductId,
    UserId,
)
from kbmedic.identity import SqlUserDirectory
from kbmedic.orders import OrderAccessPolicy, OrderTransactionManager
from kbmedic.shipping import ShippingRule


async def main() -> None:
    banner("Checkout")

    async with scratch_database() as db:
        manager = OrderTransactionManager(db, SqlCatalog(db))
        policy = OrderAccessPolicy(db)
        directory = SqlUserDirectory(db)
        shipping = ShippingRule(flat_fee=Decimal("300"), free_threshold=Decimal("5000"))

        admin = await directory.get(UserId(1))
        customer = await directory.get(UserId(2))
        if admin is None or customer is None:
            print("   Seed users missing")
            return

        # 1. Customer checkout, contact taken from the profile
        print("1. Customer checkout:")
        request = CreateOrder(items=(LineRequest(ProductId(1), 2), LineRequest(ProductId(2), 1)))
        match await manager.create(request, customer):
            case Ok(created):
                fee = shipping.fee_for(created.total)
                print(f"   Order #{created.order_id.value}: total {created.total}, delivery {fee}")
            case Error(e):
                print(f"   Error: {e}")
                return

        # 2. Guest checkout with an unknown product writes nothing
        print("\n2. Guest checkout, unknown product:")
        bad = CreateOrder(
            items=(LineRequest(ProductId(1), 1), LineRequest(ProductId(404), 1)),
            contact=Contact(name="Karim", phone="0770000000"),
        )
        match await manager.create(bad, ANONYMOUS):
            case Ok(created):
                print(f"   Unexpected order #{created.order_id.value}")
            case Error(e):
                print(f"   Rejected ({e.kind.name}): {e}")

        # 3. Visibility
        print("\n3. Who sees what:")
        for caller in (customer, admin):
            match await policy.list(caller):
                case Ok(orders):
                    print(f"   {caller.name}: {[o.id.value for o in orders]}")
                case Error(e):
                    print(f"   {caller.name}: {e}")

        # 4. Status changes are admin only
        print("\n4. Status changes:")
        for caller in (customer, admin):
            match await policy.set_status(created.order_id, "shipped", caller):
                case Ok(order):
                    print(f"   {caller.name}: now {order.status.value}")
                case Error(e):
                    print(f"   {caller.name}: {e}")

        match await policy.stats(admin):
            case Ok(stats):
                print(f"\n   Revenue so far: {stats.total_revenue} over {stats.total_orders} orders")
            case Error(e):
                print(f"\n   Stats unavailable: {e}")


if __name__ == "__main__":
    run(main)
