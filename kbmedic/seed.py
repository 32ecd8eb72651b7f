"""
Schema migration and sample data for a fresh storefront database.

Safe to run repeatedly: users are matched by email and products are only
seeded into an empty catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func, select

from kbmedic.db import Database, ProductTable, UserTable
from kbmedic.domain import Role
from kbmedic.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SeedUser:
    name: str
    email: str
    role: Role
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True, slots=True)
class SeedProduct:
    name: str
    price: Decimal
    old_price: Decimal | None
    description: str


@dataclass(frozen=True, slots=True)
class SeedReport:
    users_created: int
    products_created: int


SEED_USERS = (
    SeedUser("Admin", "admin@pharmacy.com", Role.ADMIN),
    SeedUser(
        "Demo Customer",
        "customer@pharmacy.com",
        Role.CUSTOMER,
        phone="0550000000",
        address="Algiers",
    ),
)

SEED_PRODUCTS = (
    SeedProduct("باراسيتامول 500mg", Decimal("250"), Decimal("320"), "مسكن للألم وخافض للحرارة"),
    SeedProduct("أوميغا 3", Decimal("1200"), Decimal("1500"), "مكمل غذائي لصحة القلب والدماغ"),
    SeedProduct("كريم ترطيب", Decimal("850"), Decimal("1000"), "كريم ترطيب عميق للبشرة الجافة"),
    SeedProduct("جهاز قياس ضغط", Decimal("2500"), Decimal("3000"), "جهاز قياس ضغط الدم الرقمي"),
    SeedProduct("فيتامين سي", Decimal("750"), Decimal("900"), "فيتامين سي 1000mg لتعزيز المناعة"),
    SeedProduct("إيبوبروفين", Decimal("350"), Decimal("450"), "مضاد للالتهابات والمسكن"),
    SeedProduct("حليب أطفال", Decimal("1800"), Decimal("2100"), "حليب للأطفال من عمر سنة"),
    SeedProduct("معجون أسنان", Decimal("450"), Decimal("550"), "معجون أسنان بالفلورايد"),
)


async def migrate(database: Database) -> SeedReport:
    """Create all tables, then seed users and products that are missing."""
    await database.create_all()
    logger.info("Schema ready")

    async with database.transaction() as session:
        existing = set(
            (await session.execute(select(UserTable.email))).scalars().all()
        )
        new_users = [u for u in SEED_USERS if u.email not in existing]
        session.add_all(
            UserTable(
                name=u.name,
                email=u.email,
                role=u.role.value,
                phone=u.phone,
                address=u.address,
            )
            for u in new_users
        )

        product_count = await session.scalar(select(func.count()).select_from(ProductTable))
        new_products = SEED_PRODUCTS if not product_count else ()
        session.add_all(
            ProductTable(
                name=p.name,
                price=p.price,
                old_price=p.old_price,
                description=p.description,
            )
            for p in new_products
        )

    report = SeedReport(users_created=len(new_users), products_created=len(new_products))
    logger.info(
        "Seeded {} users and {} products",
        report.users_created,
        report.products_created,
    )
    return report


__all__ = ("SEED_USERS", "SEED_PRODUCTS", "SeedReport", "migrate")
