"""Demo data: two routes, the standard price list and a couple of customers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.enums import MemberShift
from ..customers.model import Customer, Subscription
from ..members.model import DeliveryMember
from ..prices.model import ProductPrice

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

DEMO_MEMBERS = (
    DeliveryMember(id="m1", name="Ramesh (Route A)", mobile="9800011122", route="North Extension"),
    DeliveryMember(
        id="m2", name="Suresh (Route B)", mobile="9800033344", route="South Garden", shift=MemberShift.BOTH
    ),
)

DEMO_PRICES = (
    ProductPrice(product="Milk", price=58),
    ProductPrice(product="Curd", price=60),
    ProductPrice(product="Ghee", price=650),
    ProductPrice(product="Paneer", price=450),
    ProductPrice(product="ButterMilk", price=20),
)

DEMO_CUSTOMERS = (
    Customer(
        id="1",
        name="Rajesh Kumar",
        address="123, Gandhi Nagar, 2nd Cross",
        mobile="9876543210",
        join_date="2025-12-01",
        subscriptions=(Subscription("Milk", 2), Subscription("Curd", 1)),
        assigned_to="m1",
    ),
    Customer(
        id="2",
        name="Priya Sharma",
        address="Flat 402, Sunshine Apts",
        mobile="9123456780",
        join_date="2026-01-05",
        subscriptions=(Subscription("Milk", 1),),
        assigned_to="m2",
        delivery_shift=("Morning", "Evening"),
    ),
)


def seed_demo_data(container: "Container") -> None:
    """Upsert the demo rows; running it twice leaves one copy of each."""

    for member in DEMO_MEMBERS:
        container.members_repo.upsert(member)
    container.prices_repo.upsert_many(DEMO_PRICES)
    for customer in DEMO_CUSTOMERS:
        container.customers_repo.upsert(customer)

    logger.info(
        "Seeded %d members, %d prices, %d customers",
        len(DEMO_MEMBERS),
        len(DEMO_PRICES),
        len(DEMO_CUSTOMERS),
    )
