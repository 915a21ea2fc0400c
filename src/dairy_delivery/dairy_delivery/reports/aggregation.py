"""Billing and statistics aggregation.

Every figure the API reports about money or quantities is computed here, over
records the caller already fetched. The functions are pure: the same inputs
always give the same report, whichever storage backend produced them.

Month filtering is a plain string-prefix match on the stored ``YYYY-MM-DD``
date; a record whose date is formatted differently is silently skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import MILK, STANDARD_PRODUCTS
from ..customers.model import Customer
from ..deliveries.model import DeliveryItem, DeliveryRecord
from ..members.model import DeliveryMember


@dataclass
class ProductTotal:
    quantity: float = 0.0
    cost: float = 0.0

    def to_dict(self) -> dict:
        return {"quantity": self.quantity, "cost": self.cost}


@dataclass
class MonthlyReportItem:
    customer_id: str
    customer_name: str
    products: Dict[str, ProductTotal] = field(default_factory=dict)
    total_amount: float = 0.0
    total_liters: float = 0.0

    def to_dict(self) -> dict:
        return {
            "customerId": self.customer_id,
            "customerName": self.customer_name,
            "products": {name: total.to_dict() for name, total in self.products.items()},
            "totalAmount": self.total_amount,
            "totalLiters": self.total_liters,
        }


@dataclass(frozen=True)
class ProductStats:
    product: str
    daily_quantity: float
    monthly_quantity: float
    monthly_revenue: float

    def to_dict(self) -> dict:
        return {
            "product": self.product,
            "dailyQuantity": self.daily_quantity,
            "monthlyQuantity": self.monthly_quantity,
            "monthlyRevenue": self.monthly_revenue,
        }


@dataclass(frozen=True)
class RevenueBreakdown:
    total_revenue: float
    by_customer: List[dict]
    by_member: List[dict]
    by_product: List[dict]

    def to_dict(self) -> dict:
        return {
            "totalRevenue": self.total_revenue,
            "byCustomer": self.by_customer,
            "byMember": self.by_member,
            "byProduct": self.by_product,
        }


@dataclass(frozen=True)
class TeamMemberStats:
    member: DeliveryMember
    assigned_customers: int
    daily_delivered: int
    daily_pending: int
    monthly_delivered: int

    def to_dict(self) -> dict:
        return {
            "member": self.member.to_dict(),
            "assignedCustomers": self.assigned_customers,
            "dailyDelivered": self.daily_delivered,
            "dailyPending": self.daily_pending,
            "monthlyDelivered": self.monthly_delivered,
        }


def in_month(date: str, date_prefix: str) -> bool:
    return isinstance(date, str) and date.startswith(date_prefix)


def effective_price(item: DeliveryItem, prices: Mapping[str, float]) -> float:
    """Snapshotted price when one was taken, else today's price (0 if unpriced)."""
    if item.price_check:
        return item.price_check
    return prices.get(item.product, 0.0)


def monthly_report(
    customers: Sequence[Customer],
    records: Iterable[DeliveryRecord],
    prices: Mapping[str, float],
    *,
    date_prefix: str,
) -> List[MonthlyReportItem]:
    """Bill every customer for one month.

    Customers without deliveries are listed with zero totals; records of
    unknown customers are ignored.
    """

    report: Dict[str, MonthlyReportItem] = {
        c.id: MonthlyReportItem(customer_id=c.id, customer_name=c.name) for c in customers
    }

    for record in records:
        if not in_month(record.date, date_prefix):
            continue
        item_report = report.get(record.customer_id)
        if item_report is None:
            continue

        for item in record.items:
            if not item.delivered:
                continue
            cost = item.quantity * effective_price(item, prices)
            total = item_report.products.setdefault(item.product, ProductTotal())
            total.quantity += item.quantity
            total.cost += cost
            item_report.total_amount += cost
            if item.product == MILK:
                item_report.total_liters += item.quantity

    return list(report.values())


def product_totals(report: Iterable[MonthlyReportItem]) -> Dict[str, ProductTotal]:
    totals: Dict[str, ProductTotal] = {}
    for item in report:
        for product, data in item.products.items():
            total = totals.setdefault(product, ProductTotal())
            total.quantity += data.quantity
            total.cost += data.cost
    return totals


def member_totals(
    report: Iterable[MonthlyReportItem],
    customers: Sequence[Customer],
    members: Sequence[DeliveryMember],
) -> List[dict]:
    """Revenue per member over the customers currently assigned to them."""

    assigned = {c.id: c.assigned_to for c in customers}
    amounts: Dict[str, float] = {}
    for item in report:
        member_id = assigned.get(item.customer_id)
        if member_id:
            amounts[member_id] = amounts.get(member_id, 0.0) + item.total_amount

    return [{"memberId": m.id, "name": m.name, "amount": amounts.get(m.id, 0.0)} for m in members]


def revenue_breakdown(
    report: Sequence[MonthlyReportItem],
    customers: Sequence[Customer],
    members: Sequence[DeliveryMember],
) -> RevenueBreakdown:
    return RevenueBreakdown(
        total_revenue=sum(item.total_amount for item in report),
        by_customer=[
            {"customerId": item.customer_id, "name": item.customer_name, "amount": item.total_amount}
            for item in report
            if item.total_amount > 0
        ],
        by_member=member_totals(report, customers, members),
        by_product=[{"product": p, "amount": t.cost} for p, t in product_totals(report).items()],
    )


def daily_subscription_totals(customers: Iterable[Customer]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for customer in customers:
        if not customer.is_active:
            continue
        for sub in customer.subscriptions:
            totals[sub.product] = totals.get(sub.product, 0.0) + sub.quantity
    return totals


def product_statistics(report: Sequence[MonthlyReportItem], customers: Sequence[Customer]) -> List[ProductStats]:
    """Standard products first (always listed), then any other product seen."""

    daily = daily_subscription_totals(customers)
    monthly = product_totals(report)

    products = list(STANDARD_PRODUCTS)
    for product in list(daily) + list(monthly):
        if product not in products:
            products.append(product)

    return [
        ProductStats(
            product=product,
            daily_quantity=daily.get(product, 0.0),
            monthly_quantity=monthly[product].quantity if product in monthly else 0.0,
            monthly_revenue=monthly[product].cost if product in monthly else 0.0,
        )
        for product in products
    ]


def attendance_revenue(records: Iterable[AttendanceRecord], date_prefix: Optional[str] = None) -> float:
    """Sum of delivered quantity x price over submitted attendance entries."""
    total = 0.0
    for record in records:
        if date_prefix is not None and not in_month(record.date, date_prefix):
            continue
        total += sum(entry.amount for entry in record.entries)
    return total


def team_statistics(
    members: Sequence[DeliveryMember],
    customers: Sequence[Customer],
    day_records: Iterable[DeliveryRecord],
    month_records: Iterable[DeliveryRecord],
) -> List[TeamMemberStats]:
    assigned = {c.id: c.assigned_to for c in customers}
    day_records = list(day_records)
    month_records = list(month_records)

    out = []
    for member in members:
        active = [c for c in customers if c.assigned_to == member.id and c.is_active]
        delivered_today = sum(1 for r in day_records if assigned.get(r.customer_id) == member.id)
        out.append(
            TeamMemberStats(
                member=member,
                assigned_customers=len(active),
                daily_delivered=delivered_today,
                daily_pending=len(active) - delivered_today,
                monthly_delivered=sum(1 for r in month_records if assigned.get(r.customer_id) == member.id),
            )
        )
    return out


def customers_by_member(members: Sequence[DeliveryMember], customers: Sequence[Customer]) -> List[dict]:
    return [
        {
            "member": member.to_dict(),
            "customers": [c.to_dict() for c in customers if c.assigned_to == member.id and c.is_active],
        }
        for member in members
    ]
