from __future__ import annotations

from datetime import datetime

from src.dairy_delivery.dairy_delivery.attendance.model import AttendanceEntry, AttendanceRecord
from src.dairy_delivery.dairy_delivery.core.enums import DeliveryStatus
from src.dairy_delivery.dairy_delivery.customers.model import Customer, Subscription
from src.dairy_delivery.dairy_delivery.deliveries.model import DeliveryItem, DeliveryRecord
from src.dairy_delivery.dairy_delivery.members.model import DeliveryMember
from src.dairy_delivery.dairy_delivery.reports import aggregation


def _customer(cid: str, name: str, *, assigned_to=None, is_active=True, subs=(("Milk", 1),)) -> Customer:
    return Customer(
        id=cid,
        name=name,
        address="addr",
        mobile="9000000000",
        join_date="2026-01-01",
        subscriptions=tuple(Subscription(p, q) for p, q in subs),
        is_active=is_active,
        assigned_to=assigned_to,
    )


def _record(date: str, cid: str, *items: DeliveryItem) -> DeliveryRecord:
    return DeliveryRecord(id=f"{date}-{cid}", date=date, customer_id=cid, items=tuple(items))


def test_monthly_report_bills_snapshotted_milk_price():
    customers = [_customer("1", "Rajesh")]
    records = [_record("2026-03-05", "1", DeliveryItem("Milk", 2, DeliveryStatus.DELIVERED, 58))]

    report = aggregation.monthly_report(customers, records, {"Milk": 60}, date_prefix="2026-03")

    assert report[0].total_liters == 2
    assert report[0].total_amount == 116
    assert report[0].products["Milk"].cost == 116


def test_absent_items_bill_nothing():
    customers = [_customer("1", "Rajesh")]
    records = [_record("2026-03-05", "1", DeliveryItem("Milk", 2, DeliveryStatus.ABSENT, 58))]

    report = aggregation.monthly_report(customers, records, {"Milk": 58}, date_prefix="2026-03")

    assert report[0].total_amount == 0
    assert report[0].total_liters == 0
    assert report[0].products == {}


def test_missing_price_snapshot_uses_current_price_and_unpriced_is_free():
    customers = [_customer("1", "Rajesh")]
    records = [
        _record(
            "2026-03-06",
            "1",
            DeliveryItem("Curd", 1, DeliveryStatus.DELIVERED),
            DeliveryItem("Honey", 3, DeliveryStatus.DELIVERED),
        )
    ]

    report = aggregation.monthly_report(customers, records, {"Curd": 60}, date_prefix="2026-03")

    assert report[0].products["Curd"].cost == 60
    assert report[0].products["Honey"].quantity == 3
    assert report[0].products["Honey"].cost == 0
    assert report[0].total_amount == 60
    # only milk counts towards liters
    assert report[0].total_liters == 0


def test_customers_without_deliveries_are_listed_with_zero_totals():
    customers = [_customer("1", "Rajesh"), _customer("2", "Priya", is_active=False)]
    records = [
        _record("2026-02-28", "2", DeliveryItem("Milk", 1, DeliveryStatus.DELIVERED, 58)),
        _record("2026-03-01", "999", DeliveryItem("Milk", 5, DeliveryStatus.DELIVERED, 58)),
    ]

    report = aggregation.monthly_report(customers, records, {"Milk": 58}, date_prefix="2026-03")

    assert [r.customer_id for r in report] == ["1", "2"]
    assert all(r.total_amount == 0 for r in report)


def test_revenue_breakdown_groups_by_member_and_product():
    members = [DeliveryMember(id="m1", name="Ravi", mobile="1"), DeliveryMember(id="m2", name="Suresh", mobile="2")]
    customers = [_customer("1", "Rajesh", assigned_to="m1"), _customer("2", "Priya", assigned_to="m1")]
    records = [
        _record("2026-03-01", "1", DeliveryItem("Milk", 2, DeliveryStatus.DELIVERED, 58)),
        _record("2026-03-01", "2", DeliveryItem("Curd", 1, DeliveryStatus.DELIVERED, 60)),
    ]
    report = aggregation.monthly_report(customers, records, {}, date_prefix="2026-03")

    breakdown = aggregation.revenue_breakdown(report, customers, members)

    assert breakdown.total_revenue == 176
    assert breakdown.by_member == [
        {"memberId": "m1", "name": "Ravi", "amount": 176},
        {"memberId": "m2", "name": "Suresh", "amount": 0.0},
    ]
    assert {"product": "Curd", "amount": 60} in breakdown.by_product


def test_product_statistics_lists_standard_products_first():
    customers = [
        _customer("1", "Rajesh", subs=(("Milk", 2), ("ButterMilk", 1))),
        _customer("2", "Priya", subs=(("Milk", 1),), is_active=False),
    ]
    records = [_record("2026-03-01", "1", DeliveryItem("Milk", 2, DeliveryStatus.DELIVERED, 58))]
    report = aggregation.monthly_report(customers, records, {}, date_prefix="2026-03")

    stats = aggregation.product_statistics(report, customers)

    assert [s.product for s in stats] == ["Milk", "Curd", "Ghee", "Paneer", "ButterMilk"]
    milk = stats[0]
    assert milk.daily_quantity == 2
    assert milk.monthly_quantity == 2
    assert milk.monthly_revenue == 116
    assert stats[1].monthly_revenue == 0


def test_attendance_revenue_counts_delivered_entries_in_month():
    def entry(status, qty):
        return AttendanceEntry("1", "Rajesh", 2, qty, status, 58)

    records = [
        AttendanceRecord("1", "2026-03-02", "m1", "Ravi", (entry(DeliveryStatus.DELIVERED, 2), entry(DeliveryStatus.ABSENT, 2)), datetime(2026, 3, 2)),
        AttendanceRecord("2", "2026-02-27", "m1", "Ravi", (entry(DeliveryStatus.DELIVERED, 1),), datetime(2026, 2, 27)),
    ]

    assert aggregation.attendance_revenue(records, "2026-03") == 116
    assert aggregation.attendance_revenue(records) == 174


def test_team_statistics_counts_pending_deliveries():
    members = [DeliveryMember(id="m1", name="Ravi", mobile="1")]
    customers = [
        _customer("1", "Rajesh", assigned_to="m1"),
        _customer("2", "Priya", assigned_to="m1"),
        _customer("3", "Old", assigned_to="m1", is_active=False),
    ]
    day = [_record("2026-03-02", "1", DeliveryItem("Milk", 1, DeliveryStatus.DELIVERED))]
    month = day + [_record("2026-03-01", "2", DeliveryItem("Milk", 1, DeliveryStatus.DELIVERED))]

    stats = aggregation.team_statistics(members, customers, day, month)

    assert stats[0].assigned_customers == 2
    assert stats[0].daily_delivered == 1
    assert stats[0].daily_pending == 1
    assert stats[0].monthly_delivered == 2
