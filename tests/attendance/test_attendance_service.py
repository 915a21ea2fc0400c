from __future__ import annotations

from datetime import datetime

import pytest

from src.dairy_delivery.dairy_delivery.attendance.memory_attendance_repository import MemoryAttendanceRepository
from src.dairy_delivery.dairy_delivery.attendance.service import AttendanceFilter, AttendanceService
from src.dairy_delivery.dairy_delivery.core.enums import DeliveryStatus
from src.dairy_delivery.dairy_delivery.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.dairy_delivery.dairy_delivery.customers.memory_customer_repository import MemoryCustomerRepository
from src.dairy_delivery.dairy_delivery.customers.model import Customer, Subscription
from src.dairy_delivery.dairy_delivery.members.memory_member_repository import MemoryMemberRepository
from src.dairy_delivery.dairy_delivery.members.model import DeliveryMember
from src.dairy_delivery.dairy_delivery.prices.memory_price_repository import MemoryPriceRepository
from src.dairy_delivery.dairy_delivery.prices.model import ProductPrice
from src.dairy_delivery.dairy_delivery.prices.service import PriceService


@pytest.fixture
def prices():
    return MemoryPriceRepository()


@pytest.fixture
def service(prices):
    members = MemoryMemberRepository()
    members.upsert(DeliveryMember(id="m1", name="Ravi", mobile="1"))
    customers = MemoryCustomerRepository()
    customers.upsert(
        Customer(
            id="1",
            name="Rajesh Kumar",
            address="a",
            mobile="m",
            join_date="2026-01-01",
            subscriptions=(Subscription("Milk", 2), Subscription("Curd", 1)),
            assigned_to="m1",
        )
    )
    customers.upsert(
        Customer(
            id="2",
            name="Priya Sharma",
            address="b",
            mobile="m",
            join_date="2026-01-01",
            subscriptions=(Subscription("Curd", 1),),
            assigned_to="m1",
            delivery_shift=("Morning", "Evening"),
        )
    )
    customers.upsert(
        Customer(id="3", name="Gone", address="c", mobile="m", join_date="2026-01-01", assigned_to="m1", is_active=False)
    )
    return AttendanceService(MemoryAttendanceRepository(), members, customers, PriceService(prices), default_milk_price=58)


def _submission(date="2026-03-02", delivered=2, name="Rajesh Kumar"):
    return {
        "date": date,
        "deliveryPersonId": "m1",
        "deliveryPersonName": "Ravi",
        "entries": [
            {
                "customerId": "1",
                "customerName": name,
                "fixedQuantity": 2,
                "deliveredQuantity": delivered,
                "status": "Delivered",
                "pricePerLiter": 58,
                "deliveryShift": ["Morning"],
            }
        ],
    }


def test_sheet_lists_active_customers_with_milk_quantity(service):
    sheet = service.build_sheet("m1", "2026-03-02")

    assert [e.customer_id for e in sheet.entries] == ["1", "2"]
    assert sheet.entries[0].fixed_quantity == 2
    assert sheet.entries[0].delivered_quantity == 2
    assert sheet.entries[0].status == DeliveryStatus.DELIVERED
    assert sheet.entries[1].fixed_quantity == 0
    assert sheet.entries[1].delivery_shift == ("Morning", "Evening")
    assert sheet.price_per_liter == 58


def test_sheet_uses_current_milk_price(service, prices):
    prices.upsert_many([ProductPrice("Milk", 60)])

    assert service.build_sheet("m1", "2026-03-02").price_per_liter == 60


def test_sheet_for_unknown_member_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.build_sheet("nobody", "2026-03-02")


def test_second_submission_conflicts_and_keeps_first(service):
    first = service.submit(_submission(), now=datetime(2026, 3, 2, 7, 30))

    with pytest.raises(ConflictError) as exc:
        service.submit(_submission(delivered=1))

    assert exc.value.existing == first
    stored = service.find_submitted("m1", "2026-03-02")
    assert stored.entries[0].delivered_quantity == 2
    assert stored.submitted_at == datetime(2026, 3, 2, 7, 30)
    assert service.get(first.id) == first


def test_submit_requires_header_fields(service):
    payload = _submission()
    del payload["deliveryPersonName"]

    with pytest.raises(ValidationError, match="Missing required fields"):
        service.submit(payload)


def test_get_unknown_record_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.get("42")


def test_history_filters_by_one_indexed_month_and_customer_name(service):
    service.submit(_submission(date="2026-02-27"))
    service.submit(_submission(date="2026-03-01"))
    service.submit(_submission(date="2026-03-02", name="Rajesh K"))

    march = service.history("m1", AttendanceFilter(month=3, year=2026))
    assert [r.date for r in march] == ["2026-03-02", "2026-03-01"]

    by_name = service.history("m1", AttendanceFilter(customer_name="KUMAR"))
    assert [r.date for r in by_name] == ["2026-03-01", "2026-02-27"]

    ranged = service.admin_view(AttendanceFilter(start_date="2026-02-28", end_date="2026-03-01"))
    assert [r.date for r in ranged] == ["2026-03-01"]


def test_filter_precedence_date_first():
    f = AttendanceFilter.from_args({"date": "2026-03-01", "month": "3", "year": "2026", "startDate": "2026-01-01"})

    assert f.query_kwargs() == {"date": "2026-03-01"}
    assert AttendanceFilter.from_args({"year": "2026"}).query_kwargs() == {"date_prefix": "2026"}
    assert AttendanceFilter.from_args({"startDate": "2026-01-01"}).query_kwargs() == {}
