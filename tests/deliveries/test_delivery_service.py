from __future__ import annotations

import pytest

from src.dairy_delivery.dairy_delivery.core.enums import DeliveryStatus
from src.dairy_delivery.dairy_delivery.core.exceptions import NotFoundError, ValidationError
from src.dairy_delivery.dairy_delivery.customers.memory_customer_repository import MemoryCustomerRepository
from src.dairy_delivery.dairy_delivery.customers.model import Customer
from src.dairy_delivery.dairy_delivery.deliveries.memory_delivery_repository import MemoryDeliveryRepository
from src.dairy_delivery.dairy_delivery.deliveries.service import DeliveryService


def _record(date="2026-03-05", customer_id="1", qty=2, status="Delivered", **extra):
    payload = {
        "date": date,
        "customerId": customer_id,
        "items": [{"product": "Milk", "quantity": qty, "status": status, "priceCheck": 58}],
    }
    payload.update(extra)
    return payload


@pytest.fixture
def service():
    customers = MemoryCustomerRepository()
    customers.upsert(Customer(id="1", name="Rajesh", address="a", mobile="m", join_date="2026-01-01"))
    return DeliveryService(MemoryDeliveryRepository(), customers)


def test_save_record_derives_id_and_reports_insert_then_update(service):
    record, created = service.save_record(_record())
    assert created is True
    assert record.id == "2026-03-05-1"

    again, created = service.save_record(_record(qty=3))
    assert created is False
    assert again.items[0].quantity == 3
    assert len(service.find_records()) == 1


def test_bulk_save_upserts_by_id(service):
    service.save_record(_record())

    count = service.bulk_save([_record(qty=1), _record(date="2026-03-06", status="Absent")])

    assert count == 2
    records = service.find_records(customer_id="1")
    assert [r.date for r in records] == ["2026-03-05", "2026-03-06"]
    assert records[0].items[0].quantity == 1
    assert records[1].items[0].status == DeliveryStatus.ABSENT


def test_bulk_save_rejects_whole_batch_on_invalid_record(service):
    with pytest.raises(ValidationError):
        service.bulk_save([_record(), _record(status="Lost")])

    assert service.find_records() == []


def test_month_filter_is_zero_indexed_and_wins_over_date(service):
    service.bulk_save([_record(date="2026-02-28"), _record(date="2026-03-01")])

    records = service.find_records(date="2026-02-28", month="2", year="2026")

    assert [r.date for r in records] == ["2026-03-01"]


def test_customer_history(service):
    service.bulk_save([_record(date="2026-02-28"), _record(date="2026-03-01")])

    customer, records = service.customer_history("1", 1, 2026)

    assert customer.name == "Rajesh"
    assert [r.date for r in records] == ["2026-02-28"]
    with pytest.raises(NotFoundError):
        service.customer_history("404", 1, 2026)
