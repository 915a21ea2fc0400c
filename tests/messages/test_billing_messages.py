from __future__ import annotations

import pytest

from src.dairy_delivery.dairy_delivery.container import build_container
from src.dairy_delivery.dairy_delivery.core.enums import MessageChannel, MessageStatus
from src.dairy_delivery.dairy_delivery.core.exceptions import NotFoundError, ValidationError
from src.dairy_delivery.dairy_delivery.database.seed import seed_demo_data
from src.dairy_delivery.dairy_delivery.messages.sender import SimulatedSender
from src.dairy_delivery.dairy_delivery.messages.service import generate_bill_message


class RecordingSender:
    def __init__(self, fail_for=()):
        self.sent = []
        self._fail_for = set(fail_for)

    def send(self, customer_id, channel, message):
        self.sent.append((customer_id, channel, message))
        return customer_id not in self._fail_for


@pytest.fixture
def sender():
    return RecordingSender(fail_for={"2"})


@pytest.fixture
def container(sender):
    c = build_container(backend="memory", sender=sender)
    seed_demo_data(c)
    c.delivery_service.save_record(
        {
            "date": "2026-03-05",
            "customerId": "1",
            "items": [{"product": "Milk", "quantity": 2, "status": "Delivered", "priceCheck": 58}],
        }
    )
    return c


def test_bill_message_text():
    text = generate_bill_message("Rajesh", "March 2026", 2, 116)

    assert text == "Hello Rajesh,\nMilk Bill for March 2026\n\nTotal Milk: 2.00 L\nAmount: ₹116.00\n\nThank you,\nAgaram Milk"


def test_one_log_per_customer_and_channel(container, sender):
    logs = container.message_service.send_bills({"month": 2, "year": 2026, "channels": ["SMS", "WhatsApp"]})

    assert len(logs) == 4
    assert {(log.customer_id, log.channel) for log in logs} == {
        ("1", MessageChannel.SMS),
        ("1", MessageChannel.WHATSAPP),
        ("2", MessageChannel.SMS),
        ("2", MessageChannel.WHATSAPP),
    }
    assert {log.status for log in logs if log.customer_id == "2"} == {MessageStatus.FAILED}
    assert "Amount: ₹116.00" in sender.sent[0][2]
    assert len(container.message_service.list_logs(month=2, year=2026)) == 4
    assert len(container.message_service.list_logs(month=2, year=2026, customer_id="1")) == 2


def test_selected_customers_only(container):
    logs = container.message_service.send_bills({"month": 2, "year": 2026, "customerIds": ["1"]})

    assert [(log.customer_id, log.channel) for log in logs] == [("1", MessageChannel.SMS)]


def test_rejects_unknown_customers_and_empty_channels(container):
    with pytest.raises(NotFoundError):
        container.message_service.send_bills({"month": 2, "year": 2026, "customerIds": ["404"]})
    with pytest.raises(ValidationError):
        container.message_service.send_bills({"month": 2, "year": 2026, "channels": []})
    with pytest.raises(ValidationError):
        container.message_service.send_bills({"month": 12, "year": 2026})


def test_simulated_sender_failure_rate_bounds():
    assert SimulatedSender(failure_rate=0.0).send("1", MessageChannel.SMS, "hi") is True
    assert SimulatedSender(failure_rate=1.0).send("1", MessageChannel.SMS, "hi") is False
    with pytest.raises(ValueError):
        SimulatedSender(failure_rate=1.5)
