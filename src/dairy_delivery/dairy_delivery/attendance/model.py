from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import DeliveryStatus


@dataclass(frozen=True)
class AttendanceEntry:
    """One customer line of a delivery person's daily sheet."""

    customer_id: str
    customer_name: str
    fixed_quantity: float
    delivered_quantity: float
    status: DeliveryStatus
    price_per_liter: float
    delivery_shift: Tuple[str, ...] = ("Morning",)

    @property
    def amount(self) -> float:
        if self.status != DeliveryStatus.DELIVERED:
            return 0.0
        return self.delivered_quantity * self.price_per_liter

    def to_dict(self) -> dict:
        return {
            "customerId": self.customer_id,
            "customerName": self.customer_name,
            "fixedQuantity": self.fixed_quantity,
            "deliveredQuantity": self.delivered_quantity,
            "status": self.status.value,
            "pricePerLiter": self.price_per_liter,
            "deliveryShift": list(self.delivery_shift),
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """A submitted (immutable) daily sheet for one delivery person."""

    id: Optional[str]
    date: str
    delivery_person_id: str
    delivery_person_name: str
    entries: Tuple[AttendanceEntry, ...]
    submitted_at: datetime

    def with_entries(self, entries: Tuple[AttendanceEntry, ...]) -> "AttendanceRecord":
        return replace(self, entries=entries)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "deliveryPersonId": self.delivery_person_id,
            "deliveryPersonName": self.delivery_person_name,
            "entries": [e.to_dict() for e in self.entries],
            "submittedAt": self.submitted_at.isoformat(),
        }


@dataclass(frozen=True)
class AttendanceSheet:
    """Advisory template shown before a sheet is submitted."""

    date: str
    delivery_person_id: str
    delivery_person_name: str
    entries: Tuple[AttendanceEntry, ...]
    price_per_liter: float

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "deliveryPersonId": self.delivery_person_id,
            "deliveryPersonName": self.delivery_person_name,
            "entries": [e.to_dict() for e in self.entries],
            "pricePerLiter": self.price_per_liter,
        }
