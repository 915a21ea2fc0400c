from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import (
    require_enum,
    require_int,
    require_iso_date,
    require_list,
    require_mapping,
    require_non_empty,
    require_number,
)
from ..core.constants import DEFAULT_MILK_PRICE, DEFAULT_SHIFT, MILK
from ..core.enums import DeliveryShift, DeliveryStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..customers.repository import CustomerRepository
from ..members.repository import MemberRepository
from ..prices.service import PriceService
from .model import AttendanceEntry, AttendanceRecord, AttendanceSheet
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceFilter:
    """Query filters shared by the history and admin views.

    ``month`` is one-indexed here, the way the attendance screens send it.
    Precedence: date, then year+month, then year, then start/end range.
    """

    date: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    customer_name: Optional[str] = None
    delivery_person_id: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "AttendanceFilter":
        month = args.get("month")
        year = args.get("year")
        return cls(
            date=args.get("date") or None,
            month=require_int(month, "month") if month else None,
            year=require_int(year, "year") if year else None,
            start_date=args.get("startDate") or None,
            end_date=args.get("endDate") or None,
            customer_name=args.get("customerName") or None,
            delivery_person_id=args.get("deliveryPersonId") or None,
        )

    def query_kwargs(self) -> dict:
        if self.date:
            return {"date": self.date}
        if self.year and self.month:
            return {"date_prefix": f"{self.year:04d}-{self.month:02d}"}
        if self.year:
            return {"date_prefix": f"{self.year:04d}"}
        if self.start_date and self.end_date:
            return {"start_date": self.start_date, "end_date": self.end_date}
        return {}


def _parse_entry(raw: Any, index: int) -> AttendanceEntry:
    label = f"entries[{index}]"
    raw = require_mapping(raw, label)
    shifts = raw.get("deliveryShift") or [DEFAULT_SHIFT]
    return AttendanceEntry(
        customer_id=require_non_empty(
            str(raw["customerId"]) if raw.get("customerId") is not None else None, f"{label}.customerId"
        ),
        customer_name=require_non_empty(raw.get("customerName"), f"{label}.customerName"),
        fixed_quantity=require_number(raw.get("fixedQuantity"), f"{label}.fixedQuantity", min_value=0),
        delivered_quantity=require_number(raw.get("deliveredQuantity"), f"{label}.deliveredQuantity", min_value=0),
        status=require_enum(raw.get("status"), DeliveryStatus, f"{label}.status"),
        price_per_liter=require_number(raw.get("pricePerLiter"), f"{label}.pricePerLiter", min_value=0),
        delivery_shift=tuple(
            require_enum(s, DeliveryShift, f"{label}.deliveryShift").value for s in require_list(shifts, f"{label}.deliveryShift")
        ),
    )


class AttendanceService:
    """Use case: daily delivery sheets, submitted once per person and date."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        customers: CustomerRepository,
        prices: PriceService,
        *,
        default_milk_price: float = DEFAULT_MILK_PRICE,
    ):
        self._attendance = attendance
        self._members = members
        self._customers = customers
        self._prices = prices
        self._default_milk_price = float(default_milk_price)

    def _milk_price(self) -> float:
        return self._prices.current_price(MILK, self._default_milk_price)

    def build_sheet(self, delivery_person_id: str, date: str) -> AttendanceSheet:
        member = self._members.get_by_id(delivery_person_id)
        if not member:
            raise NotFoundError("Delivery person not found")

        price = self._milk_price()
        entries = []
        for customer in self._customers.list_active_for_member(delivery_person_id):
            fixed = customer.milk_quantity
            entries.append(
                AttendanceEntry(
                    customer_id=customer.id,
                    customer_name=customer.name,
                    fixed_quantity=fixed,
                    delivered_quantity=fixed,
                    status=DeliveryStatus.DELIVERED,
                    price_per_liter=price,
                    delivery_shift=customer.delivery_shift or (DEFAULT_SHIFT,),
                )
            )

        return AttendanceSheet(
            date=date,
            delivery_person_id=delivery_person_id,
            delivery_person_name=member.name,
            entries=tuple(entries),
            price_per_liter=price,
        )

    def find_submitted(self, delivery_person_id: str, date: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_person_and_date(delivery_person_id, date)

    def submit(self, payload: Mapping[str, Any], *, now: datetime | None = None) -> AttendanceRecord:
        payload = require_mapping(payload, "attendance")
        entries = payload.get("entries")
        if (
            not payload.get("date")
            or not payload.get("deliveryPersonId")
            or not payload.get("deliveryPersonName")
            or not isinstance(entries, list)
        ):
            raise ValidationError("Missing required fields")

        record = AttendanceRecord(
            id=None,
            date=require_iso_date(payload["date"], "date"),
            delivery_person_id=require_non_empty(str(payload["deliveryPersonId"]), "deliveryPersonId"),
            delivery_person_name=require_non_empty(payload["deliveryPersonName"], "deliveryPersonName"),
            entries=tuple(_parse_entry(e, i) for i, e in enumerate(entries)),
            submitted_at=now or now_local(),
        )

        existing = self.find_submitted(record.delivery_person_id, record.date)
        if existing:
            raise ConflictError("Attendance already submitted for this date", existing=existing)

        try:
            stored = self._attendance.create(record)
        except ConflictError as e:
            # lost a race with a concurrent submission
            e.existing = e.existing or self.find_submitted(record.delivery_person_id, record.date)
            raise

        logger.info(
            "Attendance submitted person=%s date=%s entries=%d",
            stored.delivery_person_id,
            stored.date,
            len(stored.entries),
        )
        return stored

    def get(self, attendance_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def history(self, delivery_person_id: str, filters: AttendanceFilter) -> Sequence[AttendanceRecord]:
        records = self._attendance.find(delivery_person_id=delivery_person_id, **filters.query_kwargs())
        return self._filter_by_customer(records, filters.customer_name)

    def admin_view(self, filters: AttendanceFilter) -> Sequence[AttendanceRecord]:
        records = self._attendance.find(delivery_person_id=filters.delivery_person_id, **filters.query_kwargs())
        return self._filter_by_customer(records, filters.customer_name)

    @staticmethod
    def _filter_by_customer(records: Sequence[AttendanceRecord], customer_name: Optional[str]) -> Sequence[AttendanceRecord]:
        if not customer_name:
            return records
        needle = customer_name.casefold()
        out = []
        for record in records:
            entries = tuple(e for e in record.entries if needle in e.customer_name.casefold())
            # days without a matching customer are dropped
            if entries:
                out.append(record.with_entries(entries))
        return out
