from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import month_prefix
from ..common.validators import (
    optional_str,
    require_enum,
    require_iso_date,
    require_list,
    require_mapping,
    require_non_empty,
    require_number,
    resolve_month,
)
from ..core.enums import DeliveryStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..customers.model import Customer
from ..customers.repository import CustomerRepository
from .model import DeliveryItem, DeliveryRecord
from .repository import DeliveryRepository

logger = logging.getLogger(__name__)


def record_id_for(date: str, customer_id: str) -> str:
    return f"{date}-{customer_id}"


def parse_delivery_record(payload: Any, label: str = "record") -> DeliveryRecord:
    payload = require_mapping(payload, label)
    date = require_iso_date(payload.get("date"), f"{label}.date")
    customer_id = require_non_empty(
        str(payload["customerId"]) if payload.get("customerId") is not None else None,
        f"{label}.customerId",
    )

    items = []
    for i, raw in enumerate(require_list(payload.get("items", []), f"{label}.items")):
        raw = require_mapping(raw, f"{label}.items[{i}]")
        items.append(
            DeliveryItem(
                product=require_non_empty(raw.get("product"), f"{label}.items[{i}].product"),
                quantity=require_number(raw.get("quantity"), f"{label}.items[{i}].quantity", min_value=0),
                status=require_enum(raw.get("status"), DeliveryStatus, f"{label}.items[{i}].status"),
                price_check=require_number(raw.get("priceCheck") or 0, f"{label}.items[{i}].priceCheck", min_value=0),
            )
        )

    return DeliveryRecord(
        id=optional_str(payload.get("id"), f"{label}.id") or record_id_for(date, customer_id),
        date=date,
        customer_id=customer_id,
        items=tuple(items),
    )


class DeliveryService:
    """Use case: record daily deliveries and query them back."""

    def __init__(self, deliveries: DeliveryRepository, customers: CustomerRepository):
        self._deliveries = deliveries
        self._customers = customers

    def find_records(
        self,
        *,
        date: Optional[str] = None,
        customer_id: Optional[str] = None,
        month: Any = None,
        year: Any = None,
    ) -> Sequence[DeliveryRecord]:
        prefix = None
        if month is not None and year is not None:
            prefix = month_prefix(*resolve_month(month, year))
            # a month filter replaces an exact date
            date = None
        return self._deliveries.find(date=date or None, customer_id=customer_id or None, date_prefix=prefix)

    def save_record(self, payload: Mapping[str, Any]) -> Tuple[DeliveryRecord, bool]:
        """Insert a record, falling back to an update when its id exists.

        Returns the record and whether it was created.
        """

        record = parse_delivery_record(payload)
        try:
            self._deliveries.create(record)
            logger.info("Saved delivery record %s", record.id)
            return record, True
        except ConflictError:
            if not self._deliveries.update(record):
                # deleted between the two calls; store it fresh
                self._deliveries.upsert(record)
            logger.info("Updated delivery record %s", record.id)
            return record, False

    def bulk_save(self, payload: Any) -> int:
        """Upsert every record by id.

        The batch is validated up front; writes then go record by record, so a
        store failure mid-batch leaves the earlier records applied.
        """

        raw_records = require_list(payload, "records")
        records = [parse_delivery_record(r, f"records[{i}]") for i, r in enumerate(raw_records)]
        for record in records:
            self._deliveries.upsert(record)
        logger.info("Bulk saved %d delivery records", len(records))
        return len(records)

    def customer_history(self, customer_id: str, month: Any = None, year: Any = None) -> Tuple[Customer, Sequence[DeliveryRecord]]:
        customer = self._customers.get_by_id(customer_id)
        if not customer:
            raise NotFoundError("Customer not found")
        prefix = month_prefix(*resolve_month(month, year))
        return customer, self._deliveries.find(customer_id=customer_id, date_prefix=prefix)
