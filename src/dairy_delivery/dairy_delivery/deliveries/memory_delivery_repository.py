from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_base import MemoryCollection
from .model import DeliveryRecord
from .repository import DeliveryRepository


class MemoryDeliveryRepository(DeliveryRepository):
    def __init__(self):
        self._items: MemoryCollection[DeliveryRecord] = MemoryCollection(key=lambda r: r.id)

    def find(
        self,
        *,
        date: Optional[str] = None,
        customer_id: Optional[str] = None,
        date_prefix: Optional[str] = None,
    ) -> Sequence[DeliveryRecord]:
        def matches(r: DeliveryRecord) -> bool:
            if date is not None and r.date != date:
                return False
            if date_prefix is not None and not r.date.startswith(date_prefix):
                return False
            if customer_id is not None and r.customer_id != customer_id:
                return False
            return True

        return sorted(self._items.filter(matches), key=lambda r: (r.date, r.customer_id))

    def get_by_id(self, record_id: str) -> Optional[DeliveryRecord]:
        return self._items.get(record_id)

    def create(self, record: DeliveryRecord) -> None:
        self._items.insert(record, conflict_message=f"Delivery record {record.id} already exists")

    def update(self, record: DeliveryRecord) -> bool:
        return self._items.replace(record)

    def upsert(self, record: DeliveryRecord) -> None:
        self._items.upsert(record)
