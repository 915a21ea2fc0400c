from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import DeliveryRecord


class DeliveryRepository(Protocol):
    def find(
        self,
        *,
        date: Optional[str] = None,
        customer_id: Optional[str] = None,
        date_prefix: Optional[str] = None,
    ) -> Sequence[DeliveryRecord]:
        """Records matching every given filter, ordered by date then customer."""

        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[DeliveryRecord]:
        raise NotImplementedError

    def create(self, record: DeliveryRecord) -> None:
        raise NotImplementedError

    def update(self, record: DeliveryRecord) -> bool:
        raise NotImplementedError

    def upsert(self, record: DeliveryRecord) -> None:
        raise NotImplementedError
