from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.enums import DeliveryStatus


@dataclass(frozen=True)
class DeliveryItem:
    """One product line of a delivery record.

    ``price_check`` snapshots the unit price when the item was recorded;
    0 means no snapshot was taken.
    """

    product: str
    quantity: float
    status: DeliveryStatus
    price_check: float = 0

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED

    def to_dict(self) -> dict:
        return {
            "product": self.product,
            "quantity": self.quantity,
            "status": self.status.value,
            "priceCheck": self.price_check,
        }


@dataclass(frozen=True)
class DeliveryRecord:
    """What was delivered to one customer on one date."""

    id: str
    date: str
    customer_id: str
    items: Tuple[DeliveryItem, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "customerId": self.customer_id,
            "items": [i.to_dict() for i in self.items],
        }
