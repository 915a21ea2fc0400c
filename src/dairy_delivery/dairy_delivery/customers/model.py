from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..core.constants import MILK


@dataclass(frozen=True)
class Subscription:
    """A customer's standing daily order for one product."""

    product: str
    quantity: float

    def to_dict(self) -> dict:
        return {"product": self.product, "quantity": self.quantity}


@dataclass(frozen=True)
class Customer:
    """Domain entity: Customer.

    Note: a plain data object; persistence lives in the repositories.
    """

    id: str
    name: str
    address: str
    mobile: str
    join_date: str
    subscriptions: Tuple[Subscription, ...] = ()
    is_active: bool = True
    assigned_to: Optional[str] = None
    delivery_shift: Tuple[str, ...] = field(default=("Morning",))

    def quantity_for(self, product: str) -> float:
        for sub in self.subscriptions:
            if sub.product == product:
                return sub.quantity
        return 0

    @property
    def milk_quantity(self) -> float:
        return self.quantity_for(MILK)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "mobile": self.mobile,
            "subscriptions": [s.to_dict() for s in self.subscriptions],
            "joinDate": self.join_date,
            "isActive": self.is_active,
            "assignedTo": self.assigned_to,
            "deliveryShift": list(self.delivery_shift),
        }
