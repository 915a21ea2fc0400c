from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import MemberShift


@dataclass(frozen=True)
class DeliveryMember:
    """Domain entity: a delivery person serving one route."""

    id: str
    name: str
    mobile: str
    route: str = ""
    shift: MemberShift = MemberShift.MORNING
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "mobile": self.mobile,
            "route": self.route,
            "shift": self.shift.value,
            "isActive": self.is_active,
        }
