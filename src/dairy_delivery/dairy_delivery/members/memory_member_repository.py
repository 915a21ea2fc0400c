from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_base import MemoryCollection
from .model import DeliveryMember
from .repository import MemberRepository


class MemoryMemberRepository(MemberRepository):
    def __init__(self):
        self._items: MemoryCollection[DeliveryMember] = MemoryCollection(key=lambda m: m.id)

    def list_all(self) -> Sequence[DeliveryMember]:
        return sorted(self._items.values(), key=lambda m: m.id)

    def get_by_id(self, member_id: str) -> Optional[DeliveryMember]:
        return self._items.get(member_id)

    def create(self, member: DeliveryMember) -> None:
        self._items.insert(member, conflict_message=f"Member {member.id} already exists")

    def update(self, member: DeliveryMember) -> bool:
        return self._items.replace(member)

    def upsert(self, member: DeliveryMember) -> None:
        self._items.upsert(member)
