from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import DeliveryMember


class MemberRepository(Protocol):
    def list_all(self) -> Sequence[DeliveryMember]:
        raise NotImplementedError

    def get_by_id(self, member_id: str) -> Optional[DeliveryMember]:
        raise NotImplementedError

    def create(self, member: DeliveryMember) -> None:
        raise NotImplementedError

    def update(self, member: DeliveryMember) -> bool:
        raise NotImplementedError

    def upsert(self, member: DeliveryMember) -> None:
        raise NotImplementedError
