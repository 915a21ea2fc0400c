from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Customer


class CustomerRepository(Protocol):
    """Repository interface for Customer.

    Note: services depend on this protocol, not on a concrete store.
    """

    def list_all(self) -> Sequence[Customer]:
        raise NotImplementedError

    def get_by_id(self, customer_id: str) -> Optional[Customer]:
        raise NotImplementedError

    def list_active_for_member(self, member_id: str) -> Sequence[Customer]:
        raise NotImplementedError

    def create(self, customer: Customer) -> None:
        """Insert; raises ConflictError when the id is taken."""

        raise NotImplementedError

    def update(self, customer: Customer) -> bool:
        raise NotImplementedError

    def upsert(self, customer: Customer) -> None:
        raise NotImplementedError
