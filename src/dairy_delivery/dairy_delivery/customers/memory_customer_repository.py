from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_base import MemoryCollection
from .model import Customer
from .repository import CustomerRepository


class MemoryCustomerRepository(CustomerRepository):
    def __init__(self):
        self._items: MemoryCollection[Customer] = MemoryCollection(key=lambda c: c.id)

    def list_all(self) -> Sequence[Customer]:
        return sorted(self._items.values(), key=lambda c: c.id)

    def get_by_id(self, customer_id: str) -> Optional[Customer]:
        return self._items.get(customer_id)

    def list_active_for_member(self, member_id: str) -> Sequence[Customer]:
        return [c for c in self.list_all() if c.assigned_to == member_id and c.is_active]

    def create(self, customer: Customer) -> None:
        self._items.insert(customer, conflict_message=f"Customer {customer.id} already exists")

    def update(self, customer: Customer) -> bool:
        return self._items.replace(customer)

    def upsert(self, customer: Customer) -> None:
        self._items.upsert(customer)
