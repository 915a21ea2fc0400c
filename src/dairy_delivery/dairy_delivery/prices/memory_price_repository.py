from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_base import MemoryCollection
from .model import ProductPrice
from .repository import PriceRepository


class MemoryPriceRepository(PriceRepository):
    def __init__(self):
        self._items: MemoryCollection[ProductPrice] = MemoryCollection(key=lambda p: p.product)

    def list_all(self) -> Sequence[ProductPrice]:
        return sorted(self._items.values(), key=lambda p: p.product)

    def get(self, product: str) -> Optional[ProductPrice]:
        return self._items.get(product)

    def create(self, price: ProductPrice) -> None:
        self._items.insert(price, conflict_message=f"Product {price.product} already exists")

    def delete(self, product: str) -> bool:
        return self._items.delete(product)

    def upsert_many(self, prices: Sequence[ProductPrice]) -> None:
        self._items.upsert_many(prices)
