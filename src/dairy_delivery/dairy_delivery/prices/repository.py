from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ProductPrice


class PriceRepository(Protocol):
    def list_all(self) -> Sequence[ProductPrice]:
        raise NotImplementedError

    def get(self, product: str) -> Optional[ProductPrice]:
        raise NotImplementedError

    def create(self, price: ProductPrice) -> None:
        raise NotImplementedError

    def delete(self, product: str) -> bool:
        raise NotImplementedError

    def upsert_many(self, prices: Sequence[ProductPrice]) -> None:
        """Upsert each price by product; other products are untouched."""

        raise NotImplementedError
