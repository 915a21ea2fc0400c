from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductPrice:
    """Current unit price of one product."""

    product: str
    price: float

    def to_dict(self) -> dict:
        return {"product": self.product, "price": self.price}
