from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Sequence

from ..common.validators import require_list, require_mapping, require_non_empty, require_number
from ..core.exceptions import NotFoundError, ValidationError
from .model import ProductPrice
from .repository import PriceRepository

logger = logging.getLogger(__name__)


def _parse_price(payload: Any, label: str = "price") -> ProductPrice:
    payload = require_mapping(payload, label)
    if not payload.get("product") or payload.get("price") is None:
        raise ValidationError("Product name and price are required")
    return ProductPrice(
        product=require_non_empty(payload["product"], "product"),
        price=require_number(payload["price"], "price", min_value=0),
    )


class PriceService:
    """Use case: maintain the product price list."""

    def __init__(self, prices: PriceRepository):
        self._prices = prices

    def list_prices(self) -> Sequence[ProductPrice]:
        return self._prices.list_all()

    def price_map(self) -> Dict[str, float]:
        return {p.product: p.price for p in self._prices.list_all()}

    def current_price(self, product: str, default: float) -> float:
        found = self._prices.get(product)
        return found.price if found else default

    def add_product(self, payload: Mapping[str, Any]) -> ProductPrice:
        price = _parse_price(payload)
        self._prices.create(price)
        logger.info("Added product %s at %s", price.product, price.price)
        return price

    def delete_product(self, product: str) -> None:
        if not self._prices.delete(product):
            raise NotFoundError("Product not found")
        logger.info("Deleted product %s", product)

    def bulk_update(self, payload: Any) -> Sequence[ProductPrice]:
        items = require_list(payload, "prices")
        prices = [_parse_price(p, f"prices[{i}]") for i, p in enumerate(items)]
        self._prices.upsert_many(prices)
        logger.info("Bulk price update: %s", ", ".join(f"{p.product}={p.price:g}" for p in prices))
        return self._prices.list_all()
