from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate_key
from .model import ProductPrice
from .repository import PriceRepository


class MySQLPriceRepository(PriceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ProductPrice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT product, price FROM prices ORDER BY product")
            return [ProductPrice(product=r["product"], price=float(r["price"])) for r in fetchall(cur)]

    def get(self, product: str) -> Optional[ProductPrice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT product, price FROM prices WHERE product=%s", (product,))
            r = fetchone(cur)
            return ProductPrice(product=r["product"], price=float(r["price"])) if r else None

    def create(self, price: ProductPrice) -> None:
        with translate_duplicate_key(
            f"Product {price.product} already exists", lookup=lambda: self.get(price.product)
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT INTO prices(product, price) VALUES(%s,%s)", (price.product, price.price))

    def delete(self, product: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM prices WHERE product=%s", (product,))
            return cur.rowcount > 0

    def upsert_many(self, prices: Sequence[ProductPrice]) -> None:
        if not prices:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO prices(product, price) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE price=VALUES(price)
                """,
                [(p.product, p.price) for p in prices],
            )
