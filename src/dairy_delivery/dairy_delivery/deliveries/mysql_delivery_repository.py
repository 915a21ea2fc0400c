from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import DeliveryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json, translate_duplicate_key
from .model import DeliveryItem, DeliveryRecord
from .repository import DeliveryRepository


def _row_to_record(r: dict) -> DeliveryRecord:
    return DeliveryRecord(
        id=r["id"],
        date=r["date"],
        customer_id=r["customer_id"],
        items=tuple(
            DeliveryItem(
                product=i["product"],
                quantity=float(i["quantity"]),
                status=DeliveryStatus(i["status"]),
                price_check=float(i.get("priceCheck") or 0),
            )
            for i in load_json(r.get("items"), [])
        ),
    )


def _items_json(record: DeliveryRecord) -> str:
    return dump_json([i.to_dict() for i in record.items])


class MySQLDeliveryRepository(DeliveryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find(
        self,
        *,
        date: Optional[str] = None,
        customer_id: Optional[str] = None,
        date_prefix: Optional[str] = None,
    ) -> Sequence[DeliveryRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if date is not None:
            clauses.append("date=%s")
            params.append(date)
        if date_prefix is not None:
            clauses.append("date LIKE %s")
            params.append(f"{date_prefix}%")
        if customer_id is not None:
            clauses.append("customer_id=%s")
            params.append(customer_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, date, customer_id, items
                FROM delivery_records
                {where}
                ORDER BY date ASC, customer_id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: str) -> Optional[DeliveryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, date, customer_id, items FROM delivery_records WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, record: DeliveryRecord) -> None:
        with translate_duplicate_key(
            f"Delivery record {record.id} already exists", lookup=lambda: self.get_by_id(record.id)
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO delivery_records(id, date, customer_id, items) VALUES(%s,%s,%s,%s)",
                    (record.id, record.date, record.customer_id, _items_json(record)),
                )

    def update(self, record: DeliveryRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE delivery_records SET date=%s, customer_id=%s, items=%s WHERE id=%s",
                (record.date, record.customer_id, _items_json(record), record.id),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM delivery_records WHERE id=%s", (record.id,))
            return fetchone(cur) is not None

    def upsert(self, record: DeliveryRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO delivery_records(id, date, customer_id, items) VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE date=VALUES(date), customer_id=VALUES(customer_id), items=VALUES(items)
                """,
                (record.id, record.date, record.customer_id, _items_json(record)),
            )
