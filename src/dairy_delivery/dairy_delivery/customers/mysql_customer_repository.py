from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json, translate_duplicate_key
from .model import Customer, Subscription
from .repository import CustomerRepository

_COLUMNS = "id, name, address, mobile, subscriptions, join_date, is_active, assigned_to, delivery_shift"


def _row_to_customer(r: dict) -> Customer:
    return Customer(
        id=r["id"],
        name=r["name"],
        address=r["address"],
        mobile=r["mobile"],
        join_date=r["join_date"],
        subscriptions=tuple(
            Subscription(product=s["product"], quantity=float(s["quantity"]))
            for s in load_json(r.get("subscriptions"), [])
        ),
        is_active=bool(r.get("is_active", True)),
        assigned_to=r.get("assigned_to"),
        delivery_shift=tuple(load_json(r.get("delivery_shift"), ["Morning"])),
    )


def _params(c: Customer) -> tuple:
    return (
        c.name,
        c.address,
        c.mobile,
        dump_json([s.to_dict() for s in c.subscriptions]),
        c.join_date,
        int(c.is_active),
        c.assigned_to,
        dump_json(list(c.delivery_shift)),
    )


class MySQLCustomerRepository(CustomerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Customer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM customers ORDER BY id")
            return [_row_to_customer(r) for r in fetchall(cur)]

    def get_by_id(self, customer_id: str) -> Optional[Customer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM customers WHERE id=%s", (customer_id,))
            r = fetchone(cur)
            return _row_to_customer(r) if r else None

    def list_active_for_member(self, member_id: str) -> Sequence[Customer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM customers WHERE assigned_to=%s AND is_active=1 ORDER BY id",
                (member_id,),
            )
            return [_row_to_customer(r) for r in fetchall(cur)]

    def create(self, customer: Customer) -> None:
        with translate_duplicate_key(
            f"Customer {customer.id} already exists", lookup=lambda: self.get_by_id(customer.id)
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO customers(id, name, address, mobile, subscriptions, join_date,
                                          is_active, assigned_to, delivery_shift)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (customer.id, *_params(customer)),
                )

    def update(self, customer: Customer) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE customers
                SET name=%s, address=%s, mobile=%s, subscriptions=%s, join_date=%s,
                    is_active=%s, assigned_to=%s, delivery_shift=%s
                WHERE id=%s
                """,
                (*_params(customer), customer.id),
            )
            # rowcount is 0 for an unchanged row too; confirm existence instead
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM customers WHERE id=%s", (customer.id,))
            return fetchone(cur) is not None

    def upsert(self, customer: Customer) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO customers(id, name, address, mobile, subscriptions, join_date,
                                      is_active, assigned_to, delivery_shift)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), address=VALUES(address), mobile=VALUES(mobile),
                    subscriptions=VALUES(subscriptions), join_date=VALUES(join_date),
                    is_active=VALUES(is_active), assigned_to=VALUES(assigned_to),
                    delivery_shift=VALUES(delivery_shift)
                """,
                (customer.id, *_params(customer)),
            )
