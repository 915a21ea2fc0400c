from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import MemberShift
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate_key
from .model import DeliveryMember
from .repository import MemberRepository


def _row_to_member(r: dict) -> DeliveryMember:
    return DeliveryMember(
        id=r["id"],
        name=r["name"],
        mobile=r["mobile"],
        route=r.get("route") or "",
        shift=MemberShift(r.get("shift") or MemberShift.MORNING.value),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[DeliveryMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, mobile, route, shift, is_active FROM delivery_members ORDER BY id")
            return [_row_to_member(r) for r in fetchall(cur)]

    def get_by_id(self, member_id: str) -> Optional[DeliveryMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, mobile, route, shift, is_active FROM delivery_members WHERE id=%s",
                (member_id,),
            )
            r = fetchone(cur)
            return _row_to_member(r) if r else None

    def create(self, member: DeliveryMember) -> None:
        with translate_duplicate_key(
            f"Member {member.id} already exists", lookup=lambda: self.get_by_id(member.id)
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO delivery_members(id, name, mobile, route, shift, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (member.id, member.name, member.mobile, member.route, member.shift.value, int(member.is_active)),
                )

    def update(self, member: DeliveryMember) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE delivery_members
                SET name=%s, mobile=%s, route=%s, shift=%s, is_active=%s
                WHERE id=%s
                """,
                (member.name, member.mobile, member.route, member.shift.value, int(member.is_active), member.id),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM delivery_members WHERE id=%s", (member.id,))
            return fetchone(cur) is not None

    def upsert(self, member: DeliveryMember) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO delivery_members(id, name, mobile, route, shift, is_active)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), mobile=VALUES(mobile), route=VALUES(route),
                    shift=VALUES(shift), is_active=VALUES(is_active)
                """,
                (member.id, member.name, member.mobile, member.route, member.shift.value, int(member.is_active)),
            )
