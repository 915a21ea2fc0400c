from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import DeliveryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json, translate_duplicate_key
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, date, delivery_person_id, delivery_person_name, entries, submitted_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        date=r["date"],
        delivery_person_id=r["delivery_person_id"],
        delivery_person_name=r["delivery_person_name"],
        entries=tuple(
            AttendanceEntry(
                customer_id=e["customerId"],
                customer_name=e["customerName"],
                fixed_quantity=float(e["fixedQuantity"]),
                delivered_quantity=float(e["deliveredQuantity"]),
                status=DeliveryStatus(e["status"]),
                price_per_liter=float(e["pricePerLiter"]),
                delivery_shift=tuple(e.get("deliveryShift") or ["Morning"]),
            )
            for e in load_json(r.get("entries"), [])
        ),
        submitted_at=r["submitted_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_person_and_date(self, delivery_person_id: str, date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE delivery_person_id=%s AND date=%s",
                (delivery_person_id, date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        if not str(attendance_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        with translate_duplicate_key(
            "Attendance already submitted for this date",
            lookup=lambda: self.get_for_person_and_date(record.delivery_person_id, record.date),
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(date, delivery_person_id, delivery_person_name, entries, submitted_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (
                        record.date,
                        record.delivery_person_id,
                        record.delivery_person_name,
                        dump_json([e.to_dict() for e in record.entries]),
                        record.submitted_at,
                    ),
                )
                return replace(record, id=str(cur.lastrowid))

    def find(
        self,
        *,
        delivery_person_id: Optional[str] = None,
        date: Optional[str] = None,
        date_prefix: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if delivery_person_id is not None:
            clauses.append("delivery_person_id=%s")
            params.append(delivery_person_id)
        if date is not None:
            clauses.append("date=%s")
            params.append(date)
        if date_prefix is not None:
            clauses.append("date LIKE %s")
            params.append(f"{date_prefix}%")
        if start_date is not None:
            clauses.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("date <= %s")
            params.append(end_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                {where}
                ORDER BY date DESC, delivery_person_id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
