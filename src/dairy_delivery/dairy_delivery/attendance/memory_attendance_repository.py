from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from typing import Optional, Sequence

from ..database.memory_base import MemoryCollection
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        # (date, person) is the unique key; ids are handed out like an auto-increment
        self._items: MemoryCollection[AttendanceRecord] = MemoryCollection(
            key=lambda r: (r.date, r.delivery_person_id)
        )
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()

    def get_for_person_and_date(self, delivery_person_id: str, date: str) -> Optional[AttendanceRecord]:
        return self._items.get((date, delivery_person_id))

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        for record in self._items.values():
            if record.id == str(attendance_id):
                return record
        return None

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._id_lock:
            stored = replace(record, id=str(next(self._ids)))
        self._items.insert(stored, conflict_message="Attendance already submitted for this date")
        return stored

    def find(
        self,
        *,
        delivery_person_id: Optional[str] = None,
        date: Optional[str] = None,
        date_prefix: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        def matches(r: AttendanceRecord) -> bool:
            if delivery_person_id is not None and r.delivery_person_id != delivery_person_id:
                return False
            if date is not None and r.date != date:
                return False
            if date_prefix is not None and not r.date.startswith(date_prefix):
                return False
            if start_date is not None and r.date < start_date:
                return False
            if end_date is not None and r.date > end_date:
                return False
            return True

        records = sorted(self._items.filter(matches), key=lambda r: r.delivery_person_id)
        return sorted(records, key=lambda r: r.date, reverse=True)
