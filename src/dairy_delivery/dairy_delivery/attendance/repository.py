from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_person_and_date(self, delivery_person_id: str, date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert and return the record with its store id.

        Raises ConflictError when (date, delivery_person_id) is already taken;
        the existing record is never overwritten.
        """

        raise NotImplementedError

    def find(
        self,
        *,
        delivery_person_id: Optional[str] = None,
        date: Optional[str] = None,
        date_prefix: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Matching records ordered by date descending, then person."""

        raise NotImplementedError
