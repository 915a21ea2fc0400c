from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_base import MemoryCollection
from .model import MessageLog
from .repository import MessageLogRepository


class MemoryMessageLogRepository(MessageLogRepository):
    def __init__(self):
        self._items: MemoryCollection[MessageLog] = MemoryCollection(key=lambda m: m.id)

    def create(self, log: MessageLog) -> None:
        self._items.insert(log, conflict_message=f"Message log {log.id} already exists")

    def find(self, *, month: int, year: int, customer_id: Optional[str] = None) -> Sequence[MessageLog]:
        logs = self._items.filter(
            lambda m: m.month == month
            and m.year == year
            and (customer_id is None or m.customer_id == customer_id)
        )
        return sorted(logs, key=lambda m: (m.timestamp, m.id))
