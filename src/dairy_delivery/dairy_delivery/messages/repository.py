from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import MessageLog


class MessageLogRepository(Protocol):
    def create(self, log: MessageLog) -> None:
        raise NotImplementedError

    def find(self, *, month: int, year: int, customer_id: Optional[str] = None) -> Sequence[MessageLog]:
        raise NotImplementedError
