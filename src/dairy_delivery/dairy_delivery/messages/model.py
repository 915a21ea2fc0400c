from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import MessageChannel, MessageStatus


@dataclass(frozen=True)
class MessageLog:
    """One bill-notification attempt on one channel.

    ``month`` is zero-indexed, matching the report it was sent from.
    """

    id: str
    customer_id: str
    month: int
    year: int
    channel: MessageChannel
    status: MessageStatus
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customerId": self.customer_id,
            "month": self.month,
            "year": self.year,
            "channel": self.channel.value,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }
