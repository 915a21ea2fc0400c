from __future__ import annotations

from enum import Enum


class DeliveryStatus(str, Enum):
    """Outcome of one delivery item or attendance entry."""

    DELIVERED = "Delivered"
    ABSENT = "Absent"


class DeliveryShift(str, Enum):
    """Delivery window a customer is served in."""

    MORNING = "Morning"
    EVENING = "Evening"


class MemberShift(str, Enum):
    """Shift a delivery member works."""

    MORNING = "Morning"
    EVENING = "Evening"
    BOTH = "Both"


class MessageChannel(str, Enum):
    SMS = "SMS"
    WHATSAPP = "WhatsApp"


class MessageStatus(str, Enum):
    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"
