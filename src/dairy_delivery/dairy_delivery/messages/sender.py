from __future__ import annotations

import logging
import random
from typing import Optional, Protocol

from ..core.enums import MessageChannel

logger = logging.getLogger(__name__)


class MessageSender(Protocol):
    def send(self, customer_id: str, channel: MessageChannel, message: str) -> bool:
        raise NotImplementedError


class SimulatedSender(MessageSender):
    """Stand-in for an SMS/WhatsApp gateway; nothing leaves the process.

    Each attempt fails with probability ``failure_rate``.
    """

    def __init__(self, *, failure_rate: float = 0.0, rng: Optional[random.Random] = None):
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self._failure_rate = failure_rate
        self._rng = rng or random.Random()

    def send(self, customer_id: str, channel: MessageChannel, message: str) -> bool:
        ok = self._rng.random() >= self._failure_rate
        logger.info("Simulated %s to customer %s: %s", channel.value, customer_id, "sent" if ok else "failed")
        logger.debug("Message body for %s:\n%s", customer_id, message)
        return ok
