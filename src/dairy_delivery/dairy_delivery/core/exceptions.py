from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a record addressed by its business id does not exist."""


class ConflictError(DomainError):
    """Raised when a write collides with a unique key.

    ``existing`` optionally carries the record already holding the key.
    """

    def __init__(self, message: str, *, existing: Optional[Any] = None):
        super().__init__(message)
        self.existing = existing
