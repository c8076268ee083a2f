from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ParseError(ValidationError):
    """Raised when a raw event cannot be read (bad timestamp or type).

    Aborts the whole batch; ``event_id`` names the offending entry.
    """

    def __init__(self, message: str, *, event_id: Optional[Any] = None):
        self.event_id = event_id
        if event_id is not None:
            message = f"{message} (event {event_id!r})"
        super().__init__(message)
