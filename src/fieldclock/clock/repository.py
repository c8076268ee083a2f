from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .model import LocationSample, RawEvent


class ClockEntryRepository(Protocol):
    def list_for_user(self, user_id: Any, *, start: datetime, end: datetime) -> Sequence[RawEvent]:
        raise NotImplementedError

    def list_for_company(
        self,
        company_id: Any,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[Any] = None,
    ) -> Sequence[RawEvent]:
        """Admin listing across every user of a company (optionally one user)."""

        raise NotImplementedError


class LocationLogRepository(Protocol):
    def list_for_user(self, user_id: Any, *, start: datetime, end: datetime) -> Sequence[LocationSample]:
        raise NotImplementedError
