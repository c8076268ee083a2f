from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import EntryMethod, EventType


@dataclass(frozen=True)
class RawEvent:
    """Domain entity: one clock entry as produced by the mobile app.

    ``timestamp`` stays as received until the normalizer parses it; after
    normalization it is always an aware UTC datetime.
    """

    id: Any
    user_id: Any
    type: EventType
    timestamp: Any
    company_id: Any = None
    project_id: Optional[str] = None
    entry_method: EntryMethod = EntryMethod.MANUAL
    clock_in_latitude: Optional[float] = None
    clock_in_longitude: Optional[float] = None
    clock_in_accuracy: Optional[float] = None
    clock_out_latitude: Optional[float] = None
    clock_out_longitude: Optional[float] = None
    clock_out_accuracy: Optional[float] = None
    edited_by: Optional[str] = None
    edit_reason: Optional[str] = None

    @property
    def latitude(self) -> Optional[float]:
        if self.type == EventType.CLOCK_OUT:
            return self.clock_out_latitude
        return self.clock_in_latitude

    @property
    def longitude(self) -> Optional[float]:
        if self.type == EventType.CLOCK_OUT:
            return self.clock_out_longitude
        return self.clock_in_longitude

    @property
    def accuracy(self) -> Optional[float]:
        if self.type == EventType.CLOCK_OUT:
            return self.clock_out_accuracy
        return self.clock_in_accuracy

    @property
    def is_edited(self) -> bool:
        return bool(self.edited_by or self.edit_reason)


@dataclass(frozen=True)
class LocationSample:
    """Location telemetry point recorded while the app tracks the user."""

    timestamp: datetime
    is_moving: bool
    project_id: Optional[str] = None
