from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import MS_PER_HOUR


@dataclass(frozen=True)
class TravelSegment:
    """Inferred transit between two projects.

    ``start_time``/``end_time`` are the clock-out and next clock-in;
    ``duration_ms`` only spans the samples that showed movement.
    """

    start_time: datetime
    end_time: datetime
    duration_ms: int
    from_project: Optional[str] = None
    to_project: Optional[str] = None

    @property
    def duration_hours(self) -> float:
        return self.duration_ms / MS_PER_HOUR
