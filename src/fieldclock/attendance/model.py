from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional, Tuple

from ..common.datetime_utils import localize_midnight, resolve_timezone
from ..common.validators import require_date_order, require_non_empty
from ..core.constants import MS_PER_HOUR, MS_PER_MINUTE


@dataclass(frozen=True)
class ReportingWindow:
    """Inclusive range of local calendar days in an explicit time zone.

    ``start``/``end`` are the UTC instants bounding the window; ``end`` is
    the local midnight following ``end_date`` and is exclusive.
    """

    start_date: date
    end_date: date
    timezone: str = "UTC"

    def __post_init__(self):
        require_non_empty(self.timezone, "timezone")
        require_date_order(self.start_date, self.end_date)
        resolve_timezone(self.timezone)

    @property
    def tz(self) -> tzinfo:
        return resolve_timezone(self.timezone)

    @property
    def start(self) -> datetime:
        return localize_midnight(self.start_date, self.tz)

    @property
    def end(self) -> datetime:
        return localize_midnight(self.end_date + timedelta(days=1), self.tz)

    def days(self) -> List[date]:
        span = (self.end_date - self.start_date).days
        return [self.start_date + timedelta(days=i) for i in range(span + 1)]


@dataclass(frozen=True)
class Shift:
    """Reconciled clock-in -> clock-out interval.

    ``clock_out`` is None while the shift is still open; its duration then
    runs up to the evaluation instant (or the window end, if earlier).
    """

    clock_in: datetime
    clock_out: Optional[datetime]
    duration_ms: int
    clock_in_str: str
    clock_out_str: Optional[str] = None
    in_progress: bool = False
    project_id: Optional[str] = None

    @property
    def hours(self) -> float:
        return self.duration_ms / MS_PER_HOUR

    @property
    def effective_end(self) -> datetime:
        if self.clock_out is not None:
            return self.clock_out
        return self.clock_in + timedelta(milliseconds=self.duration_ms)


@dataclass(frozen=True)
class Break:
    """Reconciled break interval. Always closed."""

    start: datetime
    end: datetime
    duration_ms: int

    @property
    def minutes(self) -> float:
        return self.duration_ms / MS_PER_MINUTE


@dataclass(frozen=True)
class DayData:
    date: date
    day_name: str
    total_ms: int = 0
    worked_ms: int = 0
    break_ms: int = 0
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    in_progress: bool = False
    shifts: Tuple[Shift, ...] = field(default_factory=tuple)

    @property
    def total_hours(self) -> float:
        return self.total_ms / MS_PER_HOUR

    @property
    def worked_hours(self) -> float:
        return self.worked_ms / MS_PER_HOUR

    @property
    def break_minutes(self) -> int:
        # Half-up rounding of a non-negative duration.
        return (self.break_ms + MS_PER_MINUTE // 2) // MS_PER_MINUTE


@dataclass(frozen=True)
class WeekData:
    days: Tuple[DayData, ...]
    week_total_ms: int

    @property
    def week_total(self) -> float:
        return self.week_total_ms / MS_PER_HOUR

    def day(self, key: date) -> Optional[DayData]:
        for d in self.days:
            if d.date == key:
                return d
        return None
