from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional, Tuple

from ..clock.model import LocationSample, RawEvent
from ..clock.normalizer import normalize_events
from ..clock.repository import ClockEntryRepository, LocationLogRepository
from ..common.datetime_utils import now_utc, parse_timestamp
from ..core.constants import DEFAULT_LOOKBACK_HOURS
from ..travel.model import TravelSegment
from ..travel.service import TravelInferencer
from .engine import ReconciliationEngine
from .model import ReportingWindow, WeekData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimesheetReport:
    """Read-model for one user and one window (served as JSON/CSV/timecard)."""

    user_id: Any
    window: ReportingWindow
    week: WeekData
    travel: Tuple[TravelSegment, ...]
    events: Tuple[RawEvent, ...]
    generated_at: datetime


class TimesheetService:
    def __init__(
        self,
        clock_entries: Optional[ClockEntryRepository] = None,
        location_logs: Optional[LocationLogRepository] = None,
        *,
        engine: Optional[ReconciliationEngine] = None,
        travel: Optional[TravelInferencer] = None,
        lookback_hours: int = DEFAULT_LOOKBACK_HOURS,
    ):
        self._clock_entries = clock_entries
        self._location_logs = location_logs
        self._engine = engine or ReconciliationEngine()
        self._travel = travel or TravelInferencer()
        self._lookback_hours = int(lookback_hours)

    def reconcile(
        self,
        events: Iterable[RawEvent],
        window: ReportingWindow,
        samples: Optional[Iterable[LocationSample]] = None,
        *,
        user_id: Any = None,
        now: Optional[datetime] = None,
    ) -> TimesheetReport:
        """Pure transform: raw events (+ optional telemetry) -> report."""
        now = parse_timestamp(now) if now is not None else now_utc()
        ordered = normalize_events(events)
        week = self._engine.run(ordered, window, now=now, presorted=True).week
        travel = [
            seg for seg in self._travel.infer(ordered, samples) if window.start <= seg.start_time < window.end
        ]

        return TimesheetReport(
            user_id=user_id,
            window=window,
            week=week,
            travel=tuple(travel),
            events=tuple(ordered),
            generated_at=now,
        )

    def build_report(self, user_id: Any, window: ReportingWindow, *, now: Optional[datetime] = None) -> TimesheetReport:
        """Fetch a user's entries and telemetry, then reconcile them."""
        if self._clock_entries is None:
            raise RuntimeError("TimesheetService has no clock entry repository")

        # Pad both ends so shifts crossing either window edge pair with their
        # real counterpart before clamping.
        margin = timedelta(hours=self._lookback_hours)
        fetch_start, fetch_end = window.start - margin, window.end + margin
        events = self._clock_entries.list_for_user(user_id, start=fetch_start, end=fetch_end)
        samples = ()
        if self._location_logs is not None:
            samples = self._location_logs.list_for_user(user_id, start=fetch_start, end=fetch_end)

        report = self.reconcile(events, window, samples, user_id=user_id, now=now)
        logger.info(
            "timesheet user=%s %s..%s events=%d week_total=%.2fh travel=%d",
            user_id,
            window.start_date,
            window.end_date,
            len(report.events),
            report.week.week_total,
            len(report.travel),
        )
        return report
