from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..attendance.model import WeekData
from ..clock.model import RawEvent
from ..common.datetime_utils import format_date_long, format_date_short, local_date
from ..core.constants import EMPTY_CELL, IN_PROGRESS_LABEL, MS_PER_HOUR, TOTALS_LABEL, TRAVEL_LABEL
from ..travel.model import TravelSegment
from .calculator.base import PayrollCalculator
from .formatting import format_hours_decimal


@dataclass(frozen=True)
class TimecardSummary:
    total_hours: float
    regular_hours: float
    overtime_hours: float
    travel_hours: float


@dataclass(frozen=True)
class Timecard:
    period: str
    header: List[str]
    rows: List[List[str]]
    summary: TimecardSummary


TIMECARD_HEADER = ["Date", "Project", "Clock In", "Clock Out", "Break (min)", "Hours"]


def _project_display(day_events: Sequence[RawEvent], project_names: Optional[Mapping[str, str]]) -> str:
    if not project_names:
        return EMPTY_CELL
    seen: List[str] = []
    for e in day_events:
        if e.project_id and e.project_id not in seen:
            seen.append(e.project_id)
    if not seen:
        return EMPTY_CELL
    return ", ".join(project_names.get(pid, "Unknown") for pid in seen)


def build_timecard(
    week: WeekData,
    events: Iterable[RawEvent],
    travel: Iterable[TravelSegment],
    *,
    tz: tzinfo,
    calculator: PayrollCalculator,
    project_names: Optional[Mapping[str, str]] = None,
) -> Timecard:
    """Sign-ready weekly timecard: a work row per day plus travel rows.

    ``events`` must already be normalized.
    """
    events_by_day: Dict[date, List[RawEvent]] = defaultdict(list)
    for e in events:
        events_by_day[local_date(e.timestamp, tz)].append(e)

    travel = list(travel)
    travel_ms_by_day: Dict[date, int] = defaultdict(int)
    for seg in travel:
        travel_ms_by_day[local_date(seg.start_time, tz)] += seg.duration_ms

    rows: List[List[str]] = []
    for day in week.days:
        clock_out = IN_PROGRESS_LABEL if day.in_progress else (day.clock_out or EMPTY_CELL)
        rows.append(
            [
                format_date_short(day.date),
                _project_display(events_by_day.get(day.date, []), project_names),
                day.clock_in or EMPTY_CELL,
                clock_out,
                str(day.break_minutes) if day.break_minutes > 0 else EMPTY_CELL,
                format_hours_decimal(day.total_hours),
            ]
        )
        day_travel_ms = travel_ms_by_day.get(day.date, 0)
        if day_travel_ms:
            rows.append(["", TRAVEL_LABEL, "", "", "", format_hours_decimal(day_travel_ms / MS_PER_HOUR)])

    travel_ms = sum(seg.duration_ms for seg in travel)
    split = calculator.split(week.week_total_ms)
    rows.append([TOTALS_LABEL, "", "", "", "", format_hours_decimal((week.week_total_ms + travel_ms) / MS_PER_HOUR)])

    first, last = week.days[0].date, week.days[-1].date
    return Timecard(
        period=f"{format_date_long(first)} - {format_date_long(last)}",
        header=list(TIMECARD_HEADER),
        rows=rows,
        summary=TimecardSummary(
            total_hours=week.week_total,
            regular_hours=split.regular,
            overtime_hours=split.overtime,
            travel_hours=travel_ms / MS_PER_HOUR,
        ),
    )
