from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Dict, Iterable, List, Mapping, Optional

from ..attendance.model import WeekData
from ..clock.model import RawEvent
from ..common.datetime_utils import format_clock_time, local_date
from ..core.enums import EventType
from ..travel.model import TravelSegment
from .formatting import format_entry_method, format_gps_coordinates, format_hours

_EVENT_LABELS = {
    EventType.CLOCK_IN: "Clock In",
    EventType.CLOCK_OUT: "Clock Out",
    EventType.BREAK_START: "Break Start",
    EventType.BREAK_END: "Break End",
}


@dataclass(frozen=True)
class EntryLine:
    """One clock entry as printed in the detailed (forensic) timecard."""

    time: str
    text: str
    gps_verified: bool
    gps: Optional[str] = None
    entry_method: Optional[str] = None
    edit_trail: Optional[str] = None


@dataclass(frozen=True)
class TravelLine:
    start: str
    duration: str
    from_project: str
    to_project: str


@dataclass(frozen=True)
class DayDetail:
    date: date
    total_hours: float
    entries: List[EntryLine]
    travel: List[TravelLine]


def _entry_line(e: RawEvent, tz: tzinfo, project_names: Mapping[str, str]) -> EntryLine:
    time_str = format_clock_time(e.timestamp, tz)
    verified = e.entry_method.is_gps_verified
    text = f"{time_str} {_EVENT_LABELS[e.type]}"

    gps = method = None
    if e.type in (EventType.CLOCK_IN, EventType.CLOCK_OUT):
        if verified:
            text += " ✓"
        if e.latitude is not None and e.longitude is not None:
            gps = format_gps_coordinates(e.latitude, e.longitude, e.accuracy)
            method = format_entry_method(e.entry_method)
    if e.type == EventType.CLOCK_IN and e.project_id in project_names:
        text += f" - {project_names[e.project_id]}"

    trail = None
    if e.is_edited:
        trail = f"Edited by {e.edited_by or 'unknown'}"
        if e.edit_reason:
            trail += f": {e.edit_reason}"

    return EntryLine(time=time_str, text=text, gps_verified=verified, gps=gps, entry_method=method, edit_trail=trail)


def build_breakdown(
    week: WeekData,
    events: Iterable[RawEvent],
    travel: Iterable[TravelSegment],
    *,
    tz: tzinfo,
    project_names: Optional[Mapping[str, str]] = None,
) -> List[DayDetail]:
    """Per-day entry listing with GPS, entry method, edits and travel.

    Days with no reported hours are left out. ``events`` must already be
    normalized.
    """
    names = dict(project_names or {})
    by_day: Dict[date, List[RawEvent]] = defaultdict(list)
    for e in events:
        by_day[local_date(e.timestamp, tz)].append(e)

    travel_by_day: Dict[date, List[TravelSegment]] = defaultdict(list)
    for seg in travel:
        travel_by_day[local_date(seg.start_time, tz)].append(seg)

    details: List[DayDetail] = []
    for key in sorted(by_day):
        day = week.day(key)
        if day is None or day.total_ms == 0:
            continue
        entries = sorted(by_day[key], key=lambda e: e.timestamp)
        details.append(
            DayDetail(
                date=key,
                total_hours=day.total_hours,
                entries=[_entry_line(e, tz, names) for e in entries],
                travel=[
                    TravelLine(
                        start=format_clock_time(seg.start_time, tz),
                        duration=format_hours(seg.duration_hours),
                        from_project=names.get(seg.from_project, seg.from_project or "Unknown"),
                        to_project=names.get(seg.to_project, seg.to_project or "Unknown"),
                    )
                    for seg in travel_by_day.get(key, [])
                ],
            )
        )
    return details
