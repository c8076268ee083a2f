from __future__ import annotations

import csv
import io
from datetime import datetime, tzinfo
from typing import List, Optional

from ..attendance.model import WeekData
from ..common.datetime_utils import timezone_abbreviation
from ..core.constants import EMPTY_CELL, IN_PROGRESS_LABEL, WEEK_TOTAL_LABEL
from .formatting import format_hours


def export_header(tz: tzinfo, *, at: Optional[datetime] = None) -> List[str]:
    abbrev = timezone_abbreviation(tz, at=at)
    return [
        "Date",
        "Day",
        f"Clock In ({abbrev})",
        f"Clock Out ({abbrev})",
        "Break (min)",
        "Total Hours",
    ]


def export_rows(week: WeekData, tz: tzinfo, *, at: Optional[datetime] = None) -> List[List[str]]:
    """Header, one row per day, then the week total row."""
    rows: List[List[str]] = [export_header(tz, at=at)]
    for day in week.days:
        if day.clock_out:
            clock_out = day.clock_out
        else:
            clock_out = IN_PROGRESS_LABEL if day.in_progress else EMPTY_CELL
        rows.append(
            [
                day.date.isoformat(),
                day.day_name,
                day.clock_in or EMPTY_CELL,
                clock_out,
                str(day.break_minutes),
                format_hours(day.total_hours),
            ]
        )
    rows.append(["", "", "", WEEK_TOTAL_LABEL, "", format_hours(week.week_total)])
    return rows


def export_csv(week: WeekData, tz: tzinfo, *, zone_name: str, at: Optional[datetime] = None) -> str:
    buf = io.StringIO()
    buf.write(f"# Timesheet Export - {zone_name}\n")
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(export_rows(week, tz, at=at))
    return buf.getvalue()
