from __future__ import annotations

from collections import defaultdict
from datetime import date, tzinfo
from typing import Dict, Iterable, List

from ..common.datetime_utils import local_date
from ..core.constants import IN_PROGRESS_LABEL
from .model import Break, DayData, Shift


class DayBucketizer:
    """Assign clamped intervals to local calendar days.

    An interval belongs to the day its (clamped) start falls on, so an
    overnight shift is reported entirely on the day it began.
    """

    def __init__(self, tz: tzinfo, *, deduct_breaks: bool = True):
        self._tz = tz
        self._deduct_breaks = bool(deduct_breaks)

    def bucketize(self, days: Iterable[date], shifts: Iterable[Shift], breaks: Iterable[Break]) -> List[DayData]:
        shifts_by_day: Dict[date, List[Shift]] = defaultdict(list)
        for s in shifts:
            shifts_by_day[local_date(s.clock_in, self._tz)].append(s)

        break_ms_by_day: Dict[date, int] = defaultdict(int)
        for b in breaks:
            break_ms_by_day[local_date(b.start, self._tz)] += b.duration_ms

        out: List[DayData] = []
        for day in days:
            day_shifts = sorted(shifts_by_day.get(day, []), key=lambda s: s.clock_in)
            break_ms = break_ms_by_day.get(day, 0)
            worked_ms = sum(s.duration_ms for s in day_shifts)
            total_ms = max(0, worked_ms - break_ms) if self._deduct_breaks else worked_ms
            in_progress = any(s.in_progress for s in day_shifts)

            clock_in = day_shifts[0].clock_in_str if day_shifts else None
            clock_out = None
            if in_progress:
                clock_out = IN_PROGRESS_LABEL
            elif day_shifts:
                clock_out = day_shifts[-1].clock_out_str

            out.append(
                DayData(
                    date=day,
                    day_name=day.strftime("%a"),
                    total_ms=total_ms,
                    worked_ms=worked_ms,
                    break_ms=break_ms,
                    clock_in=clock_in,
                    clock_out=clock_out,
                    in_progress=in_progress,
                    shifts=tuple(day_shifts),
                )
            )
        return out
