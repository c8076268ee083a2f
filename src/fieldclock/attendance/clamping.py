from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import Iterable, List

from ..common.datetime_utils import duration_ms, format_clock_time
from .model import Break, Shift

logger = logging.getLogger(__name__)


def _outside(start: datetime, end: datetime, window_start: datetime, window_end: datetime) -> bool:
    if start >= window_end:
        return True
    if end < window_start:
        return True
    # Touches the window start from the outside: no overlap at all.
    return end == window_start and start < window_start


class RangeClamper:
    """Clip intervals to ``[window_start, window_end)``.

    Durations and display strings are recomputed from the clipped
    instants, never carried over from the originals.
    """

    def __init__(self, window_start: datetime, window_end: datetime, tz: tzinfo):
        self._start = window_start
        self._end = window_end
        self._tz = tz

    def clamp_shifts(self, shifts: Iterable[Shift]) -> List[Shift]:
        out: List[Shift] = []
        for s in shifts:
            end = s.effective_end
            if _outside(s.clock_in, end, self._start, self._end):
                logger.debug("shift %s..%s outside window", s.clock_in, end)
                continue

            start = max(s.clock_in, self._start)
            end = min(end, self._end)
            clock_out = None if s.in_progress else end
            out.append(
                replace(
                    s,
                    clock_in=start,
                    clock_out=clock_out,
                    duration_ms=max(0, duration_ms(start, end)),
                    clock_in_str=format_clock_time(start, self._tz),
                    clock_out_str=format_clock_time(clock_out, self._tz) if clock_out is not None else None,
                )
            )
        return out

    def clamp_breaks(self, breaks: Iterable[Break]) -> List[Break]:
        out: List[Break] = []
        for b in breaks:
            if _outside(b.start, b.end, self._start, self._end):
                continue
            start = max(b.start, self._start)
            end = min(b.end, self._end)
            out.append(Break(start=start, end=end, duration_ms=max(0, duration_ms(start, end))))
        return out
