from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from ..clock.model import RawEvent
from ..common.datetime_utils import duration_ms, format_clock_time
from ..core.enums import EventType, OpenIntervalPolicy
from .model import Break, Shift
from .pairing.base import PairingResult, PairingStrategy
from .pairing.latest_open_strategy import LatestOpenPairing

logger = logging.getLogger(__name__)

# A shift left open is live work and is counted up to "now"; a break left
# open is not counted at all.
SHIFT_OPEN_INTERVAL_POLICY = OpenIntervalPolicy.SYNTHESIZE_AT_NOW
BREAK_OPEN_INTERVAL_POLICY = OpenIntervalPolicy.DROP


def _log_dropped(kind: str, result: PairingResult) -> None:
    for e in result.orphan_closes:
        logger.debug("dropping orphan %s event %r at %s", kind, e.id, e.timestamp)
    for e in result.superseded_opens:
        logger.debug("discarding superseded %s event %r at %s", kind, e.id, e.timestamp)


class ShiftBuilder:
    """Pair clock_in/clock_out events into Shift records."""

    def __init__(
        self,
        *,
        strategy: Optional[PairingStrategy] = None,
        open_policy: OpenIntervalPolicy = SHIFT_OPEN_INTERVAL_POLICY,
    ):
        self._strategy = strategy or LatestOpenPairing()
        self._open_policy = OpenIntervalPolicy(open_policy)

    def build(
        self,
        events: Sequence[RawEvent],
        *,
        tz: tzinfo,
        now: datetime,
        window_end: datetime,
    ) -> List[Shift]:
        result = self._strategy.pair(events, opens=EventType.CLOCK_IN, closes=EventType.CLOCK_OUT)
        _log_dropped("shift", result)

        shifts: List[Shift] = []
        for p in result.pairs:
            start, end = p.opened.timestamp, p.closed.timestamp
            shifts.append(
                Shift(
                    clock_in=start,
                    clock_out=end,
                    duration_ms=max(0, duration_ms(start, end)),
                    clock_in_str=format_clock_time(start, tz),
                    clock_out_str=format_clock_time(end, tz),
                    project_id=p.opened.project_id,
                )
            )

        if result.unmatched_opens and self._open_policy == OpenIntervalPolicy.SYNTHESIZE_AT_NOW:
            opened = result.unmatched_opens[-1]
            effective_end = min(now, window_end)
            shifts.append(
                Shift(
                    clock_in=opened.timestamp,
                    clock_out=None,
                    duration_ms=max(0, duration_ms(opened.timestamp, effective_end)),
                    clock_in_str=format_clock_time(opened.timestamp, tz),
                    in_progress=True,
                    project_id=opened.project_id,
                )
            )

        shifts.sort(key=lambda s: s.clock_in)
        return shifts


class BreakBuilder:
    """Pair break_start/break_end events into Break records."""

    def __init__(
        self,
        *,
        strategy: Optional[PairingStrategy] = None,
        open_policy: OpenIntervalPolicy = BREAK_OPEN_INTERVAL_POLICY,
    ):
        self._strategy = strategy or LatestOpenPairing()
        self._open_policy = OpenIntervalPolicy(open_policy)

    def build(self, events: Sequence[RawEvent], *, now: Optional[datetime] = None) -> List[Break]:
        result = self._strategy.pair(events, opens=EventType.BREAK_START, closes=EventType.BREAK_END)
        _log_dropped("break", result)

        breaks = [
            Break(
                start=p.opened.timestamp,
                end=p.closed.timestamp,
                duration_ms=max(0, duration_ms(p.opened.timestamp, p.closed.timestamp)),
            )
            for p in result.pairs
        ]

        if result.unmatched_opens:
            opened = result.unmatched_opens[-1]
            if self._open_policy == OpenIntervalPolicy.SYNTHESIZE_AT_NOW and now is not None:
                end = max(now, opened.timestamp)
                breaks.append(Break(start=opened.timestamp, end=end, duration_ms=duration_ms(opened.timestamp, end)))
            else:
                logger.debug("ignoring open break started at %s", opened.timestamp)

        breaks.sort(key=lambda b: b.start)
        return breaks
