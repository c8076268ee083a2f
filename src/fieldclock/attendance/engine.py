from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from ..clock.model import RawEvent
from ..clock.normalizer import normalize_events
from ..common.datetime_utils import now_utc, parse_timestamp
from ..core.enums import PairingPolicy
from .bucketing import DayBucketizer
from .builder import BreakBuilder, ShiftBuilder
from .clamping import RangeClamper
from .factory import PairingStrategyFactory
from .model import Break, ReportingWindow, Shift, WeekData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    """Every intermediate product of one reconciliation run."""

    events: tuple[RawEvent, ...]
    shifts: tuple[Shift, ...]
    breaks: tuple[Break, ...]
    week: WeekData


class ReconciliationEngine:
    """Raw clock events -> per-day timesheet for one user and one window.

    Pure: no I/O and no state kept between calls, so identical inputs
    (including ``now``) always give identical output.
    """

    def __init__(
        self,
        *,
        pairing_policy: PairingPolicy = PairingPolicy.LATEST_OPEN,
        strategy_factory: Optional[PairingStrategyFactory] = None,
        deduct_breaks: bool = True,
    ):
        factory = strategy_factory or PairingStrategyFactory()
        strategy = factory.for_policy(pairing_policy)
        self._shift_builder = ShiftBuilder(strategy=strategy)
        self._break_builder = BreakBuilder(strategy=strategy)
        self._deduct_breaks = bool(deduct_breaks)

    def run(
        self,
        events: Iterable[RawEvent],
        window: ReportingWindow,
        *,
        now: Optional[datetime] = None,
        presorted: bool = False,
    ) -> Reconciliation:
        now = parse_timestamp(now) if now is not None else now_utc()
        tz = window.tz
        ordered: List[RawEvent] = list(events) if presorted else normalize_events(events)

        shifts = self._shift_builder.build(ordered, tz=tz, now=now, window_end=window.end)
        breaks = self._break_builder.build(ordered)

        clamper = RangeClamper(window.start, window.end, tz)
        clamped_shifts = clamper.clamp_shifts(shifts)
        clamped_breaks = clamper.clamp_breaks(breaks)

        days = DayBucketizer(tz, deduct_breaks=self._deduct_breaks).bucketize(
            window.days(), clamped_shifts, clamped_breaks
        )
        week = WeekData(days=tuple(days), week_total_ms=sum(d.total_ms for d in days))

        logger.debug(
            "reconciled %d events into %d shifts, %d breaks over %d days",
            len(ordered),
            len(clamped_shifts),
            len(clamped_breaks),
            len(days),
        )
        return Reconciliation(
            events=tuple(ordered),
            shifts=tuple(clamped_shifts),
            breaks=tuple(clamped_breaks),
            week=week,
        )

    def reconcile(
        self,
        events: Iterable[RawEvent],
        window: ReportingWindow,
        *,
        now: Optional[datetime] = None,
    ) -> WeekData:
        return self.run(events, window, now=now).week
