from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..attendance.factory import PairingStrategyFactory
from ..clock.model import RawEvent
from ..clock.normalizer import normalize_events
from ..common.datetime_utils import duration_ms
from ..core.constants import MS_PER_HOUR
from ..core.enums import EntryMethod, EventType, PairingPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminSummary:
    total_entries: int
    geofence_verified: int
    manual_entries: int
    total_ms: int
    per_user_ms: Dict[Any, int] = field(default_factory=dict)

    @property
    def total_hours(self) -> float:
        return self.total_ms / MS_PER_HOUR

    def user_hours(self, user_id: Any) -> float:
        return self.per_user_ms.get(user_id, 0) / MS_PER_HOUR


class CrossUserAggregator:
    """Administrative total of hours across many users.

    A different model from the per-user timesheet: each user's
    entries are paired LIFO (a clock-out closes the most recent unmatched
    clock-in), open shifts count for nothing and breaks are ignored. The
    two views disagree on duplicate clock-ins and on live shifts.
    """

    def __init__(
        self,
        *,
        pairing_policy: PairingPolicy = PairingPolicy.LIFO_STACK,
        strategy_factory: Optional[PairingStrategyFactory] = None,
    ):
        factory = strategy_factory or PairingStrategyFactory()
        self._strategy = factory.for_policy(pairing_policy)

    def per_user_ms(self, events: Iterable[RawEvent]) -> Dict[Any, int]:
        by_user: Dict[Any, List[RawEvent]] = defaultdict(list)
        for e in normalize_events(events):
            by_user[e.user_id].append(e)

        totals: Dict[Any, int] = {}
        for user_id, user_events in by_user.items():
            result = self._strategy.pair(user_events, opens=EventType.CLOCK_IN, closes=EventType.CLOCK_OUT)
            if result.unmatched_opens:
                logger.debug("user %s has %d open clock-ins, not counted", user_id, len(result.unmatched_opens))
            totals[user_id] = sum(duration_ms(p.opened.timestamp, p.closed.timestamp) for p in result.pairs)
        return totals

    def total_ms(self, events: Iterable[RawEvent]) -> int:
        return sum(self.per_user_ms(events).values())

    def total_hours(self, events: Iterable[RawEvent]) -> float:
        return self.total_ms(events) / MS_PER_HOUR

    def summarize(self, events: Iterable[RawEvent]) -> AdminSummary:
        events = normalize_events(events)
        per_user = self.per_user_ms(events)
        return AdminSummary(
            total_entries=len(events),
            geofence_verified=sum(1 for e in events if e.entry_method.is_gps_verified),
            manual_entries=sum(1 for e in events if e.entry_method == EntryMethod.MANUAL),
            total_ms=sum(per_user.values()),
            per_user_ms=per_user,
        )
