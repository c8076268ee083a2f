from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, tzinfo
from typing import Dict, Iterable, List, Sequence

from ..clock.model import LocationSample, RawEvent
from ..clock.normalizer import normalize_events, normalize_samples
from ..common.datetime_utils import duration_ms, local_date
from ..core.constants import MAX_TRAVEL_MS, MIN_TRAVEL_MS
from ..core.enums import EventType
from .model import TravelSegment

logger = logging.getLogger(__name__)


class TravelInferencer:
    """Detect inter-project travel from clock events and location telemetry.

    Only a clock_out immediately followed by a clock_in (next event in the
    sorted stream) at a different project is a candidate, and only movement
    samples between the two count as evidence. With no evidence nothing is
    inferred.
    """

    def __init__(self, *, min_ms: int = MIN_TRAVEL_MS, max_ms: int = MAX_TRAVEL_MS):
        self._min_ms = int(min_ms)
        self._max_ms = int(max_ms)

    def infer(self, events: Sequence[RawEvent], samples: Iterable[LocationSample] | None) -> List[TravelSegment]:
        ordered = normalize_events(events)
        moving = [s for s in normalize_samples(samples) if s.is_moving]
        segments: List[TravelSegment] = []

        for current, nxt in zip(ordered, ordered[1:]):
            if current.type != EventType.CLOCK_OUT or nxt.type != EventType.CLOCK_IN:
                continue
            if current.project_id == nxt.project_id:
                continue

            t1, t2 = current.timestamp, nxt.timestamp
            evidence = [s for s in moving if t1 <= s.timestamp <= t2]
            if not evidence:
                logger.debug("no movement between %s and %s, skipping", t1, t2)
                continue

            span = duration_ms(evidence[0].timestamp, evidence[-1].timestamp)
            if not (self._min_ms < span < self._max_ms):
                logger.debug("travel span %dms outside accepted band", span)
                continue

            segments.append(
                TravelSegment(
                    start_time=t1,
                    end_time=t2,
                    duration_ms=span,
                    from_project=current.project_id,
                    to_project=nxt.project_id,
                )
            )
        return segments

    @staticmethod
    def group_by_day(segments: Iterable[TravelSegment], tz: tzinfo) -> Dict[date, List[TravelSegment]]:
        grouped: Dict[date, List[TravelSegment]] = defaultdict(list)
        for seg in segments:
            grouped[local_date(seg.start_time, tz)].append(seg)
        return dict(grouped)
