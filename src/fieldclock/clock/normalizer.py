from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List

from ..common.datetime_utils import parse_timestamp
from ..core.enums import EntryMethod, EventType
from ..core.exceptions import ParseError
from .model import LocationSample, RawEvent

logger = logging.getLogger(__name__)


def _coerce_event(event: RawEvent) -> RawEvent:
    try:
        event_type = EventType(event.type)
    except ValueError:
        raise ParseError(f"Unknown event type: {event.type!r}", event_id=event.id)

    method = event.entry_method
    if method is None:
        method = EntryMethod.MANUAL
    try:
        method = EntryMethod(method)
    except ValueError:
        raise ParseError(f"Unknown entry method: {method!r}", event_id=event.id)

    return replace(
        event,
        type=event_type,
        entry_method=method,
        timestamp=parse_timestamp(event.timestamp, event_id=event.id),
    )


def normalize_events(events: Iterable[RawEvent]) -> List[RawEvent]:
    """Parse every event and sort ascending by instant.

    ``sorted`` is stable, so events sharing a timestamp keep their input
    order. Any unreadable event aborts the whole batch with ParseError.
    """
    parsed = [_coerce_event(e) for e in events]
    parsed.sort(key=lambda e: e.timestamp)
    logger.debug("normalized %d clock events", len(parsed))
    return parsed


def normalize_samples(samples: Iterable[LocationSample] | None) -> List[LocationSample]:
    out: List[LocationSample] = []
    for index, s in enumerate(samples or ()):
        out.append(replace(s, timestamp=parse_timestamp(s.timestamp, event_id=f"location#{index}")))
    out.sort(key=lambda s: s.timestamp)
    return out
