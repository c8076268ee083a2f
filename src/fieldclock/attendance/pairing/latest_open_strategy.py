from __future__ import annotations

from typing import List, Optional, Sequence

from ...clock.model import RawEvent
from ...core.enums import EventType
from .base import Pairing, PairingResult, PairingStrategy


class LatestOpenPairing(PairingStrategy):
    """Single open pointer: a repeated open replaces the previous one."""

    def pair(self, events: Sequence[RawEvent], *, opens: EventType, closes: EventType) -> PairingResult:
        pairs: List[Pairing] = []
        orphans: List[RawEvent] = []
        superseded: List[RawEvent] = []
        current: Optional[RawEvent] = None

        for e in events:
            if e.type == opens:
                if current is not None:
                    superseded.append(current)
                current = e
            elif e.type == closes:
                if current is None:
                    orphans.append(e)
                    continue
                pairs.append(Pairing(opened=current, closed=e))
                current = None

        return PairingResult(
            pairs=tuple(pairs),
            unmatched_opens=(current,) if current is not None else (),
            orphan_closes=tuple(orphans),
            superseded_opens=tuple(superseded),
        )
