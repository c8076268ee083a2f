from __future__ import annotations

from typing import List, Sequence

from ...clock.model import RawEvent
from ...core.enums import EventType
from .base import Pairing, PairingResult, PairingStrategy


class StackPairing(PairingStrategy):
    """LIFO: every open is pushed, a close pops the most recent open."""

    def pair(self, events: Sequence[RawEvent], *, opens: EventType, closes: EventType) -> PairingResult:
        pairs: List[Pairing] = []
        orphans: List[RawEvent] = []
        stack: List[RawEvent] = []

        for e in events:
            if e.type == opens:
                stack.append(e)
            elif e.type == closes:
                if not stack:
                    orphans.append(e)
                    continue
                pairs.append(Pairing(opened=stack.pop(), closed=e))

        return PairingResult(
            pairs=tuple(pairs),
            unmatched_opens=tuple(stack),
            orphan_closes=tuple(orphans),
        )
