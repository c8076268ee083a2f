from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Tuple

from ...clock.model import RawEvent
from ...core.enums import EventType


@dataclass(frozen=True)
class Pairing:
    opened: RawEvent
    closed: RawEvent


@dataclass(frozen=True)
class PairingResult:
    pairs: Tuple[Pairing, ...]
    # Opens never closed, oldest first.
    unmatched_opens: Tuple[RawEvent, ...] = ()
    # Closes that arrived with nothing open.
    orphan_closes: Tuple[RawEvent, ...] = ()
    # Opens overwritten by a later open before any close.
    superseded_opens: Tuple[RawEvent, ...] = ()


class PairingStrategy(ABC):
    """Strategy Pattern: decide which open event a closing event consumes.

    Input must already be sorted chronologically. Events of other types
    are ignored.
    """

    @abstractmethod
    def pair(self, events: Sequence[RawEvent], *, opens: EventType, closes: EventType) -> PairingResult:
        raise NotImplementedError
