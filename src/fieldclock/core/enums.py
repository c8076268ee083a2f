from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Kinds of raw clock events emitted by the mobile app."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class EntryMethod(str, Enum):
    """How a clock event was produced."""

    MANUAL = "manual"
    GEOFENCE_NOTIFICATION = "geofence_notification"
    GEOFENCE_AUTO = "geofence_auto"
    ADMIN_OVERRIDE = "admin_override"

    @property
    def is_gps_verified(self) -> bool:
        return self in (EntryMethod.GEOFENCE_AUTO, EntryMethod.GEOFENCE_NOTIFICATION)


class PairingPolicy(str, Enum):
    """Which open event a closing event pairs with.

    LATEST_OPEN keeps a single open pointer; a repeated open overwrites it.
    LIFO_STACK pushes every open and pops the most recent on close.
    """

    LATEST_OPEN = "latest_open"
    LIFO_STACK = "lifo_stack"


class OpenIntervalPolicy(str, Enum):
    """What happens to an open event still unmatched at end of stream."""

    SYNTHESIZE_AT_NOW = "synthesize_at_now"
    DROP = "drop"
