from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Any

import pytz

from ..core.exceptions import ParseError, ValidationError

_ONE_MS = timedelta(milliseconds=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_utc() -> datetime:
    """Current instant, timezone-aware.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.utc)


def resolve_timezone(name: str) -> tzinfo:
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise ValidationError(f"Unknown time zone: {name!r}")


def parse_timestamp(value: Any, *, event_id: Any = None) -> datetime:
    """Normalize a raw timestamp into an aware UTC datetime.

    Accepts datetimes (naive values are taken as UTC), ISO-8601 strings
    and epoch milliseconds.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return pytz.utc.localize(value)
        return value.astimezone(pytz.utc)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=pytz.utc)
        except (OverflowError, OSError, ValueError):
            raise ParseError(f"Timestamp out of range: {value!r}", event_id=event_id)

    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ParseError(f"Unparsable timestamp: {value!r}", event_id=event_id)
        return parse_timestamp(parsed)

    raise ParseError(f"Unparsable timestamp: {value!r}", event_id=event_id)


def localize_midnight(day: date, tz: tzinfo) -> datetime:
    """Start of a local calendar day as an aware UTC instant (DST safe)."""
    naive = datetime.combine(day, datetime.min.time())
    if hasattr(tz, "localize"):
        local = tz.localize(naive)
    else:
        local = naive.replace(tzinfo=tz)
    return local.astimezone(pytz.utc)


def local_date(instant: datetime, tz: tzinfo) -> date:
    return instant.astimezone(tz).date()


def duration_ms(start: datetime, end: datetime) -> int:
    return (end - start) // _ONE_MS


def format_clock_time(instant: datetime, tz: tzinfo) -> str:
    """12-hour wall-clock time without a leading zero, e.g. '8:00 AM'."""
    local = instant.astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_date_short(day: date) -> str:
    """'Mon, Jan 6'."""
    return f"{day.strftime('%a, %b')} {day.day}"


def format_date_long(day: date) -> str:
    """'January 6, 2025'."""
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def timezone_abbreviation(tz: tzinfo, *, at: datetime | None = None) -> str:
    """Short zone name ('PST', 'CEST') at the given instant."""
    at = at or now_utc()
    return at.astimezone(tz).tzname() or ""
