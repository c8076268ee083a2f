from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from fieldclock.clock.model import LocationSample, RawEvent
from fieldclock.clock.normalizer import normalize_events, normalize_samples
from fieldclock.core.enums import EntryMethod, EventType
from fieldclock.core.exceptions import ParseError, ValidationError


def _ev(event_id, type_, ts):
    return RawEvent(id=event_id, user_id="u1", type=type_, timestamp=ts)


def test_sorts_chronologically_across_input_formats():
    events = [
        _ev(1, "clock_out", "2025-01-06T17:00:00Z"),
        _ev(2, "clock_in", datetime(2025, 1, 6, 8, 0, tzinfo=pytz.utc)),
        _ev(3, "break_start", 1736164800000),  # 2025-01-06T12:00:00Z
    ]

    out = normalize_events(events)

    assert [e.id for e in out] == [2, 3, 1]
    assert all(e.timestamp.tzinfo is not None for e in out)
    assert out[1].timestamp == datetime(2025, 1, 6, 12, 0, tzinfo=pytz.utc)
    assert out[0].type is EventType.CLOCK_IN


def test_ties_keep_input_order():
    ts = "2025-01-06T08:00:00+00:00"
    events = [_ev("a", "clock_in", ts), _ev("b", "clock_in", ts), _ev("c", "clock_out", ts)]

    assert [e.id for e in normalize_events(events)] == ["a", "b", "c"]


def test_naive_datetimes_are_utc():
    out = normalize_events([_ev(1, "clock_in", datetime(2025, 1, 6, 8, 0))])

    assert out[0].timestamp == datetime(2025, 1, 6, 8, 0, tzinfo=pytz.utc)


def test_offset_strings_are_converted_to_utc():
    out = normalize_events([_ev(1, "clock_in", "2025-01-06T08:00:00-05:00")])

    assert out[0].timestamp == datetime(2025, 1, 6, 13, 0, tzinfo=pytz.utc)


def test_unparsable_timestamp_names_the_event():
    with pytest.raises(ParseError) as exc:
        normalize_events([_ev(1, "clock_in", "2025-01-06T08:00:00Z"), _ev("evt-42", "clock_out", "yesterday-ish")])

    assert exc.value.event_id == "evt-42"
    assert "evt-42" in str(exc.value)
    assert isinstance(exc.value, ValidationError)


def test_missing_timestamp_is_fatal():
    with pytest.raises(ParseError):
        normalize_events([_ev(7, "clock_in", None)])


def test_unknown_event_type_is_fatal():
    with pytest.raises(ParseError) as exc:
        normalize_events([_ev(9, "lunch", "2025-01-06T08:00:00Z")])

    assert exc.value.event_id == 9


def test_missing_entry_method_defaults_to_manual():
    event = RawEvent(id=1, user_id="u1", type="clock_in", timestamp="2025-01-06T08:00:00Z", entry_method=None)

    assert normalize_events([event])[0].entry_method is EntryMethod.MANUAL


def test_samples_are_parsed_and_sorted():
    samples = [
        LocationSample(timestamp="2025-01-06T12:40:00Z", is_moving=True),
        LocationSample(timestamp="2025-01-06T12:10:00Z", is_moving=True),
    ]

    out = normalize_samples(samples)

    assert [s.timestamp.minute for s in out] == [10, 40]
    assert normalize_samples(None) == []
