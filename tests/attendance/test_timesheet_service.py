from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest
import pytz

from fieldclock.attendance.model import ReportingWindow
from fieldclock.attendance.service import TimesheetService
from fieldclock.clock.model import LocationSample, RawEvent

UTC = pytz.utc


def _at(hour, minute=0, day=6):
    return datetime(2025, 1, day, hour, minute, tzinfo=UTC)


class InMemoryClockEntries:
    def __init__(self, events):
        self._events = events
        self.last_args = None

    def list_for_user(self, user_id, *, start, end):
        self.last_args = {"user_id": user_id, "start": start, "end": end}
        return [e for e in self._events if e.user_id == user_id and start <= e.timestamp < end]


class InMemoryLocationLogs:
    def __init__(self, samples):
        self._samples = samples

    def list_for_user(self, user_id, *, start, end):
        return [s for s in self._samples if start <= s.timestamp <= end]


def _ev(event_id, type_, ts, project_id=None, user_id="u1"):
    return RawEvent(id=event_id, user_id=user_id, type=type_, timestamp=ts, project_id=project_id)


def test_build_report_looks_back_for_shifts_opened_before_window():
    repo = InMemoryClockEntries(
        [
            _ev(1, "clock_in", _at(22, day=5)),
            _ev(2, "clock_out", _at(6)),
            _ev(3, "clock_in", _at(8, day=6), user_id="u2"),
        ]
    )
    window = ReportingWindow(date(2025, 1, 6), date(2025, 1, 6), "UTC")

    report = TimesheetService(repo).build_report("u1", window, now=_at(12, day=9))

    assert repo.last_args["start"] == window.start - timedelta(hours=24)
    assert repo.last_args["end"] == window.end + timedelta(hours=24)
    assert report.week.week_total == 6
    assert report.user_id == "u1"
    assert report.generated_at == _at(12, day=9)


def test_build_report_pairs_shift_closed_after_window_end():
    repo = InMemoryClockEntries(
        [
            _ev(1, "clock_in", _at(20, day=11)),
            _ev(2, "clock_out", _at(4, day=12)),
        ]
    )
    window = ReportingWindow(date(2025, 1, 5), date(2025, 1, 11), "UTC")

    report = TimesheetService(repo).build_report("u1", window, now=datetime(2025, 2, 1, tzinfo=UTC))

    saturday = report.week.day(date(2025, 1, 11))
    assert saturday.in_progress is False
    assert saturday.clock_in == "8:00 PM"
    assert saturday.clock_out == "12:00 AM"
    assert saturday.total_hours == 4
    assert saturday.shifts[0].clock_out == window.end


def test_build_report_infers_travel_inside_the_window_only():
    events = [
        _ev(1, "clock_out", _at(12, day=5), "A"),
        _ev(2, "clock_in", _at(13, day=5), "B"),
        _ev(3, "clock_out", _at(18, day=5), "B"),
        _ev(4, "clock_in", _at(8), "A"),
        _ev(5, "clock_out", _at(12), "A"),
        _ev(6, "clock_in", _at(13), "B"),
        _ev(7, "clock_out", _at(17), "B"),
    ]
    samples = [
        LocationSample(timestamp=_at(12, 15, day=5), is_moving=True),
        LocationSample(timestamp=_at(12, 45, day=5), is_moving=True),
        LocationSample(timestamp=_at(12, 10), is_moving=True),
        LocationSample(timestamp=_at(12, 25), is_moving=True),
    ]
    window = ReportingWindow(date(2025, 1, 6), date(2025, 1, 6), "UTC")

    svc = TimesheetService(InMemoryClockEntries(events), InMemoryLocationLogs(samples))
    report = svc.build_report("u1", window, now=_at(9, day=7))

    assert len(report.travel) == 1
    assert report.travel[0].duration_hours == pytest.approx(0.25)
    assert report.week.week_total == 8


def test_reconcile_without_repositories():
    events = [_ev(1, "clock_in", "2025-01-06T08:00:00Z"), _ev(2, "clock_out", "2025-01-06T16:00:00Z")]
    window = ReportingWindow(date(2025, 1, 6), date(2025, 1, 6), "UTC")

    report = TimesheetService().reconcile(events, window, now=_at(20))

    assert report.week.week_total == 8
    assert report.travel == ()
    assert [e.id for e in report.events] == [1, 2]


def test_build_report_requires_a_repository():
    window = ReportingWindow(date(2025, 1, 6), date(2025, 1, 6), "UTC")

    with pytest.raises(RuntimeError):
        TimesheetService().build_report("u1", window)
