from __future__ import annotations

from datetime import date, datetime

import pytz

from fieldclock.admin.aggregator import CrossUserAggregator
from fieldclock.admin.service import AdminTimesheetService
from fieldclock.attendance.engine import ReconciliationEngine
from fieldclock.attendance.model import ReportingWindow
from fieldclock.clock.model import RawEvent
from fieldclock.core.enums import EntryMethod

UTC = pytz.utc


def _at(hour, minute=0, day=6):
    return datetime(2025, 1, day, hour, minute, tzinfo=UTC)


def _ev(event_id, user_id, type_, ts, method=EntryMethod.MANUAL):
    return RawEvent(id=event_id, user_id=user_id, type=type_, timestamp=ts, entry_method=method)


class FakeClockEntries:
    def __init__(self, events):
        self._events = events
        self.last_args = None

    def list_for_company(self, company_id, *, start, end, user_id=None):
        self.last_args = {"company_id": company_id, "start": start, "end": end, "user_id": user_id}
        return [e for e in self._events if user_id is None or e.user_id == user_id]


def test_lifo_pairing_per_user():
    events = [
        _ev(1, "u1", "clock_in", _at(8)),
        _ev(2, "u1", "clock_in", _at(9)),
        _ev(3, "u1", "clock_out", _at(12)),
        _ev(4, "u1", "clock_out", _at(17)),
        _ev(5, "u2", "clock_in", _at(7)),
        _ev(6, "u2", "break_start", _at(10)),
        _ev(7, "u2", "break_end", _at(11)),
        _ev(8, "u2", "clock_out", _at(15)),
    ]

    totals = CrossUserAggregator().per_user_ms(events)

    # u1: [09:00-12:00] + [08:00-17:00]; u2 breaks are ignored.
    assert totals == {"u1": 12 * 3_600_000, "u2": 8 * 3_600_000}
    assert CrossUserAggregator().total_hours(events) == 20


def test_users_are_paired_independently():
    # Interleaved users must not pair with each other's entries.
    events = [
        _ev(1, "u1", "clock_in", _at(8)),
        _ev(2, "u2", "clock_in", _at(9)),
        _ev(3, "u1", "clock_out", _at(10)),
        _ev(4, "u2", "clock_out", _at(14)),
    ]

    assert CrossUserAggregator().per_user_ms(events) == {"u1": 2 * 3_600_000, "u2": 5 * 3_600_000}


def test_open_shift_counts_for_user_view_but_not_admin_view():
    events = [
        _ev(1, "u1", "clock_in", _at(8)),
        _ev(2, "u1", "clock_out", _at(12)),
        _ev(3, "u1", "clock_in", _at(13)),
    ]
    window = ReportingWindow(date(2025, 1, 6), date(2025, 1, 6), "UTC")

    per_user = ReconciliationEngine().reconcile(events, window, now=_at(15))
    admin = CrossUserAggregator().total_hours(events)

    assert per_user.week_total == 6
    assert admin == 4
    assert per_user.week_total != admin


def test_duplicate_clock_ins_diverge_between_models():
    events = [
        _ev(1, "u1", "clock_in", _at(8)),
        _ev(2, "u1", "clock_in", _at(9)),
        _ev(3, "u1", "clock_out", _at(12)),
        _ev(4, "u1", "clock_out", _at(17)),
    ]
    window = ReportingWindow(date(2025, 1, 6), date(2025, 1, 6), "UTC")

    assert ReconciliationEngine().reconcile(events, window, now=_at(20)).week_total == 3
    assert CrossUserAggregator().total_hours(events) == 12


def test_summary_counts_entry_methods():
    events = [
        _ev(1, "u1", "clock_in", _at(8), EntryMethod.GEOFENCE_AUTO),
        _ev(2, "u1", "clock_out", _at(16), EntryMethod.GEOFENCE_NOTIFICATION),
        _ev(3, "u2", "clock_in", _at(9), EntryMethod.MANUAL),
        _ev(4, "u2", "clock_out", _at(11), EntryMethod.ADMIN_OVERRIDE),
    ]

    summary = CrossUserAggregator().summarize(events)

    assert summary.total_entries == 4
    assert summary.geofence_verified == 2
    assert summary.manual_entries == 1
    assert summary.total_hours == 10
    assert summary.user_hours("u2") == 2


def test_admin_service_forwards_window_and_user_filter():
    repo = FakeClockEntries(
        [
            _ev(1, "u1", "clock_in", _at(8)),
            _ev(2, "u1", "clock_out", _at(16)),
            _ev(3, "u2", "clock_in", _at(9)),
            _ev(4, "u2", "clock_out", _at(10)),
        ]
    )
    window = ReportingWindow(date(2025, 1, 5), date(2025, 1, 11), "UTC")

    svc = AdminTimesheetService(repo)
    summary = svc.company_summary("c1", window, user_id="u1")
    data = svc.to_dict(summary)

    assert repo.last_args["company_id"] == "c1"
    assert repo.last_args["user_id"] == "u1"
    assert repo.last_args["start"] == window.start
    assert repo.last_args["end"] == window.end
    assert data["total_hours"] == 8
    assert data["users"] == [{"user_id": "u1", "total_hours": 8}]


class WindowedClockEntries(FakeClockEntries):
    def list_for_company(self, company_id, *, start, end, user_id=None):
        rows = super().list_for_company(company_id, start=start, end=end, user_id=user_id)
        return [e for e in rows if start <= e.timestamp < end]


def test_admin_summary_uses_the_exact_window():
    repo = WindowedClockEntries(
        [
            _ev(1, "u1", "clock_in", datetime(2025, 1, 4, 22, tzinfo=UTC)),
            _ev(2, "u1", "clock_out", _at(6)),
            _ev(3, "u1", "clock_in", _at(8)),
            _ev(4, "u1", "clock_out", _at(12)),
        ]
    )
    window = ReportingWindow(date(2025, 1, 5), date(2025, 1, 11), "UTC")

    summary = AdminTimesheetService(repo).company_summary("c1", window)

    assert summary.total_entries == 3
    assert summary.total_hours == 4
