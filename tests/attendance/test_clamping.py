from __future__ import annotations

from datetime import datetime, timedelta

import pytz

from fieldclock.attendance.clamping import RangeClamper
from fieldclock.attendance.model import Break, Shift

UTC = pytz.utc
START = datetime(2025, 1, 6, 0, 0, tzinfo=UTC)
END = datetime(2025, 1, 7, 0, 0, tzinfo=UTC)


def _shift(start, end, *, in_progress=False):
    return Shift(
        clock_in=start,
        clock_out=None if in_progress else end,
        duration_ms=int((end - start) / timedelta(milliseconds=1)),
        clock_in_str="original",
        clock_out_str=None if in_progress else "original",
        in_progress=in_progress,
    )


def test_shift_crossing_window_start_is_clipped_and_relabelled():
    shift = _shift(START - timedelta(hours=2), START + timedelta(hours=6))

    out = RangeClamper(START, END, UTC).clamp_shifts([shift])

    assert len(out) == 1
    assert out[0].clock_in == START
    assert out[0].hours == 6
    assert out[0].clock_in_str == "12:00 AM"
    assert out[0].clock_out_str == "6:00 AM"


def test_shift_crossing_window_end_is_clipped():
    shift = _shift(END - timedelta(hours=3), END + timedelta(hours=5))

    out = RangeClamper(START, END, UTC).clamp_shifts([shift])

    assert out[0].clock_out == END
    assert out[0].hours == 3


def test_shifts_without_overlap_are_discarded():
    before = _shift(START - timedelta(hours=10), START - timedelta(hours=2))
    touching = _shift(START - timedelta(hours=4), START)
    after = _shift(END, END + timedelta(hours=8))

    assert RangeClamper(START, END, UTC).clamp_shifts([before, touching, after]) == []


def test_in_progress_shift_stays_open_after_clipping():
    shift = _shift(START - timedelta(hours=1), START + timedelta(hours=2), in_progress=True)

    out = RangeClamper(START, END, UTC).clamp_shifts([shift])

    assert out[0].in_progress is True
    assert out[0].clock_out is None
    assert out[0].clock_out_str is None
    assert out[0].hours == 2


def test_breaks_are_clipped_and_discarded_like_shifts():
    inside = Break(start=START + timedelta(hours=12), end=START + timedelta(hours=12, minutes=30), duration_ms=30 * 60_000)
    straddling = Break(start=START - timedelta(minutes=20), end=START + timedelta(minutes=10), duration_ms=30 * 60_000)
    outside = Break(start=END + timedelta(hours=1), end=END + timedelta(hours=2), duration_ms=60 * 60_000)

    out = RangeClamper(START, END, UTC).clamp_breaks([inside, straddling, outside])

    assert [b.minutes for b in out] == [30, 10]
    assert out[1].start == START
