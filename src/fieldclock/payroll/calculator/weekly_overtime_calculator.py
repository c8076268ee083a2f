from __future__ import annotations

from ...common.validators import require_positive
from ...core.constants import DEFAULT_OVERTIME_THRESHOLD_HOURS, MS_PER_HOUR
from .base import HoursSplit, PayrollCalculator


class WeeklyOvertimeCalculator(PayrollCalculator):
    """Flat weekly rule: hours above the threshold are overtime. No daily rule."""

    def __init__(self, threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS):
        self._threshold_ms = round(require_positive(threshold_hours, "threshold_hours") * MS_PER_HOUR)

    def split(self, total_ms: int) -> HoursSplit:
        total_ms = max(int(total_ms), 0)
        if total_ms <= self._threshold_ms:
            return HoursSplit(regular_ms=total_ms, overtime_ms=0)
        return HoursSplit(regular_ms=self._threshold_ms, overtime_ms=total_ms - self._threshold_ms)
