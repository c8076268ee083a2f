from __future__ import annotations

import logging
from typing import Any, Optional

from ..attendance.model import ReportingWindow
from ..clock.repository import ClockEntryRepository
from .aggregator import AdminSummary, CrossUserAggregator

logger = logging.getLogger(__name__)


class AdminTimesheetService:
    def __init__(self, clock_entries: ClockEntryRepository, *, aggregator: Optional[CrossUserAggregator] = None):
        self._clock_entries = clock_entries
        self._aggregator = aggregator or CrossUserAggregator()

    def company_summary(
        self,
        company_id: Any,
        window: ReportingWindow,
        *,
        user_id: Optional[Any] = None,
    ) -> AdminSummary:
        """Summarize the exact window; no look-back, so shifts crossing its edges are not paired."""
        events = self._clock_entries.list_for_company(company_id, start=window.start, end=window.end, user_id=user_id)
        summary = self._aggregator.summarize(events)
        logger.info(
            "admin summary company=%s users=%d entries=%d total=%.2fh",
            company_id,
            len(summary.per_user_ms),
            summary.total_entries,
            summary.total_hours,
        )
        return summary

    @staticmethod
    def to_dict(summary: AdminSummary) -> dict:
        return {
            "total_entries": summary.total_entries,
            "geofence_verified": summary.geofence_verified,
            "manual_entries": summary.manual_entries,
            "total_hours": round(summary.total_hours, 2),
            "users": [
                {"user_id": uid, "total_hours": round(summary.user_hours(uid), 2)}
                for uid, _ in sorted(summary.per_user_ms.items(), key=lambda kv: kv[1], reverse=True)
            ],
        }
