from __future__ import annotations

from datetime import datetime
from typing import List, Mapping, Optional

from ..attendance.model import WeekData
from ..attendance.service import TimesheetReport
from ..travel.service import TravelInferencer
from .breakdown import DayDetail, build_breakdown
from .calculator.base import HoursSplit, PayrollCalculator
from .calculator.weekly_overtime_calculator import WeeklyOvertimeCalculator
from .export import export_csv, export_rows
from .formatting import format_hours
from .timecard import Timecard, build_timecard


class PayrollReportService:
    """Turn a reconciled timesheet into payroll-facing outputs."""

    def __init__(self, *, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or WeeklyOvertimeCalculator()

    @property
    def calculator(self) -> PayrollCalculator:
        return self._calculator

    def split(self, week: WeekData) -> HoursSplit:
        return self._calculator.split(week.week_total_ms)

    def export_rows(self, report: TimesheetReport, *, at: Optional[datetime] = None) -> List[List[str]]:
        return export_rows(report.week, report.window.tz, at=at or report.generated_at)

    def export_csv(self, report: TimesheetReport, *, at: Optional[datetime] = None) -> str:
        return export_csv(
            report.week,
            report.window.tz,
            zone_name=report.window.timezone,
            at=at or report.generated_at,
        )

    def timecard(self, report: TimesheetReport, *, project_names: Optional[Mapping[str, str]] = None) -> Timecard:
        return build_timecard(
            report.week,
            report.events,
            report.travel,
            tz=report.window.tz,
            calculator=self._calculator,
            project_names=project_names,
        )

    def breakdown(self, report: TimesheetReport, *, project_names: Optional[Mapping[str, str]] = None) -> List[DayDetail]:
        return build_breakdown(
            report.week,
            report.events,
            report.travel,
            tz=report.window.tz,
            project_names=project_names,
        )

    def to_dict(self, report: TimesheetReport) -> dict:
        """JSON-ready view used by the HTTP layer."""
        split = self.split(report.week)
        tz = report.window.tz
        travel_by_day = {
            key.isoformat(): round(sum(s.duration_hours for s in segs), 4)
            for key, segs in TravelInferencer.group_by_day(report.travel, tz).items()
        }
        return {
            "start_date": report.window.start_date.isoformat(),
            "end_date": report.window.end_date.isoformat(),
            "timezone": report.window.timezone,
            "days": [
                {
                    "date": d.date.isoformat(),
                    "day_name": d.day_name,
                    "total_hours": round(d.total_hours, 4),
                    "worked_hours": round(d.worked_hours, 4),
                    "formatted_hours": format_hours(d.total_hours),
                    "clock_in": d.clock_in,
                    "clock_out": d.clock_out,
                    "break_minutes": d.break_minutes,
                    "in_progress": d.in_progress,
                    "travel_hours": travel_by_day.get(d.date.isoformat(), 0),
                    "shifts": [
                        {
                            "clock_in": s.clock_in.astimezone(tz).isoformat(),
                            "clock_out": s.clock_out.astimezone(tz).isoformat() if s.clock_out else None,
                            "hours": round(s.hours, 4),
                            "in_progress": s.in_progress,
                            "project_id": s.project_id,
                        }
                        for s in d.shifts
                    ],
                }
                for d in report.week.days
            ],
            "week_total": round(report.week.week_total, 4),
            "regular_hours": round(split.regular, 4),
            "overtime_hours": round(split.overtime, 4),
            "travel": [
                {
                    "start_time": s.start_time.astimezone(tz).isoformat(),
                    "end_time": s.end_time.astimezone(tz).isoformat(),
                    "duration_hours": round(s.duration_hours, 4),
                    "from_project": s.from_project,
                    "to_project": s.to_project,
                }
                for s in report.travel
            ],
        }
