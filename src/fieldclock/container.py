from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .admin.aggregator import CrossUserAggregator
from .admin.service import AdminTimesheetService
from .attendance.engine import ReconciliationEngine
from .attendance.factory import PairingStrategyFactory
from .attendance.service import TimesheetService
from .clock.mysql_clock_repository import MySQLClockEntryRepository, MySQLLocationLogRepository
from .clock.repository import ClockEntryRepository, LocationLogRepository
from .core.constants import DEFAULT_OVERTIME_THRESHOLD_HOURS
from .core.enums import PairingPolicy
from .database.connection import DatabaseConnection, DBConfig
from .payroll.calculator.weekly_overtime_calculator import WeeklyOvertimeCalculator
from .payroll.service import PayrollReportService


@dataclass(frozen=True)
class Container:
    clock_entries_repo: ClockEntryRepository
    location_logs_repo: Optional[LocationLogRepository]

    timesheet_service: TimesheetService
    payroll_report_service: PayrollReportService
    admin_timesheet_service: AdminTimesheetService


def build_services(
    *,
    clock_entries_repo: ClockEntryRepository,
    location_logs_repo: Optional[LocationLogRepository] = None,
    deduct_breaks: bool = True,
    overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS,
) -> Container:
    """Wire services around any repository implementation (MySQL or in-memory)."""
    factory = PairingStrategyFactory()

    timesheet_service = TimesheetService(
        clock_entries_repo,
        location_logs_repo,
        engine=ReconciliationEngine(
            pairing_policy=PairingPolicy.LATEST_OPEN,
            strategy_factory=factory,
            deduct_breaks=deduct_breaks,
        ),
    )
    payroll_report_service = PayrollReportService(
        calculator=WeeklyOvertimeCalculator(threshold_hours=overtime_threshold_hours),
    )
    admin_timesheet_service = AdminTimesheetService(
        clock_entries_repo,
        aggregator=CrossUserAggregator(pairing_policy=PairingPolicy.LIFO_STACK, strategy_factory=factory),
    )

    return Container(
        clock_entries_repo=clock_entries_repo,
        location_logs_repo=location_logs_repo,
        timesheet_service=timesheet_service,
        payroll_report_service=payroll_report_service,
        admin_timesheet_service=admin_timesheet_service,
    )


def build_container(*, db_config: Mapping[str, Any], settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_services(
        clock_entries_repo=MySQLClockEntryRepository(conn),
        location_logs_repo=MySQLLocationLogRepository(conn),
        deduct_breaks=bool(getattr(settings, "DEDUCT_BREAKS", True)),
        overtime_threshold_hours=float(getattr(settings, "OVERTIME_THRESHOLD_HOURS", DEFAULT_OVERTIME_THRESHOLD_HOURS)),
    )
