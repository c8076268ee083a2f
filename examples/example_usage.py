"""Example: run the reconciliation service layer directly (no Flask, no DB).

Controllers are thin; everything below is what an HTTP request ends up calling.
"""

from datetime import date

from fieldclock.attendance.model import ReportingWindow
from fieldclock.attendance.service import TimesheetService
from fieldclock.clock.model import LocationSample, RawEvent
from fieldclock.payroll.service import PayrollReportService


def main():
    events = [
        RawEvent(id=1, user_id=1, type="clock_in", timestamp="2025-01-06T13:00:00Z", project_id="roof"),
        RawEvent(id=2, user_id=1, type="clock_out", timestamp="2025-01-06T17:00:00Z", project_id="roof"),
        RawEvent(id=3, user_id=1, type="clock_in", timestamp="2025-01-06T18:00:00Z", project_id="kitchen"),
        RawEvent(id=4, user_id=1, type="break_start", timestamp="2025-01-06T20:00:00Z"),
        RawEvent(id=5, user_id=1, type="break_end", timestamp="2025-01-06T20:30:00Z"),
        RawEvent(id=6, user_id=1, type="clock_out", timestamp="2025-01-06T22:00:00Z", project_id="kitchen"),
    ]
    samples = [
        LocationSample(timestamp="2025-01-06T17:05:00Z", is_moving=True),
        LocationSample(timestamp="2025-01-06T17:35:00Z", is_moving=True),
    ]
    window = ReportingWindow(date(2025, 1, 5), date(2025, 1, 11), "America/New_York")

    report = TimesheetService().reconcile(events, window, samples, user_id=1)
    payroll = PayrollReportService()

    print(payroll.export_csv(report))
    card = payroll.timecard(report, project_names={"roof": "Roof Repair", "kitchen": "Kitchen Remodel"})
    for row in card.rows:
        print(row)
    print(card.summary)


if __name__ == "__main__":
    main()
