from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Mapping

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import now_utc, parse_iso_date, parse_timestamp, resolve_timezone
from ..container import Container
from ..core.exceptions import ValidationError
from .model import ReportingWindow


def _current_week(tz_name: str) -> tuple[date, date]:
    today = now_utc().astimezone(resolve_timezone(tz_name)).date()
    # Weeks run Sunday..Saturday.
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def window_from_args(args: Mapping[str, str], default_tz: str) -> ReportingWindow:
    tz_name = (args.get("tz") or default_tz).strip()
    default_start, default_end = _current_week(tz_name)
    start_s = args.get("start")
    end_s = args.get("end")
    start = parse_iso_date(start_s) if start_s else default_start
    end = parse_iso_date(end_s) if end_s else default_end
    return ReportingWindow(start_date=start, end_date=end, timezone=tz_name)


def _now_from_args(args: Mapping[str, str]) -> datetime | None:
    # Lets clients pin "now" so a report can be reproduced later.
    value = args.get("now")
    return parse_timestamp(value) if value else None


def register(app: Flask, container: Container) -> None:
    def _bad_request(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    def _report(user_id: str):
        window = window_from_args(request.args, current_app.config["DEFAULT_TIMEZONE"])
        return container.timesheet_service.build_report(user_id, window, now=_now_from_args(request.args))

    @app.route("/api/timesheets/<user_id>", methods=["GET"], endpoint="timesheet")
    def timesheet(user_id: str):
        try:
            report = _report(user_id)
        except ValidationError as e:
            return _bad_request(e)
        return jsonify({"success": True, **container.payroll_report_service.to_dict(report)})

    @app.route("/api/timesheets/<user_id>/export.csv", methods=["GET"], endpoint="timesheet_csv")
    def timesheet_csv(user_id: str):
        try:
            report = _report(user_id)
        except ValidationError as e:
            return _bad_request(e)

        csv_bytes = container.payroll_report_service.export_csv(report).encode("utf-8-sig")
        w = report.window
        filename = f"timesheet_{user_id}_{w.start_date.strftime('%Y%m%d')}_{w.end_date.strftime('%Y%m%d')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/timesheets/<user_id>/timecard", methods=["GET"], endpoint="timesheet_timecard")
    def timesheet_timecard(user_id: str):
        try:
            report = _report(user_id)
        except ValidationError as e:
            return _bad_request(e)

        card = container.payroll_report_service.timecard(report)
        return jsonify(
            {
                "success": True,
                "period": card.period,
                "header": card.header,
                "rows": card.rows,
                "summary": {
                    "total_hours": round(card.summary.total_hours, 2),
                    "regular_hours": round(card.summary.regular_hours, 2),
                    "overtime_hours": round(card.summary.overtime_hours, 2),
                    "travel_hours": round(card.summary.travel_hours, 2),
                },
            }
        )
