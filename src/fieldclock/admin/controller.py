from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..attendance.controller import window_from_args
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/timesheets", methods=["GET"], endpoint="admin_timesheets")
    def admin_timesheets():
        company_id = (request.args.get("company_id") or "").strip()
        if not company_id:
            return jsonify({"success": False, "message": "company_id is required"}), 400

        try:
            window = window_from_args(request.args, current_app.config["DEFAULT_TIMEZONE"])
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        summary = container.admin_timesheet_service.company_summary(
            company_id,
            window,
            user_id=request.args.get("user_id") or None,
        )
        return jsonify({"success": True, **container.admin_timesheet_service.to_dict(summary)})
