from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc
from ..common.web import current_account, json_body, json_error, login_required, text_field
from ..core.exceptions import ValidationError
from ..container import Container


def _whole_number(value, default: int) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError("Year and month must be numbers.")
    try:
        return int(value)
    except ValueError:
        raise ValidationError("Year and month must be numbers.")


def _period(source) -> tuple[int, int, Optional[str]]:
    today = now_utc().astimezone()
    year = _whole_number(source.get("year"), today.year)
    month = _whole_number(source.get("month"), today.month)

    therapist = text_field(source, "therapist", None) or None
    if therapist == "all":
        therapist = None
    return year, month, therapist


def register(app: Flask, container: Container) -> None:
    def _build_report(source: dict):
        year, month, therapist = _period(source)
        user = current_account()
        sessions = container.session_service.list_for(user)
        return container.payroll_report_service.build_for_user(
            user, sessions, year=year, month=month, therapist_id=therapist
        )

    @app.route("/api/payroll", endpoint="payroll")
    @login_required
    def payroll():
        try:
            report = _build_report(request.args)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "report": report.to_dict()})

    @app.route("/api/payroll/summary", methods=["POST"], endpoint="payroll_summary")
    @login_required
    def payroll_summary():
        try:
            report = _build_report(json_body())
            report = container.payroll_report_service.with_summary(report)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "report": report.to_dict()})
