from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import parse_status, require_non_empty
from ..common.web import current_user, date_arg, to_json, today
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceMark


def _parse_marks(payload: dict) -> list[AttendanceMark]:
    items = payload.get("marks")
    if not isinstance(items, list):
        raise ValidationError("'marks' must be a list")

    marks: list[AttendanceMark] = []
    for item in items:
        if not isinstance(item, dict):
            raise ValidationError("Each mark must be an object")
        expected_version = item.get("expected_version")
        marks.append(
            AttendanceMark(
                student_id=require_non_empty(str(item.get("student_id") or ""), "student_id"),
                status=parse_status(item.get("status", "")),
                note=(item.get("note") or None),
                expected_version=int(expected_version) if expected_version is not None else None,
            )
        )
    return marks


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="api_classes")
    def api_classes():
        user = current_user(container)
        term = request.args.get("term") or None
        classes = container.access_service.accessible_classes(user, term_code=term, on=date_arg("date", today()))
        return jsonify({"success": True, "classes": to_json(classes)})

    @app.route("/api/classes/<class_id>/attendance", methods=["GET"], endpoint="api_class_attendance")
    def api_class_attendance(class_id: str):
        user = current_user(container)
        day = date_arg("date", today())
        offering = container.access_service.get_class(class_id)
        container.access_service.ensure_access(user, offering, on=day)

        records = container.attendance_service.day_records(class_id, day)
        stats = container.attendance_service.class_day_stats(class_id, day)
        return jsonify(
            {
                "success": True,
                "class": to_json(offering),
                "date": day.isoformat(),
                "records": to_json(records),
                "stats": to_json(stats),
            }
        )

    @app.route("/api/classes/<class_id>/attendance", methods=["POST"], endpoint="api_submit_attendance")
    def api_submit_attendance(class_id: str):
        user = current_user(container)
        payload = request.get_json(silent=True) or {}
        raw_date = str(payload.get("date") or "").strip()
        try:
            day = parse_iso_date(raw_date)
        except ValueError:
            raise ValidationError("'date' must be a date (YYYY-MM-DD)") from None

        saved = container.attendance_service.submit_roster(
            user_id=user.user_id,
            class_id=class_id,
            day=day,
            marks=_parse_marks(payload),
            now=now_local(),
        )
        return jsonify({"success": True, "saved": len(saved), "records": to_json(saved)})

    @app.route(
        "/api/classes/<class_id>/students/<student_id>/absences",
        methods=["GET"],
        endpoint="api_student_absences",
    )
    def api_student_absences(class_id: str, student_id: str):
        user = current_user(container)
        as_of = date_arg("as_of", today())
        offering = container.access_service.get_class(class_id)
        container.access_service.ensure_access(user, offering, on=as_of)

        streak = container.attendance_service.consecutive_absences(student_id, class_id, as_of)
        return jsonify(
            {
                "success": True,
                "student_id": student_id,
                "class_id": class_id,
                "as_of": as_of.isoformat(),
                "count": streak.count,
                "dates": to_json(streak.dates),
                "warnings": [w.message() for w in streak.warnings],
            }
        )
