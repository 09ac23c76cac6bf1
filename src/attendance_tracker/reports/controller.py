from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.web import current_user, date_arg, int_arg, to_json, today
from ..container import Container
from ..core.constants import DEFAULT_AUDIT_LIMIT, DEFAULT_REPORT_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/at-risk", methods=["GET"], endpoint="api_at_risk")
    def api_at_risk():
        user = current_user(container)
        as_of = date_arg("as_of", today())
        report = container.risk_service.at_risk_students(user, as_of, threshold=int_arg("threshold"))
        return jsonify(
            {
                "success": True,
                "as_of": as_of.isoformat(),
                "total": len(report.rows),
                "critical": report.critical_count,
                "students": to_json(report.rows),
                "warnings": [w.message() for w in report.warnings],
            }
        )

    @app.route("/api/reports/completion/<crn>", methods=["GET"], endpoint="api_completion")
    def api_completion(crn: str):
        user = current_user(container)
        end = date_arg("end", today() + timedelta(days=1))
        start = date_arg("start", end - timedelta(days=DEFAULT_REPORT_DAYS))
        offering = container.access_service.get_class_by_crn(crn)
        container.access_service.ensure_access(user, offering, on=start)
        result = container.report_service.completion_rate(crn, start, end)
        return jsonify(
            {
                "success": True,
                "crn": result.crn,
                "start": result.start.isoformat(),
                "end": result.end.isoformat(),
                "expected": result.expected,
                "actual": result.actual,
                "completion": round(result.rate, 2),
                "warnings": [w.message() for w in result.warnings],
            }
        )

    @app.route("/api/reports/missing", methods=["GET"], endpoint="api_missing")
    def api_missing():
        user = current_user(container)
        day = date_arg("date", today())
        term = request.args.get("term") or None
        visible = {c.class_id for c in container.access_service.accessible_classes(user, term_code=term, on=day)}
        missing = [m for m in container.report_service.missing_attendance(day, term_code=term) if m.offering.class_id in visible]
        return jsonify(
            {
                "success": True,
                "date": day.isoformat(),
                "classes": [
                    {
                        "class_id": m.offering.class_id,
                        "crn": m.offering.crn,
                        "name": m.offering.name,
                        "recorded": m.recorded,
                        "expected": m.expected,
                    }
                    for m in missing
                ],
            }
        )

    @app.route("/api/reports/department", methods=["GET"], endpoint="api_department_summary")
    def api_department_summary():
        user = current_user(container)
        summary = container.report_service.department_summary(
            user,
            date_arg("date", today()),
            term_code=request.args.get("term") or None,
            instructor_id=request.args.get("instructor_id") or None,
        )
        return jsonify({"success": True, "summary": to_json(summary)})

    @app.route("/api/reports/crn-breakdown", methods=["GET"], endpoint="api_crn_breakdown")
    def api_crn_breakdown():
        user = current_user(container)
        end = date_arg("end", today() + timedelta(days=1))
        start = date_arg("start", end - timedelta(days=DEFAULT_REPORT_DAYS))
        rows = container.report_service.crn_breakdown(
            user,
            start=start,
            end=end,
            term_code=request.args.get("term") or None,
            instructor_id=request.args.get("instructor_id") or None,
        )
        return jsonify({"success": True, "rows": to_json(rows)})

    @app.route("/api/reports/audit", methods=["GET"], endpoint="api_audit_logs")
    def api_audit_logs():
        user = current_user(container)
        limit = int_arg("limit")
        if limit is None:
            limit = DEFAULT_AUDIT_LIMIT
        logs = container.report_service.audit_logs(user, limit=limit)
        return jsonify({"success": True, "logs": to_json(list(logs))})

    @app.route("/api/terms", methods=["GET"], endpoint="api_terms")
    def api_terms():
        return jsonify({"success": True, "terms": to_json(list(container.report_service.terms()))})
