from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.serialization import to_primitive
from ..common.web import roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def _parse_month(raw: str):
    try:
        return datetime.strptime(raw.strip(), "%Y-%m").date()
    except ValueError:
        raise ValidationError("Invalid month (expected YYYY-MM)")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/stats", endpoint="admin_stats")
    @roles_required(Role.ADMIN)
    def admin_stats():
        return jsonify(to_primitive(container.dashboard_service.admin_stats()))

    @app.route("/api/reports/billing", endpoint="billing_report")
    @roles_required(Role.ADMIN)
    def billing_report():
        raw = request.args.get("month")
        report = container.billing_report.build(_parse_month(raw) if raw else None)
        payload = to_primitive(report)
        payload["reference_month"] = report.reference_month
        return jsonify(payload)
