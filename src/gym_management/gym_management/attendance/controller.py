from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import next_month, parse_iso_date, previous_month, today
from ..common.serialization import to_primitive
from ..common.validators import require_positive_int
from ..common.web import current_account_id, current_role, int_arg, json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    students = container.student_service

    def ensure_own_student(student_id: int) -> None:
        student = students.get(student_id)
        if student.instructor_id != current_account_id():
            raise AuthorizationError("This student belongs to another instructor")

    @app.route("/api/attendance/roster", endpoint="attendance_roster")
    @roles_required(Role.INSTRUCTOR)
    def attendance_roster():
        raw = request.args.get("date")
        day = parse_iso_date(raw) if raw else today()
        entries = attendance.roster(instructor_id=current_account_id(), attendance_date=day)
        return jsonify({"date": day.isoformat(), "students": to_primitive(entries)})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @roles_required(Role.INSTRUCTOR)
    def attendance_mark():
        data = json_body()
        student_id = require_positive_int(data.get("student_id"), "Student")
        ensure_own_student(student_id)

        raw = data.get("date")
        record = attendance.mark(
            student_id=student_id,
            attendance_date=parse_iso_date(raw) if raw else today(),
            status=data.get("status"),
            note=data.get("note"),
        )
        return jsonify(to_primitive(record))

    @app.route("/api/students/<int:student_id>/attendance", endpoint="student_attendance")
    @login_required
    def student_attendance(student_id: int):
        role = current_role()
        if role == Role.STUDENT and student_id != current_account_id():
            raise AuthorizationError("You can only view your own attendance")
        if role == Role.INSTRUCTOR:
            ensure_own_student(student_id)

        current = today()
        year = int_arg("year", required=False, default=current.year)
        month = int_arg("month", required=False, default=current.month)
        monthly = attendance.student_month(student_id=student_id, year=year, month=month)

        payload = to_primitive(monthly)
        payload["previous"] = dict(zip(("year", "month"), previous_month(year, month)))
        payload["next"] = dict(zip(("year", "month"), next_month(year, month)))
        return jsonify(payload)
