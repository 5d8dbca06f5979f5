from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.forms import parse_status
from ..common.serialization import to_primitive
from ..common.web import current_account_id, current_role, json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .forms import StudentForm


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.route("/api/students/register", methods=["POST"], endpoint="student_register")
    def student_register():
        student = students.register(StudentForm.from_dict(json_body()))
        return jsonify(to_primitive(student)), 201

    @app.route("/api/students", endpoint="students_list")
    @roles_required(Role.ADMIN)
    def students_list():
        return jsonify(to_primitive(students.search(request.args.get("q"))))

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @roles_required(Role.ADMIN)
    def students_create():
        student = students.create(StudentForm.from_dict(json_body()))
        return jsonify(to_primitive(student)), 201

    @app.route("/api/students/<int:student_id>", endpoint="students_detail")
    @login_required
    def students_detail(student_id: int):
        student = students.get(student_id)
        role = current_role()
        if role == Role.STUDENT and student.student_id != current_account_id():
            raise AuthorizationError("You can only view your own profile")
        if role == Role.INSTRUCTOR and student.instructor_id != current_account_id():
            raise AuthorizationError("This student belongs to another instructor")

        payload = to_primitive(student)
        payload["standing"] = student.standing().value
        return jsonify(payload)

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="students_update")
    @roles_required(Role.ADMIN)
    def students_update(student_id: int):
        student = students.update(student_id, StudentForm.from_dict(json_body()))
        return jsonify(to_primitive(student))

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="students_delete")
    @roles_required(Role.ADMIN)
    def students_delete(student_id: int):
        students.delete(student_id)
        return "", 204

    # ----- instructor views -----

    @app.route("/api/instructor/students", endpoint="instructor_students")
    @roles_required(Role.INSTRUCTOR)
    def instructor_students():
        rows = students.list_for_instructor(current_account_id(), request.args.get("q"))
        return jsonify(to_primitive(rows))

    @app.route(
        "/api/instructor/students/<int:student_id>/status",
        methods=["PUT"],
        endpoint="instructor_student_status",
    )
    @roles_required(Role.INSTRUCTOR)
    def instructor_student_status(student_id: int):
        status = parse_status(json_body().get("status"))
        student = students.set_status_for_instructor(
            instructor_id=current_account_id(), student_id=student_id, status=status
        )
        return jsonify(to_primitive(student))
