from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_primitive
from ..common.web import json_body, roles_required
from ..container import Container
from ..core.enums import Role
from .forms import InstructorForm


def register(app: Flask, container: Container) -> None:
    instructors = container.instructor_service

    @app.route("/api/instructors", endpoint="instructors_list")
    @roles_required(Role.ADMIN)
    def instructors_list():
        return jsonify(to_primitive(instructors.search(request.args.get("q"))))

    @app.route("/api/instructors", methods=["POST"], endpoint="instructors_create")
    @roles_required(Role.ADMIN)
    def instructors_create():
        instructor = instructors.create(InstructorForm.from_dict(json_body()))
        return jsonify(to_primitive(instructor)), 201

    @app.route("/api/instructors/<int:instructor_id>", endpoint="instructors_detail")
    @roles_required(Role.ADMIN)
    def instructors_detail(instructor_id: int):
        return jsonify(to_primitive(instructors.get(instructor_id)))

    @app.route("/api/instructors/<int:instructor_id>", methods=["PUT"], endpoint="instructors_update")
    @roles_required(Role.ADMIN)
    def instructors_update(instructor_id: int):
        instructor = instructors.update(instructor_id, InstructorForm.from_dict(json_body()))
        return jsonify(to_primitive(instructor))

    @app.route("/api/instructors/<int:instructor_id>", methods=["DELETE"], endpoint="instructors_delete")
    @roles_required(Role.ADMIN)
    def instructors_delete(instructor_id: int):
        instructors.delete(instructor_id)
        return "", 204
