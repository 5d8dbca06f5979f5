from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_primitive
from ..common.web import json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    exercises = container.exercise_service

    @app.route("/api/exercises", endpoint="exercises_list")
    @login_required
    def exercises_list():
        return jsonify(to_primitive(exercises.list_all()))

    @app.route("/api/exercises/<int:exercise_id>", endpoint="exercises_detail")
    @login_required
    def exercises_detail(exercise_id: int):
        return jsonify(to_primitive(exercises.get(exercise_id)))

    @app.route("/api/exercises", methods=["POST"], endpoint="exercises_create")
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def exercises_create():
        data = json_body()
        exercise = exercises.create(
            name=data.get("name"),
            description=data.get("description"),
            muscle_group=data.get("muscle_group"),
            equipment=data.get("equipment"),
            image_url=data.get("image_url"),
        )
        return jsonify(to_primitive(exercise)), 201
