from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_primitive
from ..common.validators import require_positive_int
from ..common.web import current_account_id, current_role, int_arg, json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import WorkoutPlan


def register(app: Flask, container: Container) -> None:
    workouts = container.workout_service
    students = container.student_service

    def ensure_can_read(plan: WorkoutPlan) -> None:
        role = current_role()
        if role == Role.STUDENT and plan.student_id != current_account_id():
            raise AuthorizationError("This workout plan belongs to another student")
        if role == Role.INSTRUCTOR and plan.instructor_id != current_account_id():
            raise AuthorizationError("This workout plan belongs to another instructor")

    def ensure_can_edit(plan_id: int) -> None:
        plan = workouts.get_plan(plan_id).plan
        if current_role() == Role.INSTRUCTOR and plan.instructor_id != current_account_id():
            raise AuthorizationError("This workout plan belongs to another instructor")

    @app.route("/api/workouts", endpoint="workouts_list")
    @login_required
    def workouts_list():
        role = current_role()
        if role == Role.STUDENT:
            plans = workouts.list_plans(student_id=current_account_id())
        elif role == Role.INSTRUCTOR:
            plans = workouts.list_plans(
                student_id=int_arg("student_id", required=False), instructor_id=current_account_id()
            )
        else:
            plans = workouts.list_plans(
                student_id=int_arg("student_id", required=False),
                instructor_id=int_arg("instructor_id", required=False),
            )
        return jsonify(to_primitive(plans))

    @app.route("/api/workouts", methods=["POST"], endpoint="workouts_create")
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def workouts_create():
        data = json_body()
        if current_role() == Role.INSTRUCTOR:
            instructor_id = current_account_id()
            student = students.get(require_positive_int(data.get("student_id"), "Student"))
            if student.instructor_id != instructor_id:
                raise AuthorizationError("This student belongs to another instructor")
        else:
            instructor_id = data.get("instructor_id")

        detail = workouts.create_plan(
            student_id=data.get("student_id"),
            instructor_id=instructor_id,
            name=data.get("name"),
            notes=data.get("notes"),
            exercises=data.get("exercises") or [],
            mark_active=bool(data.get("mark_active")),
        )
        return jsonify(to_primitive(detail)), 201

    @app.route("/api/workouts/<int:plan_id>", endpoint="workouts_detail")
    @login_required
    def workouts_detail(plan_id: int):
        detail = workouts.get_plan(plan_id)
        ensure_can_read(detail.plan)
        return jsonify(to_primitive(detail))

    @app.route("/api/workouts/<int:plan_id>", methods=["PUT"], endpoint="workouts_update")
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def workouts_update(plan_id: int):
        ensure_can_edit(plan_id)
        data = json_body()
        detail = workouts.update_plan(plan_id, name=data.get("name"), notes=data.get("notes"))
        return jsonify(to_primitive(detail))

    @app.route("/api/workouts/<int:plan_id>", methods=["DELETE"], endpoint="workouts_delete")
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def workouts_delete(plan_id: int):
        ensure_can_edit(plan_id)
        workouts.delete_plan(plan_id)
        return "", 204

    # ----- exercises inside a plan -----

    @app.route("/api/workouts/<int:plan_id>/exercises", endpoint="plan_exercises_list")
    @login_required
    def plan_exercises_list(plan_id: int):
        ensure_can_read(workouts.get_plan(plan_id).plan)
        return jsonify(to_primitive(workouts.list_exercises(plan_id)))

    @app.route("/api/workouts/<int:plan_id>/exercises", methods=["POST"], endpoint="plan_exercises_attach")
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def plan_exercises_attach(plan_id: int):
        ensure_can_edit(plan_id)
        view = workouts.attach_exercise(plan_id, json_body())
        return jsonify(to_primitive(view)), 201

    @app.route(
        "/api/workouts/<int:plan_id>/exercises/<int:exercise_id>",
        methods=["PUT"],
        endpoint="plan_exercises_update",
    )
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def plan_exercises_update(plan_id: int, exercise_id: int):
        ensure_can_edit(plan_id)
        view = workouts.update_exercise(plan_id, exercise_id, json_body())
        return jsonify(to_primitive(view))

    @app.route(
        "/api/workouts/<int:plan_id>/exercises/<int:exercise_id>",
        methods=["DELETE"],
        endpoint="plan_exercises_detach",
    )
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def plan_exercises_detach(plan_id: int, exercise_id: int):
        ensure_can_edit(plan_id)
        workouts.detach_exercise(plan_id, exercise_id)
        return "", 204

    @app.route("/api/students/<int:student_id>/workouts", endpoint="student_workouts")
    @login_required
    def student_workouts(student_id: int):
        if current_role() == Role.STUDENT and student_id != current_account_id():
            raise AuthorizationError("You can only view your own workouts")
        plans = workouts.list_plans(student_id=student_id)
        if current_role() == Role.INSTRUCTOR:
            plans = [p for p in plans if p.instructor_id == current_account_id()]
        return jsonify(to_primitive(plans))
