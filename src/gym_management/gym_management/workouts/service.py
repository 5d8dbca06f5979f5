from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.validators import (
    optional_non_negative_number,
    require_max_length,
    require_non_empty,
    require_positive_int,
)
from ..core.constants import LOAD_KG_MAX, NAME_MAX_LENGTH
from ..core.exceptions import NotFoundError
from ..exercises.repository import ExerciseRepository
from ..instructors.repository import InstructorRepository
from ..students.repository import StudentRepository
from .model import WorkoutExercise, WorkoutExerciseView, WorkoutPlan, WorkoutPlanDetail
from .ordering import WorkoutExerciseOrderingRule, duplicate_exercise_conflict, position_conflict
from .repository import WorkoutRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExerciseLoad:
    """Training parameters of one attached exercise."""

    sets: Optional[int] = None
    reps: Optional[int] = None
    load_kg: Optional[float] = None
    rest_seconds: Optional[int] = None

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "ExerciseLoad":
        return cls(
            sets=optional_non_negative_number(data.get("sets"), "Sets", integer=True),
            reps=optional_non_negative_number(data.get("reps"), "Reps", integer=True),
            load_kg=optional_non_negative_number(data.get("load_kg"), "Load (kg)", maximum=LOAD_KG_MAX),
            rest_seconds=optional_non_negative_number(data.get("rest_seconds"), "Rest (s)", integer=True),
        )


def _clean_notes(notes: Optional[str]) -> Optional[str]:
    return notes.strip() or None if isinstance(notes, str) else None


class WorkoutService:
    def __init__(
        self,
        workouts: WorkoutRepository,
        students: StudentRepository,
        instructors: InstructorRepository,
        exercises: ExerciseRepository,
        *,
        ordering: Optional[WorkoutExerciseOrderingRule] = None,
    ):
        self._workouts = workouts
        self._students = students
        self._instructors = instructors
        self._exercises = exercises
        self._ordering = ordering or WorkoutExerciseOrderingRule(workouts)

    # ----- plans -----

    def _require_plan(self, plan_id: int) -> WorkoutPlan:
        plan = self._workouts.get_plan(int(plan_id))
        if not plan:
            raise NotFoundError("Workout plan not found")
        return plan

    def _require_exercise(self, exercise_id: Any) -> int:
        exercise_id = require_positive_int(exercise_id, "Exercise")
        if not self._exercises.get_by_id(exercise_id):
            raise NotFoundError(f"Exercise {exercise_id} not found")
        return exercise_id

    def _plan_items(self, items: Iterable[Mapping[str, Any]]) -> list[WorkoutExercise]:
        """Validate the exercises of a new plan.

        Items without a position are placed after the highest position seen so far,
        so a list without positions becomes 1..n.
        """

        out: list[WorkoutExercise] = []
        positions: set[int] = set()
        exercise_ids: set[int] = set()

        for item in items:
            exercise_id = self._require_exercise(item.get("exercise_id"))
            raw_position = item.get("position")
            if raw_position is None or (isinstance(raw_position, str) and not raw_position.strip()):
                position = max(positions, default=0) + 1
            else:
                position = WorkoutExerciseOrderingRule.validate_position(raw_position)

            if position in positions:
                raise position_conflict(position)
            if exercise_id in exercise_ids:
                raise duplicate_exercise_conflict(exercise_id)
            positions.add(position)
            exercise_ids.add(exercise_id)

            load = ExerciseLoad.parse(item)
            out.append(
                WorkoutExercise(
                    plan_id=0,
                    exercise_id=exercise_id,
                    position=position,
                    sets=load.sets,
                    reps=load.reps,
                    load_kg=load.load_kg,
                    rest_seconds=load.rest_seconds,
                )
            )
        return out

    def create_plan(
        self,
        *,
        student_id: int,
        instructor_id: int,
        name: str,
        notes: Optional[str] = None,
        exercises: Iterable[Mapping[str, Any]] = (),
        mark_active: bool = False,
    ) -> WorkoutPlanDetail:
        name = require_max_length(require_non_empty(name, "Plan name"), "Plan name", NAME_MAX_LENGTH)
        student_id = require_positive_int(student_id, "Student")
        instructor_id = require_positive_int(instructor_id, "Instructor")
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")
        if not self._instructors.get_by_id(instructor_id):
            raise NotFoundError("Instructor not found")

        items = self._plan_items(exercises)
        plan_id = self._workouts.create_plan(
            student_id=student_id,
            instructor_id=instructor_id,
            name=name,
            notes=_clean_notes(notes),
            exercises=items,
        )
        if mark_active:
            self._students.set_active_plan(student_id=student_id, plan_id=plan_id)

        logger.info("plan %s created for student %s with %d exercises", plan_id, student_id, len(items))
        return self.get_plan(plan_id)

    def get_plan(self, plan_id: int) -> WorkoutPlanDetail:
        plan = self._require_plan(plan_id)
        return WorkoutPlanDetail(plan=plan, exercises=list(self._workouts.list_exercises(plan.plan_id)))

    def list_plans(
        self,
        *,
        student_id: Optional[int] = None,
        instructor_id: Optional[int] = None,
    ) -> Sequence[WorkoutPlan]:
        return self._workouts.list_plans(student_id=student_id, instructor_id=instructor_id)

    def update_plan(self, plan_id: int, *, name: str, notes: Optional[str] = None) -> WorkoutPlanDetail:
        name = require_max_length(require_non_empty(name, "Plan name"), "Plan name", NAME_MAX_LENGTH)
        if not self._workouts.update_plan(int(plan_id), name=name, notes=_clean_notes(notes)):
            raise NotFoundError("Workout plan not found")
        return self.get_plan(plan_id)

    def delete_plan(self, plan_id: int) -> None:
        if not self._workouts.delete_plan(int(plan_id)):
            raise NotFoundError("Workout plan not found")
        logger.info("plan %s deleted", plan_id)

    # ----- exercises inside a plan -----

    def list_exercises(self, plan_id: int) -> Sequence[WorkoutExerciseView]:
        plan = self._require_plan(plan_id)
        return self._workouts.list_exercises(plan.plan_id)

    def attach_exercise(self, plan_id: int, data: Mapping[str, Any]) -> WorkoutExerciseView:
        plan = self._require_plan(plan_id)
        exercise_id = self._require_exercise(data.get("exercise_id"))
        position = self._ordering.validate(plan_id=plan.plan_id, position=data.get("position"))
        if self._workouts.get_exercise(plan.plan_id, exercise_id):
            raise duplicate_exercise_conflict(exercise_id)

        load = ExerciseLoad.parse(data)
        self._workouts.attach_exercise(
            WorkoutExercise(
                plan_id=plan.plan_id,
                exercise_id=exercise_id,
                position=position,
                sets=load.sets,
                reps=load.reps,
                load_kg=load.load_kg,
                rest_seconds=load.rest_seconds,
            )
        )
        return self._workouts.get_exercise(plan.plan_id, exercise_id)

    def update_exercise(self, plan_id: int, exercise_id: int, data: Mapping[str, Any]) -> WorkoutExerciseView:
        exercise_id = require_positive_int(exercise_id, "Exercise")
        if not self._workouts.get_exercise(int(plan_id), exercise_id):
            raise NotFoundError("Exercise is not attached to this plan")

        position = self._ordering.validate(
            plan_id=int(plan_id), position=data.get("position"), exclude_exercise_id=exercise_id
        )
        load = ExerciseLoad.parse(data)
        item = WorkoutExercise(
            plan_id=int(plan_id),
            exercise_id=exercise_id,
            position=position,
            sets=load.sets,
            reps=load.reps,
            load_kg=load.load_kg,
            rest_seconds=load.rest_seconds,
        )
        if not self._workouts.update_exercise(item):
            raise NotFoundError("Exercise is not attached to this plan")
        return self._workouts.get_exercise(int(plan_id), exercise_id)

    def detach_exercise(self, plan_id: int, exercise_id: int) -> None:
        if not self._workouts.detach_exercise(int(plan_id), int(exercise_id)):
            raise NotFoundError("Exercise is not attached to this plan")
