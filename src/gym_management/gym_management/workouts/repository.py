from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkoutExercise, WorkoutExerciseView, WorkoutPlan


class WorkoutRepository(Protocol):
    def create_plan(
        self,
        *,
        student_id: int,
        instructor_id: int,
        name: str,
        notes: Optional[str],
        exercises: Sequence[WorkoutExercise] = (),
    ) -> int:
        """Insert the plan and its exercises in one transaction. Returns plan_id.

        ``WorkoutExercise.plan_id`` of the items is ignored.
        """

        raise NotImplementedError

    def get_plan(self, plan_id: int) -> Optional[WorkoutPlan]:
        raise NotImplementedError

    def list_plans(
        self,
        *,
        student_id: Optional[int] = None,
        instructor_id: Optional[int] = None,
    ) -> Sequence[WorkoutPlan]:
        raise NotImplementedError

    def update_plan(self, plan_id: int, *, name: str, notes: Optional[str]) -> bool:
        raise NotImplementedError

    def delete_plan(self, plan_id: int) -> bool:
        raise NotImplementedError

    def count_plans(self) -> int:
        raise NotImplementedError

    def list_exercises(self, plan_id: int) -> Sequence[WorkoutExerciseView]:
        """Ordered by position, then exercise name."""

        raise NotImplementedError

    def get_exercise(self, plan_id: int, exercise_id: int) -> Optional[WorkoutExerciseView]:
        raise NotImplementedError

    def position_taken(self, *, plan_id: int, position: int, exclude_exercise_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def attach_exercise(self, item: WorkoutExercise) -> None:
        """Atomic insert; a duplicate position or exercise raises ConflictError."""

        raise NotImplementedError

    def update_exercise(self, item: WorkoutExercise) -> bool:
        """Atomic update; a duplicate position raises ConflictError."""

        raise NotImplementedError

    def detach_exercise(self, plan_id: int, exercise_id: int) -> bool:
        raise NotImplementedError
