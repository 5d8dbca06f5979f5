"""Ordering rule for exercises inside a workout plan.

Positions are positive integers, unique per plan. The database enforces the
uniqueness with ``UNIQUE(plan_id, position)``; the pre-check here only gives
callers a precise message before the write is attempted. A concurrent writer
that slips past the pre-check still fails on the constraint, and the
repository reports that failure with the same :func:`position_conflict`.
"""
from __future__ import annotations

from typing import Any, Optional

from ..common.validators import require_positive_int
from ..core.exceptions import ConflictError
from .repository import WorkoutRepository


def position_conflict(position: int) -> ConflictError:
    return ConflictError(
        f"Position {position} is already taken by another exercise in this plan",
        field="position",
        value=position,
    )


def duplicate_exercise_conflict(exercise_id: int) -> ConflictError:
    return ConflictError(
        "This exercise is already attached to this plan",
        field="exercise_id",
        value=exercise_id,
    )


class WorkoutExerciseOrderingRule:
    def __init__(self, workouts: WorkoutRepository):
        self._workouts = workouts

    @staticmethod
    def validate_position(value: Any) -> int:
        return require_positive_int(value, "Position")

    def check_available(self, *, plan_id: int, position: int, exclude_exercise_id: Optional[int] = None) -> None:
        if self._workouts.position_taken(
            plan_id=int(plan_id), position=int(position), exclude_exercise_id=exclude_exercise_id
        ):
            raise position_conflict(position)

    def validate(self, *, plan_id: int, position: Any, exclude_exercise_id: Optional[int] = None) -> int:
        """Validate the value and check it is free in the plan. Returns the position as int."""

        position = self.validate_position(position)
        self.check_available(plan_id=plan_id, position=position, exclude_exercise_id=exclude_exercise_id)
        return position
