from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class WorkoutPlan:
    """Domain entity: a workout plan for one student, written by one instructor."""

    plan_id: int
    student_id: int
    instructor_id: int
    name: str
    notes: Optional[str] = None
    student_name: Optional[str] = None
    instructor_name: Optional[str] = None


@dataclass(frozen=True)
class WorkoutExercise:
    """Join entity between a plan and a catalog exercise.

    Within one plan ``position`` is unique and each exercise appears once.
    """

    plan_id: int
    exercise_id: int
    position: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    load_kg: Optional[float] = None
    rest_seconds: Optional[int] = None


@dataclass(frozen=True)
class WorkoutExerciseView:
    """Read-model: attachment joined with the catalog entry."""

    plan_id: int
    exercise_id: int
    position: int
    sets: Optional[int]
    reps: Optional[int]
    load_kg: Optional[float]
    rest_seconds: Optional[int]
    exercise_name: str
    muscle_group: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class WorkoutPlanDetail:
    plan: WorkoutPlan
    exercises: list[WorkoutExerciseView] = field(default_factory=list)
