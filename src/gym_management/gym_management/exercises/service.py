from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_max_length, require_non_empty
from ..core.constants import EQUIPMENT_MAX_LENGTH, MUSCLE_GROUP_MAX_LENGTH, NAME_MAX_LENGTH, URL_MAX_LENGTH
from ..core.exceptions import NotFoundError
from .model import Exercise
from .repository import ExerciseRepository


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() or None if isinstance(value, str) else None


class ExerciseService:
    def __init__(self, exercises: ExerciseRepository):
        self._exercises = exercises

    def list_all(self) -> Sequence[Exercise]:
        return self._exercises.list_all()

    def get(self, exercise_id: int) -> Exercise:
        exercise = self._exercises.get_by_id(int(exercise_id))
        if not exercise:
            raise NotFoundError("Exercise not found")
        return exercise

    def create(
        self,
        *,
        name: str,
        description: Optional[str] = None,
        muscle_group: Optional[str] = None,
        equipment: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Exercise:
        exercise_id = self._exercises.create(
            name=require_max_length(require_non_empty(name, "Name"), "Name", NAME_MAX_LENGTH),
            description=_clean(description),
            muscle_group=require_max_length(_clean(muscle_group), "Muscle group", MUSCLE_GROUP_MAX_LENGTH),
            equipment=require_max_length(_clean(equipment), "Equipment", EQUIPMENT_MAX_LENGTH),
            image_url=require_max_length(_clean(image_url), "Image URL", URL_MAX_LENGTH),
        )
        return self.get(exercise_id)
