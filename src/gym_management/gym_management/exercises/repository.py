from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Exercise


class ExerciseRepository(Protocol):
    def list_all(self) -> Sequence[Exercise]:
        raise NotImplementedError

    def get_by_id(self, exercise_id: int) -> Optional[Exercise]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        description: Optional[str],
        muscle_group: Optional[str],
        equipment: Optional[str],
        image_url: Optional[str],
    ) -> int:
        raise NotImplementedError
