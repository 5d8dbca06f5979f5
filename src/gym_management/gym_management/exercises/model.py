from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Exercise:
    """Catalog entry; referenced (never owned) by workout plans."""

    exercise_id: int
    name: str
    description: Optional[str] = None
    muscle_group: Optional[str] = None
    equipment: Optional[str] = None
    image_url: Optional[str] = None
