from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Exercise
from .repository import ExerciseRepository

_COLUMNS = "exercise_id, name, description, muscle_group, equipment, image_url"


def _to_exercise(r: dict) -> Exercise:
    return Exercise(
        exercise_id=int(r["exercise_id"]),
        name=r["name"],
        description=r.get("description"),
        muscle_group=r.get("muscle_group"),
        equipment=r.get("equipment"),
        image_url=r.get("image_url"),
    )


class MySQLExerciseRepository(ExerciseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Exercise]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM exercises ORDER BY exercise_id ASC")
            return [_to_exercise(r) for r in fetchall(cur)]

    def get_by_id(self, exercise_id: int) -> Optional[Exercise]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM exercises WHERE exercise_id=%s", (int(exercise_id),))
            r = fetchone(cur)
            return _to_exercise(r) if r else None

    def create(
        self,
        *,
        name: str,
        description: Optional[str],
        muscle_group: Optional[str],
        equipment: Optional[str],
        image_url: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO exercises(name, description, muscle_group, equipment, image_url)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, description, muscle_group, equipment, image_url),
            )
            return int(cur.lastrowid)
