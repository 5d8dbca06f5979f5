from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkoutExercise, WorkoutExerciseView, WorkoutPlan
from .ordering import duplicate_exercise_conflict, position_conflict
from .repository import WorkoutRepository

_EXERCISE_VIEW_SQL = """
    SELECT
        we.plan_id, we.exercise_id, we.position, we.sets, we.reps,
        we.load_kg, we.rest_seconds,
        e.name AS exercise_name, e.muscle_group, e.image_url
    FROM workout_exercises we
    JOIN exercises e ON e.exercise_id = we.exercise_id
"""


def _to_view(r: dict) -> WorkoutExerciseView:
    return WorkoutExerciseView(
        plan_id=int(r["plan_id"]),
        exercise_id=int(r["exercise_id"]),
        position=int(r["position"]),
        sets=r.get("sets"),
        reps=r.get("reps"),
        load_kg=float(r["load_kg"]) if r.get("load_kg") is not None else None,
        rest_seconds=r.get("rest_seconds"),
        exercise_name=r["exercise_name"],
        muscle_group=r.get("muscle_group"),
        image_url=r.get("image_url"),
    )


def _to_plan(r: dict) -> WorkoutPlan:
    return WorkoutPlan(
        plan_id=int(r["plan_id"]),
        student_id=int(r["student_id"]),
        instructor_id=int(r["instructor_id"]),
        name=r["name"],
        notes=r.get("notes"),
        student_name=r.get("student_name"),
        instructor_name=r.get("instructor_name"),
    )


def _conflict_for(e: ConflictError, item: WorkoutExercise) -> ConflictError:
    if e.field == "uq_plan_position":
        return position_conflict(item.position)
    if e.field == "PRIMARY":
        return duplicate_exercise_conflict(item.exercise_id)
    return e


def _insert_exercise(cur, plan_id: int, item: WorkoutExercise) -> None:
    cur.execute(
        """
        INSERT INTO workout_exercises
            (plan_id, exercise_id, position, sets, reps, load_kg, rest_seconds)
        VALUES (%s,%s,%s,%s,%s,%s,%s)
        """,
        (
            int(plan_id),
            int(item.exercise_id),
            int(item.position),
            item.sets,
            item.reps,
            item.load_kg,
            item.rest_seconds,
        ),
    )


class MySQLWorkoutRepository(WorkoutRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_plan(
        self,
        *,
        student_id: int,
        instructor_id: int,
        name: str,
        notes: Optional[str],
        exercises: Sequence[WorkoutExercise] = (),
    ) -> int:
        current: Optional[WorkoutExercise] = None
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO workout_plans(student_id, instructor_id, name, notes)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(student_id), int(instructor_id), name, notes),
                )
                plan_id = int(cur.lastrowid)
                for current in exercises:
                    _insert_exercise(cur, plan_id, current)
                return plan_id
        except ConflictError as e:
            if current is None:
                raise
            raise _conflict_for(e, current) from e

    def _select_plans(self, where: str, params: tuple) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    p.plan_id, p.student_id, p.instructor_id, p.name, p.notes,
                    s.full_name AS student_name, i.full_name AS instructor_name
                FROM workout_plans p
                JOIN students s ON s.student_id = p.student_id
                JOIN instructors i ON i.instructor_id = p.instructor_id
                {where}
                ORDER BY p.plan_id DESC
                """,
                params,
            )
            return fetchall(cur)

    def get_plan(self, plan_id: int) -> Optional[WorkoutPlan]:
        rows = self._select_plans("WHERE p.plan_id=%s", (int(plan_id),))
        return _to_plan(rows[0]) if rows else None

    def list_plans(
        self,
        *,
        student_id: Optional[int] = None,
        instructor_id: Optional[int] = None,
    ) -> Sequence[WorkoutPlan]:
        clauses: list[str] = []
        params: list[object] = []
        if student_id is not None:
            clauses.append("p.student_id=%s")
            params.append(int(student_id))
        if instructor_id is not None:
            clauses.append("p.instructor_id=%s")
            params.append(int(instructor_id))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return [_to_plan(r) for r in self._select_plans(where, tuple(params))]

    def update_plan(self, plan_id: int, *, name: str, notes: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE workout_plans SET name=%s, notes=%s WHERE plan_id=%s",
                (name, notes, int(plan_id)),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM workout_plans WHERE plan_id=%s", (int(plan_id),))
            return fetchone(cur) is not None

    def delete_plan(self, plan_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET active_plan_id=NULL WHERE active_plan_id=%s", (int(plan_id),))
            cur.execute("DELETE FROM workout_plans WHERE plan_id=%s", (int(plan_id),))
            return cur.rowcount > 0

    def count_plans(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM workout_plans")
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def list_exercises(self, plan_id: int) -> Sequence[WorkoutExerciseView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _EXERCISE_VIEW_SQL + " WHERE we.plan_id=%s ORDER BY we.position ASC, e.name ASC",
                (int(plan_id),),
            )
            return [_to_view(r) for r in fetchall(cur)]

    def get_exercise(self, plan_id: int, exercise_id: int) -> Optional[WorkoutExerciseView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _EXERCISE_VIEW_SQL + " WHERE we.plan_id=%s AND we.exercise_id=%s",
                (int(plan_id), int(exercise_id)),
            )
            r = fetchone(cur)
            return _to_view(r) if r else None

    def position_taken(self, *, plan_id: int, position: int, exclude_exercise_id: Optional[int] = None) -> bool:
        sql = "SELECT COUNT(*) AS total FROM workout_exercises WHERE plan_id=%s AND position=%s"
        params: list[object] = [int(plan_id), int(position)]
        if exclude_exercise_id is not None:
            sql += " AND exercise_id<>%s"
            params.append(int(exclude_exercise_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return bool(r and int(r["total"]) > 0)

    def attach_exercise(self, item: WorkoutExercise) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                _insert_exercise(cur, item.plan_id, item)
        except ConflictError as e:
            raise _conflict_for(e, item) from e

    def update_exercise(self, item: WorkoutExercise) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE workout_exercises
                    SET position=%s, sets=%s, reps=%s, load_kg=%s, rest_seconds=%s
                    WHERE plan_id=%s AND exercise_id=%s
                    """,
                    (
                        int(item.position),
                        item.sets,
                        item.reps,
                        item.load_kg,
                        item.rest_seconds,
                        int(item.plan_id),
                        int(item.exercise_id),
                    ),
                )
                if cur.rowcount > 0:
                    return True
                cur.execute(
                    "SELECT 1 AS found FROM workout_exercises WHERE plan_id=%s AND exercise_id=%s",
                    (int(item.plan_id), int(item.exercise_id)),
                )
                return fetchone(cur) is not None
        except ConflictError as e:
            raise _conflict_for(e, item) from e

    def detach_exercise(self, plan_id: int, exercise_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM workout_exercises WHERE plan_id=%s AND exercise_id=%s",
                (int(plan_id), int(exercise_id)),
            )
            return cur.rowcount > 0
