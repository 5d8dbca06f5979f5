from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import membership_standing
from ..core.enums import ActiveStatus, PlanTier
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern
from .model import Student, StudentRow
from .repository import StudentRepository

_COLUMNS = """
    student_id, instructor_id, full_name, cpf, email, password_hash,
    status, plan_tier, payment_date, due_date, active_plan_id
"""
_UPDATABLE = (
    "instructor_id",
    "full_name",
    "cpf",
    "email",
    "password_hash",
    "status",
    "plan_tier",
    "payment_date",
    "due_date",
)


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        instructor_id=r.get("instructor_id"),
        full_name=r["full_name"],
        cpf=r["cpf"],
        email=r["email"],
        status=ActiveStatus(r["status"]),
        plan_tier=PlanTier(r["plan_tier"]),
        payment_date=r.get("payment_date"),
        due_date=r.get("due_date"),
        active_plan_id=r.get("active_plan_id"),
        password_hash=r.get("password_hash"),
    )


def _to_row(r: dict) -> StudentRow:
    return StudentRow(
        student_id=int(r["student_id"]),
        instructor_id=r.get("instructor_id"),
        instructor_name=r.get("instructor_name"),
        full_name=r["full_name"],
        email=r["email"],
        cpf=r["cpf"],
        status=ActiveStatus(r["status"]),
        plan_tier=PlanTier(r["plan_tier"]),
        payment_date=r.get("payment_date"),
        due_date=r.get("due_date"),
        standing=membership_standing(r.get("due_date")),
    )


def _conflict_for(e: ConflictError) -> ConflictError:
    if e.field == "uq_students_cpf":
        return ConflictError("CPF already registered", field="cpf")
    if e.field == "uq_students_email":
        return ConflictError("E-mail already registered", field="email")
    return e


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def _list(self, clauses: list[str], params: list[object], order_by: str) -> Sequence[StudentRow]:
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    s.student_id, s.instructor_id, i.full_name AS instructor_name,
                    s.full_name, s.email, s.cpf, s.status, s.plan_tier,
                    s.payment_date, s.due_date
                FROM students s
                LEFT JOIN instructors i ON i.instructor_id = s.instructor_id
                {where}
                ORDER BY {order_by}
                """,
                tuple(params),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def search(self, q: Optional[str] = None) -> Sequence[StudentRow]:
        clauses: list[str] = []
        params: list[object] = []
        pattern = like_pattern(q)
        if pattern:
            clauses.append("(s.full_name LIKE %s OR s.email LIKE %s OR s.cpf LIKE %s)")
            params.extend([pattern, pattern, pattern])
        return self._list(clauses, params, "s.student_id DESC")

    def list_for_instructor(self, instructor_id: int, q: Optional[str] = None) -> Sequence[StudentRow]:
        clauses = ["s.instructor_id=%s"]
        params: list[object] = [int(instructor_id)]
        pattern = like_pattern(q)
        if pattern:
            clauses.append("(s.full_name LIKE %s OR s.email LIKE %s)")
            params.extend([pattern, pattern])
        return self._list(clauses, params, "s.full_name ASC")

    def create(
        self,
        *,
        instructor_id: Optional[int],
        full_name: str,
        cpf: str,
        email: str,
        password_hash: Optional[str],
        status: ActiveStatus,
        plan_tier: PlanTier,
        payment_date: Optional[date] = None,
        due_date: Optional[date] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(
                        instructor_id, full_name, cpf, email, password_hash,
                        status, plan_tier, payment_date, due_date
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        instructor_id,
                        full_name,
                        cpf,
                        email,
                        password_hash,
                        status.value,
                        plan_tier.value,
                        payment_date,
                        due_date,
                    ),
                )
                return int(cur.lastrowid)
        except ConflictError as e:
            raise _conflict_for(e) from e

    def update(self, student_id: int, **fields) -> bool:
        sets = [
            (k, v.value if isinstance(v, (ActiveStatus, PlanTier)) else v)
            for k, v in fields.items()
            if k in _UPDATABLE
        ]
        if not sets:
            return self.get_by_id(student_id) is not None

        assignments = ", ".join(f"{k}=%s" for k, _ in sets)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE students SET {assignments} WHERE student_id=%s",
                    tuple(v for _, v in sets) + (int(student_id),),
                )
                if cur.rowcount > 0:
                    return True
                # MySQL reports 0 affected rows when values are unchanged
                cur.execute("SELECT 1 AS found FROM students WHERE student_id=%s", (int(student_id),))
                return fetchone(cur) is not None
        except ConflictError as e:
            raise _conflict_for(e) from e

    def set_status_for_instructor(self, *, student_id: int, instructor_id: int, status: ActiveStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET status=%s
                WHERE student_id=%s AND instructor_id=%s
                """,
                (status.value, int(student_id), int(instructor_id)),
            )
            if cur.rowcount > 0:
                return True
            cur.execute(
                "SELECT 1 AS found FROM students WHERE student_id=%s AND instructor_id=%s",
                (int(student_id), int(instructor_id)),
            )
            return fetchone(cur) is not None

    def set_active_plan(self, *, student_id: int, plan_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET active_plan_id=%s WHERE student_id=%s",
                (plan_id, int(student_id)),
            )
            return cur.rowcount > 0

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM students")
            r = fetchone(cur)
            return int(r["total"]) if r else 0
