from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ActiveStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern
from .model import Instructor
from .repository import InstructorRepository

_COLUMNS = "instructor_id, full_name, cpf, email, password_hash, status"
_UPDATABLE = ("full_name", "cpf", "email", "password_hash", "status")


def _to_instructor(r: dict) -> Instructor:
    return Instructor(
        instructor_id=int(r["instructor_id"]),
        full_name=r["full_name"],
        cpf=r["cpf"],
        email=r["email"],
        status=ActiveStatus(r["status"]),
        password_hash=r.get("password_hash") or "",
    )


def _conflict_for(e: ConflictError) -> ConflictError:
    if e.field == "uq_instructors_cpf":
        return ConflictError("CPF already registered", field="cpf")
    if e.field == "uq_instructors_email":
        return ConflictError("E-mail already registered", field="email")
    return e


class MySQLInstructorRepository(InstructorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, instructor_id: int) -> Optional[Instructor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM instructors WHERE instructor_id=%s", (int(instructor_id),))
            r = fetchone(cur)
            return _to_instructor(r) if r else None

    def first_active(self) -> Optional[Instructor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM instructors
                WHERE status='ACTIVE'
                ORDER BY instructor_id ASC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            return _to_instructor(r) if r else None

    def search(self, q: Optional[str] = None) -> Sequence[Instructor]:
        pattern = like_pattern(q)
        with db_cursor(self._conn_factory) as (_, cur):
            if pattern:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM instructors
                    WHERE full_name LIKE %s OR email LIKE %s OR cpf LIKE %s
                    ORDER BY instructor_id DESC
                    """,
                    (pattern, pattern, pattern),
                )
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM instructors ORDER BY instructor_id DESC")
            return [_to_instructor(r) for r in fetchall(cur)]

    def create(self, *, full_name: str, cpf: str, email: str, password_hash: str, status: ActiveStatus) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO instructors(full_name, cpf, email, password_hash, status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (full_name, cpf, email, password_hash, status.value),
                )
                return int(cur.lastrowid)
        except ConflictError as e:
            raise _conflict_for(e) from e

    def update(self, instructor_id: int, **fields) -> bool:
        sets = [(k, v.value if isinstance(v, ActiveStatus) else v) for k, v in fields.items() if k in _UPDATABLE]
        if not sets:
            return self.get_by_id(instructor_id) is not None

        assignments = ", ".join(f"{k}=%s" for k, _ in sets)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE instructors SET {assignments} WHERE instructor_id=%s",
                    tuple(v for _, v in sets) + (int(instructor_id),),
                )
                if cur.rowcount > 0:
                    return True
                # MySQL reports 0 affected rows when values are unchanged
                cur.execute("SELECT 1 AS found FROM instructors WHERE instructor_id=%s", (int(instructor_id),))
                return fetchone(cur) is not None
        except ConflictError as e:
            raise _conflict_for(e) from e

    def delete(self, instructor_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM instructors WHERE instructor_id=%s", (int(instructor_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM instructors")
            r = fetchone(cur)
            return int(r["total"]) if r else 0
