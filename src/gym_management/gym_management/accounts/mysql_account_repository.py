from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT * FROM (
                    SELECT 1 AS rank_order, 'admin' AS role, admin_id AS account_id,
                           'Administrator' AS full_name, email, password_hash, 'ACTIVE' AS status
                    FROM admins WHERE email=%s
                    UNION ALL
                    SELECT 2, 'instructor', instructor_id, full_name, email, password_hash, status
                    FROM instructors WHERE email=%s
                    UNION ALL
                    SELECT 3, 'student', student_id, full_name, email, password_hash, status
                    FROM students WHERE email=%s
                ) accounts
                ORDER BY rank_order
                LIMIT 1
                """,
                (email, email, email),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Account(
                role=Role(r["role"]),
                account_id=int(r["account_id"]),
                full_name=r["full_name"],
                email=r["email"],
                password_hash=r.get("password_hash") or "",
                is_active=r.get("status") == "ACTIVE",
            )
