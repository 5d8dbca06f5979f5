from __future__ import annotations

from typing import Mapping

from ..core.enums import PlanTier
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import StudentTotals
from .repository import ReportRepository


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def student_totals(self) -> StudentTotals:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    COUNT(*) AS total,
                    SUM(CASE WHEN status = 'ACTIVE' THEN 1 ELSE 0 END) AS active,
                    SUM(CASE WHEN status = 'INACTIVE' THEN 1 ELSE 0 END) AS inactive
                FROM students
                """
            )
            r = fetchone(cur) or {}
            return StudentTotals(
                total=int(r.get("total") or 0),
                active=int(r.get("active") or 0),
                inactive=int(r.get("inactive") or 0),
            )

    def active_counts_by_tier(self) -> Mapping[PlanTier, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT plan_tier, COUNT(*) AS qty
                FROM students
                WHERE status = 'ACTIVE'
                GROUP BY plan_tier
                ORDER BY plan_tier
                """
            )
            return {PlanTier(r["plan_tier"]): int(r["qty"]) for r in fetchall(cur)}
