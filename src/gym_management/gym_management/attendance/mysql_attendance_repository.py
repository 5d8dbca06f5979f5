from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, RosterEntry, StudentMonthCounts
from .repository import AttendanceStore


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        note=r.get("note"),
    )


class MySQLAttendanceStore(AttendanceStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, attendance_date, status, note)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    attendance_id=LAST_INSERT_ID(attendance_id), status=VALUES(status), note=VALUES(note)
                """,
                (int(student_id), attendance_date, status.value, note),
            )

            # LAST_INSERT_ID(attendance_id) makes lastrowid point at the updated row too.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE student_id=%s AND attendance_date=%s",
                (int(student_id), attendance_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else 0

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, attendance_date, status, note
                FROM attendance_records
                WHERE student_id=%s AND attendance_date=%s
                """,
                (int(student_id), attendance_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_student_between(self, student_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, attendance_date, status, note
                FROM attendance_records
                WHERE student_id=%s AND attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date ASC
                """,
                (int(student_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def roster_for_instructor(self, instructor_id: int, attendance_date: date) -> Sequence[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.student_id, s.full_name,
                    ar.attendance_id, ar.status, ar.note
                FROM students s
                LEFT JOIN attendance_records ar
                    ON ar.student_id = s.student_id
                   AND ar.attendance_date = %s
                WHERE s.instructor_id = %s
                ORDER BY s.full_name ASC
                """,
                (attendance_date, int(instructor_id)),
            )
            return [
                RosterEntry(
                    student_id=int(r["student_id"]),
                    full_name=r["full_name"],
                    attendance_id=r.get("attendance_id"),
                    status=AttendanceStatus(r["status"]) if r.get("status") else None,
                    note=r.get("note"),
                )
                for r in fetchall(cur)
            ]

    def month_counts(self, start: date, end: date) -> Sequence[StudentMonthCounts]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.student_id, s.full_name,
                    SUM(CASE WHEN ar.status = 'PRESENT' THEN 1 ELSE 0 END) AS presences,
                    SUM(CASE WHEN ar.status = 'ABSENT' THEN 1 ELSE 0 END) AS absences
                FROM students s
                LEFT JOIN attendance_records ar
                    ON ar.student_id = s.student_id
                   AND ar.attendance_date BETWEEN %s AND %s
                GROUP BY s.student_id, s.full_name
                ORDER BY s.full_name ASC
                """,
                (start, end),
            )
            return [
                StudentMonthCounts(
                    student_id=int(r["student_id"]),
                    full_name=r["full_name"],
                    presences=int(r.get("presences") or 0),
                    absences=int(r.get("absences") or 0),
                )
                for r in fetchall(cur)
            ]
