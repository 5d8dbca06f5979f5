from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, RosterEntry, StudentMonthCounts


class AttendanceStore(Protocol):
    def upsert(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        """Create or replace the mark for (student, date). Returns attendance_id."""

        raise NotImplementedError

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student_between(self, student_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records with start <= date <= end, ordered by date ascending."""

        raise NotImplementedError

    def roster_for_instructor(self, instructor_id: int, attendance_date: date) -> Sequence[RosterEntry]:
        """Every student of the instructor with that day's mark (or none), ordered by name."""

        raise NotImplementedError

    def month_counts(self, start: date, end: date) -> Sequence[StudentMonthCounts]:
        """Presence/absence counts per student in one aggregate pass, ordered by name."""

        raise NotImplementedError
