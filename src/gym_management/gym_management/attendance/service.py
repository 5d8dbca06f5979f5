from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import today
from ..common.validators import require_max_length
from ..core.constants import NOTE_MAX_LENGTH
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .aggregator import AttendanceAggregator
from .model import AttendanceRecord, MonthlyAttendance, RosterEntry
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


def parse_attendance_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError("Invalid status (use PRESENT or ABSENT)")


class AttendanceService:
    def __init__(
        self,
        store: AttendanceStore,
        students: StudentRepository,
        *,
        aggregator: Optional[AttendanceAggregator] = None,
    ):
        self._store = store
        self._students = students
        self._aggregator = aggregator or AttendanceAggregator(store)

    def mark(
        self,
        *,
        student_id: int,
        attendance_date: date,
        status: Any,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        """Record (or overwrite) the mark of a student for one day."""

        status = parse_attendance_status(status)
        if not self._students.get_by_id(int(student_id)):
            raise NotFoundError("Student not found")

        note = note.strip() or None if isinstance(note, str) else None
        require_max_length(note, "Note", NOTE_MAX_LENGTH)
        self._store.upsert(student_id=int(student_id), attendance_date=attendance_date, status=status, note=note)
        logger.debug("attendance %s %s -> %s", student_id, attendance_date, status.value)
        return self._store.get_for_student_and_date(int(student_id), attendance_date)

    def roster(self, *, instructor_id: int, attendance_date: Optional[date] = None) -> Sequence[RosterEntry]:
        return self._store.roster_for_instructor(int(instructor_id), attendance_date or today())

    def student_month(self, *, student_id: int, year: Optional[int] = None, month: Optional[int] = None) -> MonthlyAttendance:
        current = today()
        return self._aggregator.student_month(
            int(student_id),
            year if year is not None else current.year,
            month if month is not None else current.month,
        )
