from __future__ import annotations

from typing import Iterable

from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceSummary, MonthlyAttendance
from .repository import AttendanceStore


def presence_percentage(presences: int, absences: int) -> float:
    """100 * p / (p + a); 0 when there is nothing to count."""

    total = int(presences) + int(absences)
    if total <= 0:
        return 0.0
    return int(presences) * 100 / total


def summarize(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    presences = 0
    absences = 0
    for r in records:
        if r.status == AttendanceStatus.PRESENT:
            presences += 1
        elif r.status == AttendanceStatus.ABSENT:
            absences += 1
    return AttendanceSummary(presences=presences, absences=absences, percentage=presence_percentage(presences, absences))


class AttendanceAggregator:
    """Monthly attendance view of a single student."""

    def __init__(self, store: AttendanceStore):
        self._store = store

    def student_month(self, student_id: int, year: int, month: int) -> MonthlyAttendance:
        start, end = month_bounds(year, month)
        records = sorted(
            self._store.list_for_student_between(int(student_id), start, end),
            key=lambda r: r.attendance_date,
        )
        return MonthlyAttendance(
            student_id=int(student_id),
            year=start.year,
            month=start.month,
            summary=summarize(records),
            records=records,
        )
