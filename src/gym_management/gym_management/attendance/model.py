from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark per (student, calendar date)."""

    attendance_id: int
    student_id: int
    attendance_date: date
    status: AttendanceStatus
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSummary:
    presences: int
    absences: int
    percentage: float


@dataclass(frozen=True)
class MonthlyAttendance:
    """Records of one student in one calendar month plus their summary."""

    student_id: int
    year: int
    month: int
    summary: AttendanceSummary
    records: list[AttendanceRecord] = field(default_factory=list)


@dataclass(frozen=True)
class RosterEntry:
    """Read-model for the instructor's daily marking screen."""

    student_id: int
    full_name: str
    attendance_id: Optional[int]
    status: Optional[AttendanceStatus]
    note: Optional[str] = None


@dataclass(frozen=True)
class StudentMonthCounts:
    """Row of the all-students aggregate used by the billing report."""

    student_id: int
    full_name: str
    presences: int
    absences: int
