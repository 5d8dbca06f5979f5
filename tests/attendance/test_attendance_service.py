from __future__ import annotations

from datetime import date

import pytest

from src.gym_management.gym_management.attendance import service as attendance_service_module
from src.gym_management.gym_management.attendance.service import AttendanceService
from src.gym_management.gym_management.core.enums import ActiveStatus, AttendanceStatus
from src.gym_management.gym_management.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def service(attendance_store, students_repo):
    return AttendanceService(attendance_store, students_repo)


def test_mark_overwrites_same_day(service, add_student):
    student = add_student()
    day = date(2024, 6, 3)

    first = service.mark(student_id=student.student_id, attendance_date=day, status="present")
    second = service.mark(student_id=student.student_id, attendance_date=day, status="ABSENT", note="  sick ")

    assert second.attendance_id == first.attendance_id
    assert second.status == AttendanceStatus.ABSENT
    assert second.note == "sick"


def test_mark_rejects_unknown_status(service, add_student):
    student = add_student()
    with pytest.raises(ValidationError):
        service.mark(student_id=student.student_id, attendance_date=date(2024, 6, 3), status="late")


def test_mark_requires_existing_student(service):
    with pytest.raises(NotFoundError):
        service.mark(student_id=99, attendance_date=date(2024, 6, 3), status="PRESENT")


def test_roster_lists_every_student_of_instructor(service, add_student, instructors_repo):
    other_id = instructors_repo.create(
        full_name="Bruno", cpf="99988877766", email="bruno@gym.local", password_hash="x", status=ActiveStatus.ACTIVE
    )
    ana = add_student("Ana")
    add_student("Caio")
    add_student("Other", instructor_id=other_id)
    day = date(2024, 6, 3)
    service.mark(student_id=ana.student_id, attendance_date=day, status="PRESENT")

    roster = service.roster(instructor_id=ana.instructor_id, attendance_date=day)

    assert [(e.full_name, e.status) for e in roster] == [("Ana", AttendanceStatus.PRESENT), ("Caio", None)]


def test_student_month_defaults_to_current_month(service, add_student, monkeypatch):
    monkeypatch.setattr(attendance_service_module, "today", lambda: date(2025, 1, 15))
    student = add_student()
    service.mark(student_id=student.student_id, attendance_date=date(2025, 1, 2), status="PRESENT")

    monthly = service.student_month(student_id=student.student_id)

    assert (monthly.year, monthly.month) == (2025, 1)
    assert monthly.summary.percentage == 100


def test_mark_rejects_note_longer_than_column(service, add_student, attendance_store):
    student = add_student()
    with pytest.raises(ValidationError):
        service.mark(student_id=student.student_id, attendance_date=date(2024, 6, 3), status="PRESENT", note="x" * 256)
    assert attendance_store.get_for_student_and_date(student.student_id, date(2024, 6, 3)) is None
