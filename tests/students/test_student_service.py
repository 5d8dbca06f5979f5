from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import check_password_hash

from src.gym_management.gym_management.core.enums import ActiveStatus, MembershipStanding, PlanTier
from src.gym_management.gym_management.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.gym_management.gym_management.students import service as student_service_module
from src.gym_management.gym_management.students.forms import StudentForm, validate_student_form
from src.gym_management.gym_management.students.service import StudentService


@pytest.fixture
def service(students_repo, instructors_repo):
    return StudentService(students_repo, instructors_repo)


def _signup(**overrides):
    data = {
        "full_name": "Ana Lima",
        "cpf": "123.456.789-09",
        "email": "Ana@Mail.com",
        "password": "secret123",
        "plan_tier": "annual",
    }
    data.update(overrides)
    return StudentForm.from_dict(data)


def test_validate_collects_every_field_error():
    result = validate_student_form(
        StudentForm(full_name="123", cpf="1", email="nope", password="short"), require_password=True
    )
    assert not result.ok
    assert set(result.errors) == {"full_name", "cpf", "email", "password"}


def test_partial_validation_only_checks_sent_fields():
    result = validate_student_form(StudentForm(email="x@y.com"), partial=True)
    assert result.value == {"email": "x@y.com"}


def test_due_date_before_payment_date_is_rejected():
    result = validate_student_form(
        StudentForm(payment_date="2024-05-10", due_date="2024-05-01"), partial=True
    )
    assert "due_date" in result.errors


def test_oversized_name_and_email_are_field_errors():
    result = validate_student_form(
        StudentForm(full_name="A" * 121, email="a" * 160 + "@gym.com"), partial=True
    )
    assert set(result.errors) == {"full_name", "email"}


def test_register_creates_inactive_student_for_first_active_instructor(service, instructor, monkeypatch):
    monkeypatch.setattr(student_service_module, "today", lambda: date(2024, 5, 2))

    student = service.register(_signup())

    assert student.status == ActiveStatus.INACTIVE
    assert student.plan_tier == PlanTier.ANNUAL
    assert student.instructor_id == instructor.instructor_id
    assert student.payment_date == date(2024, 5, 2)
    assert student.cpf == "12345678909"
    assert student.email == "ana@mail.com"
    assert check_password_hash(student.password_hash, "secret123")


def test_register_falls_back_to_monthly_tier(service, instructor):
    assert service.register(_signup(plan_tier="weekly")).plan_tier == PlanTier.MONTHLY
    assert service.register(_signup(cpf="98765432100", email="b@mail.com", plan_tier=None)).plan_tier == PlanTier.MONTHLY


def test_register_without_active_instructor(service):
    with pytest.raises(NotFoundError):
        service.register(_signup())


def test_register_duplicate_cpf(service, instructor):
    service.register(_signup())
    with pytest.raises(ConflictError) as exc:
        service.register(_signup(email="other@mail.com"))
    assert exc.value.field == "cpf"


def test_create_requires_instructor(service, instructor):
    with pytest.raises(ValidationError) as exc:
        service.create(_signup())
    assert "instructor_id" in exc.value.field_errors

    student = service.create(_signup(instructor_id=str(instructor.instructor_id), status="inactive"))
    assert student.status == ActiveStatus.INACTIVE


def test_update_and_delete(service, instructor):
    student = service.create(_signup(instructor_id=instructor.instructor_id))

    updated = service.update(student.student_id, StudentForm(full_name="Ana Maria", due_date="2000-01-01"))
    assert updated.full_name == "Ana Maria"
    assert updated.standing() == MembershipStanding.OVERDUE

    service.delete(student.student_id)
    with pytest.raises(NotFoundError):
        service.get(student.student_id)


def test_only_owning_instructor_changes_status(service, instructor, instructors_repo, add_student):
    student = add_student()
    other_id = instructors_repo.create(
        full_name="Bruno", cpf="99988877766", email="bruno@gym.local", password_hash="x", status=ActiveStatus.ACTIVE
    )

    with pytest.raises(NotFoundError):
        service.set_status_for_instructor(instructor_id=other_id, student_id=student.student_id, status=ActiveStatus.INACTIVE)

    changed = service.set_status_for_instructor(
        instructor_id=instructor.instructor_id, student_id=student.student_id, status=ActiveStatus.INACTIVE
    )
    assert changed.status == ActiveStatus.INACTIVE


def test_list_for_instructor_includes_standing(service, instructor, add_student):
    add_student("Ana", due_date=date(2999, 1, 1))
    add_student("Bia")

    rows = service.list_for_instructor(instructor.instructor_id)

    assert [(r.full_name, r.standing) for r in rows] == [
        ("Ana", MembershipStanding.CURRENT),
        ("Bia", MembershipStanding.NO_DATE),
    ]
