from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import today
from ..core.constants import DEFAULT_PLAN_TIER
from ..core.enums import ActiveStatus, PlanTier
from ..core.exceptions import NotFoundError
from ..instructors.repository import InstructorRepository
from .forms import StudentForm, validate_student_form
from .model import Student, StudentRow
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases around students: sign-up, admin CRUD and instructor views."""

    def __init__(self, students: StudentRepository, instructors: InstructorRepository):
        self._students = students
        self._instructors = instructors

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def search(self, q: Optional[str] = None) -> Sequence[StudentRow]:
        return self._students.search(q)

    def _require_instructor(self, instructor_id: int) -> None:
        if not self._instructors.get_by_id(int(instructor_id)):
            raise NotFoundError("Instructor not found")

    def register(self, form: StudentForm) -> Student:
        """Public sign-up.

        The account starts INACTIVE (an admin or instructor activates it after
        payment) and is assigned to the first active instructor. An unknown or
        missing plan tier falls back to MONTHLY.
        """

        try:
            tier = PlanTier(str(form.plan_tier).upper()) if form.plan_tier else DEFAULT_PLAN_TIER
        except ValueError:
            tier = DEFAULT_PLAN_TIER

        form = StudentForm(full_name=form.full_name, cpf=form.cpf, email=form.email, password=form.password)
        fields = validate_student_form(form, require_password=True).unwrap()

        instructor = self._instructors.first_active()
        if not instructor:
            raise NotFoundError("No active instructor registered, ask an admin to create one")

        student_id = self._students.create(
            instructor_id=instructor.instructor_id,
            full_name=fields["full_name"],
            cpf=fields["cpf"],
            email=fields["email"],
            password_hash=generate_password_hash(fields["password"]),
            status=ActiveStatus.INACTIVE,
            plan_tier=tier,
            payment_date=today(),
        )
        logger.info("student %s signed up (instructor=%s)", student_id, instructor.instructor_id)
        return self.get(student_id)

    def create(self, form: StudentForm) -> Student:
        fields = validate_student_form(form, require_instructor=True).unwrap()
        self._require_instructor(fields["instructor_id"])

        password = fields.get("password")
        student_id = self._students.create(
            instructor_id=fields["instructor_id"],
            full_name=fields["full_name"],
            cpf=fields["cpf"],
            email=fields["email"],
            password_hash=generate_password_hash(password) if password else None,
            status=fields.get("status") or ActiveStatus.ACTIVE,
            plan_tier=fields.get("plan_tier") or DEFAULT_PLAN_TIER,
            payment_date=fields.get("payment_date"),
            due_date=fields.get("due_date"),
        )
        logger.info("student %s created", student_id)
        return self.get(student_id)

    def update(self, student_id: int, form: StudentForm) -> Student:
        fields = validate_student_form(form, partial=True).unwrap()
        if "instructor_id" in fields:
            self._require_instructor(fields["instructor_id"])

        password = fields.pop("password", None)
        if password:
            fields["password_hash"] = generate_password_hash(password)

        if not self._students.update(int(student_id), **fields):
            raise NotFoundError("Student not found")
        return self.get(student_id)

    def delete(self, student_id: int) -> None:
        if not self._students.delete(int(student_id)):
            raise NotFoundError("Student not found")
        logger.info("student %s deleted", student_id)

    def list_for_instructor(self, instructor_id: int, q: Optional[str] = None) -> Sequence[StudentRow]:
        return self._students.list_for_instructor(int(instructor_id), q)

    def set_status_for_instructor(self, *, instructor_id: int, student_id: int, status: ActiveStatus) -> Student:
        """An instructor may only (de)activate their own students."""

        ok = self._students.set_status_for_instructor(
            student_id=int(student_id), instructor_id=int(instructor_id), status=status
        )
        if not ok:
            raise NotFoundError("Student not found for this instructor")
        return self.get(student_id)
