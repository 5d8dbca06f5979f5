from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..core.exceptions import NotFoundError
from .forms import InstructorForm, validate_instructor_form
from .model import Instructor
from .repository import InstructorRepository

logger = logging.getLogger(__name__)


class InstructorService:
    """Use case: manage instructors (admin)."""

    def __init__(self, instructors: InstructorRepository):
        self._instructors = instructors

    def get(self, instructor_id: int) -> Instructor:
        instructor = self._instructors.get_by_id(int(instructor_id))
        if not instructor:
            raise NotFoundError("Instructor not found")
        return instructor

    def search(self, q: Optional[str] = None) -> Sequence[Instructor]:
        return self._instructors.search(q)

    def first_active(self) -> Optional[Instructor]:
        return self._instructors.first_active()

    def create(self, form: InstructorForm) -> Instructor:
        fields = validate_instructor_form(form).unwrap()
        instructor_id = self._instructors.create(
            full_name=fields["full_name"],
            cpf=fields["cpf"],
            email=fields["email"],
            password_hash=generate_password_hash(fields["password"]),
            status=fields["status"],
        )
        logger.info("instructor %s created", instructor_id)
        return self.get(instructor_id)

    def update(self, instructor_id: int, form: InstructorForm) -> Instructor:
        fields = validate_instructor_form(form, partial=True).unwrap()
        password = fields.pop("password", None)
        if password:
            fields["password_hash"] = generate_password_hash(password)

        if not self._instructors.update(int(instructor_id), **fields):
            raise NotFoundError("Instructor not found")
        return self.get(instructor_id)

    def delete(self, instructor_id: int) -> None:
        if not self._instructors.delete(int(instructor_id)):
            raise NotFoundError("Instructor not found")
        logger.info("instructor %s deleted", instructor_id)
