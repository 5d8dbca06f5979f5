from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ActiveStatus
from .model import Instructor


class InstructorRepository(Protocol):
    def get_by_id(self, instructor_id: int) -> Optional[Instructor]:
        raise NotImplementedError

    def first_active(self) -> Optional[Instructor]:
        """Lowest-id active instructor (default owner of self-registered students)."""

        raise NotImplementedError

    def search(self, q: Optional[str] = None) -> Sequence[Instructor]:
        raise NotImplementedError

    def create(self, *, full_name: str, cpf: str, email: str, password_hash: str, status: ActiveStatus) -> int:
        raise NotImplementedError

    def update(self, instructor_id: int, **fields) -> bool:
        """Update only the given columns (full_name, cpf, email, password_hash, status)."""

        raise NotImplementedError

    def delete(self, instructor_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
