from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ActiveStatus, PlanTier
from .model import Student, StudentRow


class StudentRepository(Protocol):
    """Repository interface for students.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def search(self, q: Optional[str] = None) -> Sequence[StudentRow]:
        raise NotImplementedError

    def list_for_instructor(self, instructor_id: int, q: Optional[str] = None) -> Sequence[StudentRow]:
        raise NotImplementedError

    def create(
        self,
        *,
        instructor_id: Optional[int],
        full_name: str,
        cpf: str,
        email: str,
        password_hash: Optional[str],
        status: ActiveStatus,
        plan_tier: PlanTier,
        payment_date: Optional[date] = None,
        due_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, student_id: int, **fields) -> bool:
        raise NotImplementedError

    def set_status_for_instructor(self, *, student_id: int, instructor_id: int, status: ActiveStatus) -> bool:
        """Only touches the row when the student belongs to the instructor."""

        raise NotImplementedError

    def set_active_plan(self, *, student_id: int, plan_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
