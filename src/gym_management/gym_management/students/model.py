from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import membership_standing
from ..core.enums import ActiveStatus, MembershipStanding, PlanTier


@dataclass(frozen=True)
class Student:
    """Domain entity: Student (gym member).

    Plain data object; database access lives in the repositories.
    """

    student_id: int
    instructor_id: Optional[int]
    full_name: str
    cpf: str
    email: str
    status: ActiveStatus
    plan_tier: PlanTier
    payment_date: Optional[date] = None
    due_date: Optional[date] = None
    active_plan_id: Optional[int] = None
    password_hash: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == ActiveStatus.ACTIVE

    def standing(self, reference: Optional[date] = None) -> MembershipStanding:
        return membership_standing(self.due_date, reference)


@dataclass(frozen=True)
class StudentRow:
    """Read-model for listings (joined with the instructor name, standing derived)."""

    student_id: int
    instructor_id: Optional[int]
    instructor_name: Optional[str]
    full_name: str
    email: str
    cpf: str
    status: ActiveStatus
    plan_tier: PlanTier
    payment_date: Optional[date]
    due_date: Optional[date]
    standing: MembershipStanding
