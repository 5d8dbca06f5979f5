from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..core.enums import PlanTier


@dataclass(frozen=True)
class StudentTotals:
    total: int
    active: int
    inactive: int


@dataclass(frozen=True)
class TierRevenue:
    tier: PlanTier
    active_students: int
    monthly_price: int
    revenue: int


@dataclass(frozen=True)
class StudentAttendanceRate:
    student_id: int
    full_name: str
    presences: int
    absences: int
    percentage: float


@dataclass(frozen=True)
class BillingReport:
    """Read-and-compute view for the admin report; formatting is left to the caller."""

    reference_start: date
    reference_end: date
    totals: StudentTotals
    tiers: list[TierRevenue] = field(default_factory=list)
    total_revenue: int = 0
    attendance: list[StudentAttendanceRate] = field(default_factory=list)

    @property
    def reference_month(self) -> str:
        return self.reference_start.strftime("%Y-%m")


@dataclass(frozen=True)
class DashboardStats:
    students: int
    instructors: int
    workout_plans: int
