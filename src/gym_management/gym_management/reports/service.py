from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.aggregator import presence_percentage
from ..attendance.repository import AttendanceStore
from ..common.datetime_utils import month_bounds, today
from ..core.enums import PlanTier
from ..instructors.repository import InstructorRepository
from ..students.repository import StudentRepository
from ..workouts.repository import WorkoutRepository
from .model import BillingReport, DashboardStats, StudentAttendanceRate, TierRevenue
from .pricing.base import PlanPriceTable
from .pricing.standard_price_table import StandardPriceTable
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class BillingReportGenerator:
    def __init__(
        self,
        reports: ReportRepository,
        attendance: AttendanceStore,
        *,
        prices: Optional[PlanPriceTable] = None,
    ):
        self._reports = reports
        self._attendance = attendance
        self._prices = prices or StandardPriceTable()

    def build(self, reference: Optional[date] = None) -> BillingReport:
        """Counts, revenue estimate and attendance rates for the month containing ``reference``."""

        reference = reference or today()
        start, end = month_bounds(reference.year, reference.month)

        totals = self._reports.student_totals()

        tiers: list[TierRevenue] = []
        total_revenue = 0
        counts = self._reports.active_counts_by_tier()
        for tier in PlanTier:
            qty = int(counts.get(tier, 0))
            if qty <= 0:
                continue
            price = self._prices.monthly_price(tier)
            revenue = qty * price
            total_revenue += revenue
            tiers.append(TierRevenue(tier=tier, active_students=qty, monthly_price=price, revenue=revenue))

        attendance = [
            StudentAttendanceRate(
                student_id=r.student_id,
                full_name=r.full_name,
                presences=r.presences,
                absences=r.absences,
                percentage=presence_percentage(r.presences, r.absences),
            )
            for r in self._attendance.month_counts(start, end)
        ]

        logger.debug("billing report %s: %d tiers, revenue=%s", start.strftime("%Y-%m"), len(tiers), total_revenue)
        return BillingReport(
            reference_start=start,
            reference_end=end,
            totals=totals,
            tiers=tiers,
            total_revenue=total_revenue,
            attendance=attendance,
        )


class DashboardService:
    """Admin landing-page counters."""

    def __init__(self, students: StudentRepository, instructors: InstructorRepository, workouts: WorkoutRepository):
        self._students = students
        self._instructors = instructors
        self._workouts = workouts

    def admin_stats(self) -> DashboardStats:
        return DashboardStats(
            students=self._students.count(),
            instructors=self._instructors.count(),
            workout_plans=self._workouts.count_plans(),
        )
