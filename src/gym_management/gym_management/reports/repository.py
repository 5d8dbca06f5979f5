from __future__ import annotations

from typing import Mapping, Protocol

from ..core.enums import PlanTier
from .model import StudentTotals


class ReportRepository(Protocol):
    def student_totals(self) -> StudentTotals:
        raise NotImplementedError

    def active_counts_by_tier(self) -> Mapping[PlanTier, int]:
        """Number of ACTIVE students per plan tier; tiers without students may be absent."""

        raise NotImplementedError
