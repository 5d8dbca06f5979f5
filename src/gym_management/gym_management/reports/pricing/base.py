from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import PlanTier


class PlanPriceTable(ABC):
    """Price table interface (Strategy Pattern for billing)."""

    @abstractmethod
    def monthly_price(self, tier: PlanTier) -> int:
        raise NotImplementedError
