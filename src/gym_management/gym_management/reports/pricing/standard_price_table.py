from __future__ import annotations

from typing import Mapping, Optional

from ...core.constants import PLAN_TIER_PRICES
from ...core.enums import PlanTier
from .base import PlanPriceTable


class StandardPriceTable(PlanPriceTable):
    """Fixed monthly price per tier; tiers missing from the table price at 0."""

    def __init__(self, prices: Optional[Mapping[PlanTier, int]] = None):
        self._prices = dict(PLAN_TIER_PRICES if prices is None else prices)

    def monthly_price(self, tier: PlanTier) -> int:
        return int(self._prices.get(tier, 0))
