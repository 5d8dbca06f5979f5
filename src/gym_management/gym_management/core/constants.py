"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import PlanTier

# Monthly price per plan tier (currency units are left to the presentation layer)
PLAN_TIER_PRICES = {
    PlanTier.MONTHLY: 120,
    PlanTier.QUARTERLY: 100,
    PlanTier.SEMIANNUAL: 90,
    PlanTier.ANNUAL: 80,
}

DEFAULT_PLAN_TIER = PlanTier.MONTHLY
MIN_PASSWORD_LENGTH = 8
CPF_DIGITS = 11
DEFAULT_SESSION_DAYS = 7

# Column limits from database/schema.sql
NAME_MAX_LENGTH = 120
EMAIL_MAX_LENGTH = 160
NOTE_MAX_LENGTH = 255
MUSCLE_GROUP_MAX_LENGTH = 60
EQUIPMENT_MAX_LENGTH = 120
URL_MAX_LENGTH = 255
INT_MAX = 2147483647
LOAD_KG_MAX = 9999.99
