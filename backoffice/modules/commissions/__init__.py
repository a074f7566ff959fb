"""Commission tier exports"""

from .service import COMMISSION_CURRENCY, COMMISSION_TRANSACTION_TYPE, CommissionSummary, commission_summary
from .tiers import (
    AIRTIME_COMMISSION_TIERS_SSP,
    CommissionTier,
    TierProgress,
    calculate_commission,
    next_tier_progress,
    rate_for_volume,
    tier_for_volume,
)

__all__ = [
    "AIRTIME_COMMISSION_TIERS_SSP",
    "COMMISSION_CURRENCY",
    "COMMISSION_TRANSACTION_TYPE",
    "CommissionSummary",
    "CommissionTier",
    "TierProgress",
    "calculate_commission",
    "commission_summary",
    "next_tier_progress",
    "rate_for_volume",
    "tier_for_volume",
]
