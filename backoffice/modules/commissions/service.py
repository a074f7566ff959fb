"""Commission standing for an agent's approved airtime sales."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from backoffice.modules.transactions import TransactionService

from .tiers import CommissionTier, TierProgress, calculate_commission, next_tier_progress, tier_for_volume

COMMISSION_TRANSACTION_TYPE = "airtime"
COMMISSION_CURRENCY = "SSP"


@dataclass(slots=True)
class CommissionSummary:
    agent_id: str
    volume: Decimal
    tier: CommissionTier
    progress: Optional[TierProgress]

    @property
    def rate(self) -> Decimal:
        return self.tier.percentage

    @property
    def estimated_commission(self) -> Decimal:
        """Commission on the whole volume at the rate its tier earns."""
        return calculate_commission(self.volume, self.volume)


async def commission_summary(transactions: TransactionService, agent_id: str) -> CommissionSummary:
    volume = await transactions.approved_volume(
        agent_id,
        transaction_type=COMMISSION_TRANSACTION_TYPE,
        currency=COMMISSION_CURRENCY,
    )
    return CommissionSummary(
        agent_id=agent_id,
        volume=volume,
        tier=tier_for_volume(volume),
        progress=next_tier_progress(volume),
    )
