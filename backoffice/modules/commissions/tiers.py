"""SSP airtime commission tiers keyed on an agent's cumulative volume."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

Number = Union[int, float, Decimal]


@dataclass(frozen=True, slots=True)
class CommissionTier:
    min_amount: Decimal
    max_amount: Optional[Decimal]
    percentage: Decimal
    label: str


AIRTIME_COMMISSION_TIERS_SSP: tuple[CommissionTier, ...] = (
    CommissionTier(Decimal("0"), Decimal("2000000"), Decimal("1"), "Up to 2M SSP"),
    # Bridging tier; its lower bound sits one unit above the previous ceiling.
    CommissionTier(Decimal("2000001"), Decimal("5000000"), Decimal("1.5"), "2M - 5M SSP"),
    CommissionTier(Decimal("5000000"), Decimal("7500000"), Decimal("2"), "5M - 7.5M SSP"),
    CommissionTier(Decimal("7500000"), Decimal("10000000"), Decimal("3"), "7.5M - 10M SSP"),
    CommissionTier(Decimal("10000000"), None, Decimal("5"), "Above 10M SSP"),
)


@dataclass(frozen=True, slots=True)
class TierProgress:
    current_tier: CommissionTier
    next_tier: Optional[CommissionTier]
    progress: Decimal
    remaining: Decimal


def _dec(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def tier_for_volume(volume: Number) -> CommissionTier:
    """Highest tier whose lower bound the volume has reached."""
    volume = _dec(volume)
    for tier in reversed(AIRTIME_COMMISSION_TIERS_SSP):
        if volume >= tier.min_amount:
            return tier
    return AIRTIME_COMMISSION_TIERS_SSP[0]


def rate_for_volume(volume: Number) -> Decimal:
    return tier_for_volume(volume).percentage


def calculate_commission(amount: Number, volume: Number) -> Decimal:
    commission = _dec(amount) * rate_for_volume(volume) / Decimal(100)
    return commission.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def next_tier_progress(volume: Number) -> Optional[TierProgress]:
    volume = _dec(volume)
    tiers = AIRTIME_COMMISSION_TIERS_SSP
    for index, tier in enumerate(tiers):
        following = tiers[index + 1] if index + 1 < len(tiers) else None
        if volume < tier.min_amount:
            continue
        if following is None:
            return TierProgress(tier, None, Decimal(100), Decimal(0))
        if volume < following.min_amount:
            span = following.min_amount - tier.min_amount
            progress = min((volume - tier.min_amount) / span * 100, Decimal(100))
            return TierProgress(
                tier,
                following,
                progress.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
                following.min_amount - volume,
            )
    return None
