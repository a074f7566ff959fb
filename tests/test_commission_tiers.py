from decimal import Decimal

import pytest

from backoffice.modules.commissions import (
    AIRTIME_COMMISSION_TIERS_SSP,
    calculate_commission,
    commission_summary,
    next_tier_progress,
    rate_for_volume,
    tier_for_volume,
)
from backoffice.modules.transactions import TransactionInput, TransactionService


@pytest.mark.parametrize(
    "volume, rate",
    [
        (0, "1"),
        (1_999_999, "1"),
        (2_000_000, "1"),
        (Decimal("2000000.50"), "1"),
        (2_000_001, "1.5"),
        (4_999_999, "1.5"),
        (5_000_000, "2"),
        (7_499_999, "2"),
        (7_500_000, "3"),
        (9_999_999, "3"),
        (10_000_000, "5"),
        (250_000_000, "5"),
    ],
)
def test_rate_for_volume_matches_table(volume, rate):
    assert rate_for_volume(volume) == Decimal(rate)


def test_tier_table_shape():
    assert [tier.percentage for tier in AIRTIME_COMMISSION_TIERS_SSP] == [
        Decimal("1"),
        Decimal("1.5"),
        Decimal("2"),
        Decimal("3"),
        Decimal("5"),
    ]
    assert AIRTIME_COMMISSION_TIERS_SSP[-1].max_amount is None


def test_negative_volume_falls_back_to_first_tier():
    assert tier_for_volume(-10) is AIRTIME_COMMISSION_TIERS_SSP[0]


def test_calculate_commission():
    assert calculate_commission(1000, 6_000_000) == Decimal("20.00")
    assert calculate_commission(Decimal("333.33"), 2_500_000) == Decimal("5.00")
    assert calculate_commission(50, 12_000_000) == Decimal("2.50")


def test_progress_within_first_tier():
    progress = next_tier_progress(1_000_000)

    assert progress.current_tier.label == "Up to 2M SSP"
    assert progress.next_tier.label == "2M - 5M SSP"
    assert progress.progress == Decimal("50.00")
    assert progress.remaining == Decimal("1000001")


def test_progress_mid_tier():
    progress = next_tier_progress(6_250_000)

    assert progress.current_tier.percentage == Decimal("2")
    assert progress.next_tier.percentage == Decimal("3")
    assert progress.progress == Decimal("50.00")
    assert progress.remaining == Decimal("1250000")


def test_progress_at_top_tier():
    progress = next_tier_progress(10_000_000)

    assert progress.next_tier is None
    assert progress.progress == Decimal("100")
    assert progress.remaining == Decimal("0")


def test_progress_for_negative_volume():
    assert next_tier_progress(-1) is None


async def test_summary_counts_only_approved_ssp_airtime(session, agent, reviewer):
    service = TransactionService.with_session(session)

    async def submit(transaction_type, amount, currency):
        return await service.submit(
            agent,
            TransactionInput(
                transaction_type=transaction_type,
                amount=Decimal(amount),
                currency=currency,
                recipient_phone="+211921234567",
                metadata={"mobile_operator": "mtn"},
            ),
        )

    counted = await submit("airtime", "600000", "SSP")
    second = await submit("airtime", "400000", "SSP")
    usd = await submit("airtime", "999", "USD")
    momo = await submit("mtn_momo", "5000", "SSP")
    await submit("airtime", "700000", "SSP")
    for record in (counted, second, usd, momo):
        await service.approve(record.id, reviewer)

    summary = await commission_summary(service, agent.id)

    assert summary.volume == Decimal("1000000")
    assert summary.rate == Decimal("1")
    assert summary.progress.next_tier.percentage == Decimal("1.5")
    assert summary.estimated_commission == Decimal("10000.00")
