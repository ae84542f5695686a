"""Unit tests for the desgravamen premium differential"""

import pytest
from refund_gateway.domain.desgravamen import compute_desgravamen, preferential_desgravamen_rate
from refund_gateway.domain.exceptions import RateLookupError


@pytest.mark.parametrize(
    "amount, age, expected",
    [
        (5_000_000, 34, 0.0003),
        (5_000_000, 56, 0.00039),
        (20_000_000, 55, 0.0003),  # threshold itself is not "high"
        (25_000_000, 55, 0.000344),
        (25_000_000, 70, 0.000343),
    ],
)
def test_preferential_desgravamen_rate(amount, age, expected):
    assert preferential_desgravamen_rate(amount, age) == expected


def test_compute_desgravamen_partial_schedule(rate_tables):
    """
    5,000,000 over 48 installments, 24 pending, bank rate 4%:
    single premium 200,000 -> 4,166.67/month -> 100,000 pending.
    Outstanding capital 2,500,000 x 0.03% x 24 = 18,000 preferential.
    """
    leg = compute_desgravamen(rate_tables, "BANCO CHILE", 34, 5_000_000, 48, 24)

    assert leg.installments_used == 48
    assert leg.rounded_amount == 5_000_000
    assert leg.single_premium_bank == 200_000
    assert leg.total_premium_bank == 200_000
    assert leg.monthly_premium_bank == 4_167
    assert leg.remaining_premium_bank == 100_000
    assert leg.remaining_capital == 2_500_000
    assert leg.total_premium_preferential == 18_000
    assert leg.monthly_premium_preferential == 750
    assert leg.remaining_premium_preferential == 18_000
    assert leg.bank_premium == 100_000
    assert leg.preferential_premium == 18_000
    assert leg.refund_amount == 82_000
    assert leg.bank_rate == 0.04
    assert leg.preferential_rate == 0.0003


def test_compute_desgravamen_rebases_substituted_installments(rate_tables):
    """30 installments is not tabulated: the 36-installment premium is re-based onto 30"""
    leg = compute_desgravamen(rate_tables, "BANCO CHILE", 34, 5_000_000, 30, 30)

    assert leg.installments_used == 36
    assert leg.single_premium_bank == 150_000
    assert leg.total_premium_bank == 125_000
    assert leg.remaining_capital == 5_000_000
    assert leg.preferential_premium == 45_000
    assert leg.refund_amount == 80_000


def test_compute_desgravamen_floors_differential_at_zero(rate_tables):
    """Bank premium cheaper than preferential: nothing to recover"""
    leg = compute_desgravamen(rate_tables, "BANCO BICE", 34, 5_000_000, 48, 48)

    assert leg.bank_premium == 5_000
    assert leg.preferential_premium == 72_000
    assert leg.refund_amount == 0


def test_compute_desgravamen_unknown_institution(rate_tables):
    with pytest.raises(RateLookupError) as exc_info:
        compute_desgravamen(rate_tables, "BANCO INEXISTENTE", 34, 5_000_000, 48, 24)

    assert "BANCO INEXISTENTE" in str(exc_info.value)
    assert "48" in str(exc_info.value)


def test_compute_desgravamen_monotonic_in_remaining_installments(rate_tables):
    """More pending installments never means a smaller refund"""
    refunds = [
        compute_desgravamen(rate_tables, "BANCO CHILE", 34, 5_000_000, 48, remaining).refund_amount
        for remaining in (1, 6, 12, 24, 36, 47, 48)
    ]

    assert refunds == sorted(refunds)
