"""Unit tests for the cesantía premium differential"""

import pytest
from refund_gateway.domain.cesantia import compute_cesantia
from refund_gateway.domain.exceptions import CesantiaLookupError


def test_compute_cesantia_flat_rate(rate_tables):
    """4,500,000 is tramo_3: 0.09% vs 0.05% monthly over 30 installments"""
    leg = compute_cesantia(rate_tables, "BANCO CHILE", 4_500_000, 30)

    assert leg.tranche_used == "tramo_3"
    assert leg.bank_rate == 0.0009
    assert leg.preferential_rate == 0.0005
    assert leg.bank_premium == 121_500
    assert leg.preferential_premium == 67_500
    assert leg.refund_amount == 54_000


def test_compute_cesantia_uses_amount_tranche(rate_tables):
    leg = compute_cesantia(rate_tables, "BANCO CHILE", 8_000_000, 10)

    assert leg.tranche_used == "tramo_5"
    assert leg.bank_premium == 56_000
    assert leg.preferential_premium == 32_000
    assert leg.refund_amount == 24_000


def test_compute_cesantia_floors_differential_at_zero(rate_tables):
    leg = compute_cesantia(rate_tables, "BANCO BICE", 4_000_000, 12)

    assert leg.bank_premium == 4_800
    assert leg.preferential_premium == 24_000
    assert leg.refund_amount == 0


def test_compute_cesantia_unknown_institution(rate_tables):
    with pytest.raises(CesantiaLookupError, match="BANCO INEXISTENTE"):
        compute_cesantia(rate_tables, "BANCO INEXISTENTE", 4_500_000, 30)


def test_compute_cesantia_missing_tranche_for_institution(rate_tables):
    """BICE only publishes tramo_3; there is no fallback to other tranches"""
    with pytest.raises(CesantiaLookupError):
        compute_cesantia(rate_tables, "BANCO BICE", 8_000_000, 30)
