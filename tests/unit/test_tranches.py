"""Unit tests for amount tranche classification"""

import pytest
from refund_gateway.domain.tranches import TRANCHES, TRANCHE_KEYS, classify_tranche, tranche_range


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "tramo_1"),  # below the first band
        (499_999, "tramo_1"),
        (500_000, "tramo_1"),
        (1_000_000, "tramo_1"),
        (1_000_001, "tramo_2"),
        (3_000_000, "tramo_2"),
        (3_000_001, "tramo_3"),
        (5_000_000, "tramo_3"),
        (5_000_001, "tramo_4"),
        (7_000_000, "tramo_4"),
        (7_000_001, "tramo_5"),
        (1_000_000_000, "tramo_5"),
    ],
)
def test_classify_tranche_boundaries(amount, expected):
    assert classify_tranche(amount) == expected


def test_tranches_are_contiguous_and_open_ended():
    """Every non-negative integer amount falls into exactly one band"""
    for (_, _, upper), (_, next_lower, _) in zip(TRANCHES, TRANCHES[1:]):
        assert next_lower == upper + 1
    assert TRANCHES[-1][2] is None
    assert len(TRANCHE_KEYS) == 5


def test_classify_tranche_always_returns_known_key():
    for amount in range(0, 12_000_000, 250_000):
        assert classify_tranche(amount) in TRANCHE_KEYS


def test_tranche_range():
    assert tranche_range("tramo_2") == (1_000_001, 3_000_000)
    assert tranche_range("tramo_5") == (7_000_001, None)
    assert tranche_range("tramo_9") is None
