"""Credit amount tranches used by the unemployment insurance tables"""

from typing import Optional, Tuple

# (key, inclusive lower bound, inclusive upper bound); None = open-ended
TRANCHES: Tuple[Tuple[str, int, Optional[int]], ...] = (
    ("tramo_1", 500_000, 1_000_000),
    ("tramo_2", 1_000_001, 3_000_000),
    ("tramo_3", 3_000_001, 5_000_000),
    ("tramo_4", 5_000_001, 7_000_000),
    ("tramo_5", 7_000_001, None),
)

TRANCHE_KEYS = tuple(key for key, _, _ in TRANCHES)


def classify_tranche(amount: float) -> str:
    """
    Map a credit amount to its tranche key.

    Amounts below the first band fall into tramo_1, amounts above the last
    lower bound into tramo_5. Non-integer amounts between two bands (e.g.
    1,000,000.5) go to the upper band.
    """
    for key, _, upper in TRANCHES[:-1]:
        if amount <= upper:
            return key
    return TRANCHES[-1][0]


def tranche_range(tranche: str) -> Optional[Tuple[int, Optional[int]]]:
    """Return (lower, upper) bounds for a tranche key, None if unknown"""
    for key, lower, upper in TRANCHES:
        if key == tranche:
            return lower, upper
    return None
