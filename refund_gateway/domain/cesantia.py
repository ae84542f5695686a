"""Cesantía (unemployment) premium differential"""

from refund_gateway.domain.exceptions import CesantiaLookupError
from refund_gateway.domain.models import CesantiaLeg
from refund_gateway.domain.rate_tables import RateTables
from refund_gateway.domain.tranches import classify_tranche
from refund_gateway.utils.rounding import round_half_up


def compute_cesantia(
    tables: RateTables,
    institution_key: str,
    amount: float,
    remaining_installments: int,
) -> CesantiaLeg:
    """
    Flat monthly rate on the original principal for each remaining installment.
    No amortization and no age dependency.

    Raises:
        CesantiaLookupError: When the institution has no rate for the tranche
    """
    tranche = classify_tranche(amount)
    bank_rate = tables.lookup_unemployment_rate(institution_key, tranche)
    if bank_rate is None:
        raise CesantiaLookupError(institution_key)

    preferential_rate = tables.preferential_unemployment_rate(tranche)

    premium_bank = amount * bank_rate * remaining_installments
    premium_preferential = amount * preferential_rate * remaining_installments

    return CesantiaLeg(
        bank_premium=round_half_up(premium_bank),
        preferential_premium=round_half_up(premium_preferential),
        refund_amount=max(0, round_half_up(premium_bank - premium_preferential)),
        tranche_used=tranche,
        bank_rate=bank_rate,
        preferential_rate=preferential_rate,
    )
