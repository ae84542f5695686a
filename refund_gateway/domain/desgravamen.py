"""Desgravamen (life/disability) premium differential"""

from refund_gateway.domain.exceptions import RateLookupError
from refund_gateway.domain.models import DesgravamenLeg
from refund_gateway.domain.rate_tables import RateTables
from refund_gateway.utils.rounding import round_half_up

# Preferential monthly rates by age, split at HIGH_AMOUNT_THRESHOLD
PREFERENTIAL_RATE_UP_TO_55 = 0.0003
PREFERENTIAL_RATE_FROM_56 = 0.00039
PREFERENTIAL_RATE_UP_TO_55_HIGH = 0.000344
PREFERENTIAL_RATE_FROM_56_HIGH = 0.000343
HIGH_AMOUNT_THRESHOLD = 20_000_000


def preferential_desgravamen_rate(amount: float, age: int) -> float:
    if amount > HIGH_AMOUNT_THRESHOLD:
        return PREFERENTIAL_RATE_UP_TO_55_HIGH if age <= 55 else PREFERENTIAL_RATE_FROM_56_HIGH
    return PREFERENTIAL_RATE_UP_TO_55 if age <= 55 else PREFERENTIAL_RATE_FROM_56


def compute_desgravamen(
    tables: RateTables,
    institution_key: str,
    age: int,
    amount: float,
    total_installments: int,
    remaining_installments: int,
) -> DesgravamenLeg:
    """
    Compare the bank's desgravamen premium with the preferential one over the
    installments still to be paid.

    Bank side is a single premium (amount x table rate) quoted for
    installments_used, re-based onto the real schedule length and amortized
    evenly. Preferential side is a monthly rate on the proportional
    outstanding capital.

    Only remaining_capital is rounded mid-pipeline; every other figure is
    rounded when reported.

    Raises:
        RateLookupError: When no bank rate is tabulated for the inputs
    """
    lookup = tables.lookup_bank_rate(institution_key, age, amount, total_installments)
    if lookup is None:
        raise RateLookupError(institution_key, total_installments)

    preferential_rate = preferential_desgravamen_rate(amount, age)

    single_premium_bank = amount * lookup.rate
    total_premium_bank = single_premium_bank / lookup.installments_used * total_installments
    monthly_premium_bank = total_premium_bank / total_installments
    remaining_premium_bank = monthly_premium_bank * remaining_installments

    remaining_capital = round_half_up(amount * remaining_installments / total_installments)
    total_premium_preferential = remaining_capital * preferential_rate * remaining_installments
    monthly_premium_preferential = total_premium_preferential / remaining_installments
    remaining_premium_preferential = monthly_premium_preferential * remaining_installments

    differential = remaining_premium_bank - remaining_premium_preferential

    return DesgravamenLeg(
        bank_premium=round_half_up(remaining_premium_bank),
        preferential_premium=round_half_up(remaining_premium_preferential),
        refund_amount=max(0, round_half_up(differential)),
        bank_rate=lookup.rate,
        preferential_rate=preferential_rate,
        installments_used=lookup.installments_used,
        rounded_amount=lookup.rounded_amount,
        remaining_capital=remaining_capital,
        single_premium_bank=round_half_up(single_premium_bank),
        total_premium_bank=round_half_up(total_premium_bank),
        total_premium_preferential=round_half_up(total_premium_preferential),
        monthly_premium_bank=round_half_up(monthly_premium_bank),
        monthly_premium_preferential=round_half_up(monthly_premium_preferential),
        remaining_premium_bank=round_half_up(remaining_premium_bank),
        remaining_premium_preferential=round_half_up(remaining_premium_preferential),
    )
