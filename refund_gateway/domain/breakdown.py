"""Rebuild the desgravamen + cesantía breakdown of a persisted calculation"""

import logging
from typing import Optional, Tuple

from refund_gateway.domain.institutions import resolve_institution_id
from refund_gateway.domain.models import BreakdownLeg, BreakdownResult, Snapshot
from refund_gateway.domain.rate_tables import RateTables
from refund_gateway.domain.refund import DEFAULT_MARGIN_PCT
from refund_gateway.domain.tranches import classify_tranche
from refund_gateway.utils.rounding import round_half_up


def infer_margin(total_saving: Optional[float], total_refund: float) -> Tuple[int, bool, bool]:
    """
    Recover the margin that turned total_refund into the stored total_saving.

    Returns: (margin_pct, inferred, floored)

    Without a stored saving (or with nothing to refund) the default margin is
    returned. A negative result means the stored saving exceeds the
    recomputed refund (stale snapshot); it is floored to 0 and flagged.
    """
    if not total_saving or total_refund <= 0:
        return DEFAULT_MARGIN_PCT, False, False

    margin = round_half_up((1 - total_saving / total_refund) * 100)
    if margin < 0:
        return 0, True, True
    return margin, True, False


def reconstruct_breakdown(tables: RateTables, snapshot: Optional[Snapshot]) -> Optional[BreakdownResult]:
    """
    Best-effort breakdown for snapshots saved with coverage "ambos".

    The desgravamen leg comes straight from the stored monthly premiums; the
    cesantía leg was never persisted and is recomputed from the rate tables,
    with missing rates read as 0.

    Returns None when the snapshot is not an "ambos" calculation or lacks
    the amount or remaining installments.
    """
    if snapshot is None:
        return None
    if (snapshot.insurance_to_evaluate or "").lower() != "ambos":
        return None

    amount = snapshot.total_amount
    remaining = snapshot.remaining_installments
    if not amount or not remaining:
        return None

    # Desgravamen, as stored
    desgravamen_bank = snapshot.current_monthly_premium or 0
    desgravamen_preferential = snapshot.new_monthly_premium or 0
    desgravamen_refund = max(0, round_half_up((desgravamen_bank - desgravamen_preferential) * remaining))

    # Cesantía, recomputed
    institution_key = resolve_institution_id(snapshot.institution_id)
    tranche = classify_tranche(amount)
    bank_rate = tables.lookup_unemployment_rate(institution_key, tranche) or 0
    preferential_rate = tables.preferential_unemployment_rate(tranche)

    cesantia_bank = round_half_up(amount * bank_rate)
    cesantia_preferential = round_half_up(amount * preferential_rate)
    cesantia_refund = max(0, (cesantia_bank - cesantia_preferential) * remaining)

    total_refund = desgravamen_refund + cesantia_refund

    margin, inferred, floored = infer_margin(snapshot.total_saving, total_refund)
    if floored:
        logging.warning(
            "Stored saving exceeds recomputed refund, margin floored to 0",
            extra={
                "institution_id": snapshot.institution_id,
                "total_saving": snapshot.total_saving,
                "total_refund": total_refund,
            },
        )

    return BreakdownResult(
        desgravamen=BreakdownLeg(
            bank_premium=desgravamen_bank,
            preferential_premium=desgravamen_preferential,
            total_bank_premium=desgravamen_bank * remaining,
            total_preferential_premium=desgravamen_preferential * remaining,
            refund=desgravamen_refund,
        ),
        cesantia=BreakdownLeg(
            bank_premium=cesantia_bank,
            preferential_premium=cesantia_preferential,
            total_bank_premium=cesantia_bank * remaining,
            total_preferential_premium=cesantia_preferential * remaining,
            refund=cesantia_refund,
        ),
        total_refund=total_refund,
        total_with_margin=round_half_up(total_refund * (1 - margin / 100)),
        margin_pct=margin,
        margin_inferred=inferred,
        margin_floored=floored,
    )
