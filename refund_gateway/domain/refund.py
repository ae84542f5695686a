"""Refund orchestration - combines coverage legs and applies the service margin"""

import logging

from refund_gateway.domain.cesantia import compute_cesantia
from refund_gateway.domain.desgravamen import compute_desgravamen
from refund_gateway.domain.exceptions import (
    DomainException,
    InvalidCalculationInputError,
    RateLookupError,
)
from refund_gateway.domain.institutions import resolve_institution
from refund_gateway.domain.models import COVERAGE_MODES, CalculationResult
from refund_gateway.domain.rate_tables import RateTables, age_tranche
from refund_gateway.utils.rounding import round_half_up

DEFAULT_MARGIN_PCT = 10


def apply_margin(amount: float, margin_pct: float = DEFAULT_MARGIN_PCT) -> int:
    """Deduct the service margin. Does not floor: callers pass non-negative amounts."""
    return round_half_up(amount * (1 - margin_pct / 100))


def validate_calculation_input(
    age: int,
    amount: float,
    total_installments: int,
    remaining_installments: int,
    coverage: str,
) -> None:
    """
    Raises:
        InvalidCalculationInputError: On out-of-range or inconsistent inputs
    """
    if coverage not in COVERAGE_MODES:
        raise InvalidCalculationInputError(f"Unknown coverage mode: {coverage!r}")
    if age < 0:
        raise InvalidCalculationInputError("Age must not be negative.")
    if amount <= 0:
        raise InvalidCalculationInputError("Credit amount must be positive.")
    if total_installments <= 0 or remaining_installments <= 0:
        raise InvalidCalculationInputError("Installment counts must be positive.")
    if remaining_installments > total_installments:
        raise InvalidCalculationInputError("Remaining installments cannot exceed total installments.")


def calculate_refund(
    tables: RateTables,
    institution: str,
    age: int,
    amount: float,
    total_installments: int,
    remaining_installments: int,
    coverage: str = "desgravamen",
    margin_pct: float = DEFAULT_MARGIN_PCT,
) -> CalculationResult:
    """
    Main entry point: compute the client refund for the requested coverage.

    Modes:
    - desgravamen: desgravamen leg only
    - cesantia:    cesantía leg only
    - ambos:       both legs; raw differentials are summed and the margin is
                   applied once to the sum

    A failing leg aborts the whole calculation. Failures never raise: the
    result carries the message in `error` and every numeric field is zero.
    """
    try:
        validate_calculation_input(age, amount, total_installments, remaining_installments, coverage)
        institution_key = resolve_institution(institution)

        if coverage == "cesantia":
            cesantia = compute_cesantia(tables, institution_key, amount, remaining_installments)
            refund = apply_margin(cesantia.refund_amount, margin_pct)
            return CalculationResult(
                bank_premium=0,
                preferential_premium=0,
                refund_amount=refund,
                monthly_saving=0,
                total_bank_premium=cesantia.bank_premium,
                total_preferential_premium=cesantia.preferential_premium,
                total_saving=refund,
                applied_rate=cesantia.bank_rate,
                tranche_used=cesantia.tranche_used,
                coverage=coverage,
                gross_refund=cesantia.refund_amount,
                margin_pct=margin_pct,
                cesantia=cesantia,
            )

        desgravamen = compute_desgravamen(
            tables, institution_key, age, amount, total_installments, remaining_installments
        )
        cesantia = None
        if coverage == "ambos":
            cesantia = compute_cesantia(tables, institution_key, amount, remaining_installments)

        gross_refund = desgravamen.refund_amount
        total_bank_premium = desgravamen.bank_premium
        total_preferential_premium = desgravamen.preferential_premium
        if cesantia is not None:
            gross_refund += cesantia.refund_amount
            total_bank_premium += cesantia.bank_premium
            total_preferential_premium += cesantia.preferential_premium

        refund = max(0, apply_margin(gross_refund, margin_pct))
        return CalculationResult(
            bank_premium=desgravamen.monthly_premium_bank,
            preferential_premium=desgravamen.monthly_premium_preferential,
            refund_amount=refund,
            monthly_saving=desgravamen.monthly_premium_bank - desgravamen.monthly_premium_preferential,
            total_bank_premium=total_bank_premium,
            total_preferential_premium=total_preferential_premium,
            total_saving=refund,
            applied_rate=desgravamen.bank_rate,
            tranche_used=age_tranche(age),
            coverage=coverage,
            gross_refund=gross_refund,
            margin_pct=margin_pct,
            desgravamen=desgravamen,
            cesantia=cesantia,
        )

    except RateLookupError as e:
        return _error_result(coverage, str(e), tranche_used=age_tranche(age))
    except DomainException as e:
        return _error_result(coverage, str(e))
    except Exception:
        logging.exception(
            "Refund calculation failed",
            extra={"institution": institution, "coverage": coverage},
        )
        return _error_result(coverage, "Internal calculation error.")


def _error_result(coverage: str, error: str, tranche_used: str = "") -> CalculationResult:
    return CalculationResult(
        bank_premium=0,
        preferential_premium=0,
        refund_amount=0,
        monthly_saving=0,
        total_bank_premium=0,
        total_preferential_premium=0,
        total_saving=0,
        applied_rate=0,
        tranche_used=tranche_used,
        coverage=coverage,
        error=error,
    )
