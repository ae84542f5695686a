"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

CoverageMode = Literal["desgravamen", "cesantia", "ambos"]

COVERAGE_MODES = ("desgravamen", "cesantia", "ambos")


@dataclass(frozen=True)
class UnemploymentRate:
    """Flat monthly unemployment-insurance rate for one amount tranche"""

    lower_bound: int
    upper_bound: Optional[int]  # None = open-ended top tranche
    monthly_rate: float


@dataclass(frozen=True)
class BankRateLookup:
    """Resolved desgravamen bank rate and the table coordinates actually used"""

    rate: float
    installments_used: int
    rounded_amount: int


@dataclass(frozen=True)
class DesgravamenLeg:
    """Life/disability insurance comparison, bank premium vs preferential premium"""

    bank_premium: int  # remaining bank premium
    preferential_premium: int  # remaining preferential premium
    refund_amount: int  # differential, floored at 0, before margin
    bank_rate: float
    preferential_rate: float
    installments_used: int
    rounded_amount: int
    remaining_capital: int
    single_premium_bank: int
    total_premium_bank: int
    total_premium_preferential: int
    monthly_premium_bank: int
    monthly_premium_preferential: int
    remaining_premium_bank: int
    remaining_premium_preferential: int


@dataclass(frozen=True)
class CesantiaLeg:
    """Unemployment insurance comparison over the remaining installments"""

    bank_premium: int
    preferential_premium: int
    refund_amount: int  # differential, floored at 0, before margin
    tranche_used: str
    bank_rate: float
    preferential_rate: float


@dataclass(frozen=True)
class CalculationResult:
    """Output of a refund calculation. When error is set every numeric field is zero."""

    bank_premium: int
    preferential_premium: int
    refund_amount: int  # client-facing refund, after margin
    monthly_saving: int
    total_bank_premium: int
    total_preferential_premium: int
    total_saving: int
    applied_rate: float
    tranche_used: str
    coverage: str
    gross_refund: int = 0  # before margin
    margin_pct: float = 0
    desgravamen: Optional[DesgravamenLeg] = None
    cesantia: Optional[CesantiaLeg] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class Snapshot:
    """Figures persisted with a refund request at simulation time"""

    total_amount: Optional[float] = None
    remaining_installments: Optional[int] = None
    current_monthly_premium: Optional[float] = None
    new_monthly_premium: Optional[float] = None
    total_saving: Optional[float] = None
    institution_id: Optional[str] = None
    insurance_to_evaluate: Optional[str] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Snapshot":
        """Build from the backend's camelCase calculationSnapshot document"""
        return cls(
            total_amount=document.get("totalAmount"),
            remaining_installments=document.get("remainingInstallments"),
            current_monthly_premium=document.get("currentMonthlyPremium"),
            new_monthly_premium=document.get("newMonthlyPremium"),
            total_saving=document.get("totalSaving"),
            institution_id=document.get("institutionId"),
            # Older records carry the coverage tag as tipoSeguro
            insurance_to_evaluate=document.get("insuranceToEvaluate") or document.get("tipoSeguro"),
        )


@dataclass(frozen=True)
class BreakdownLeg:
    """Per-coverage figures of a reconstructed breakdown"""

    bank_premium: float  # monthly
    preferential_premium: float  # monthly
    total_bank_premium: float
    total_preferential_premium: float
    refund: int


@dataclass(frozen=True)
class BreakdownResult:
    """Desgravamen + cesantía breakdown rebuilt from a snapshot"""

    desgravamen: BreakdownLeg
    cesantia: BreakdownLeg
    total_refund: int
    total_with_margin: int
    margin_pct: int
    margin_inferred: bool
    margin_floored: bool
