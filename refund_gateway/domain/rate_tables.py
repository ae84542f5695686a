"""Immutable rate tables and the lookups the calculators run against them"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from refund_gateway.domain.exceptions import RateTableError
from refund_gateway.domain.models import BankRateLookup, UnemploymentRate
from refund_gateway.domain.tranches import TRANCHE_KEYS
from refund_gateway.utils.rounding import round_half_up

AGE_TRANCHE_UP_TO_55 = "hasta_55"
AGE_TRANCHE_FROM_56 = "desde_56"

AMOUNT_STEP = 1_000_000
MIN_TABLE_AMOUNT = 2_000_000
MAX_TABLE_AMOUNT = 60_000_000

# institution -> age tranche -> rounded amount -> installments -> monthly rate
DesgravamenTable = Mapping[str, Mapping[str, Mapping[int, Mapping[int, float]]]]
# institution -> tranche -> rate
UnemploymentTable = Mapping[str, Mapping[str, UnemploymentRate]]


def age_tranche(age: int) -> str:
    return AGE_TRANCHE_UP_TO_55 if age <= 55 else AGE_TRANCHE_FROM_56


def round_table_amount(amount: float) -> int:
    """Round to the nearest million and clamp into the tabulated amount range"""
    rounded = round_half_up(amount / AMOUNT_STEP) * AMOUNT_STEP
    return min(max(rounded, MIN_TABLE_AMOUNT), MAX_TABLE_AMOUNT)


def nearest_installments(available: Any, requested: int) -> Optional[int]:
    """
    Pick the tabulated installment count closest to the requested one.

    Ties go to the larger count: with {12, 24, 36, 48}, 18 -> 24 and 30 -> 36.
    Historical refunds were quoted this way, so the rule must not change.
    """
    best: Optional[int] = None
    for candidate in sorted(available):
        if best is None:
            best = candidate
            continue
        distance = abs(requested - candidate)
        best_distance = abs(requested - best)
        if distance < best_distance or (distance == best_distance and candidate > best):
            best = candidate
    return best


@dataclass(frozen=True, eq=False)
class RateTables:
    """
    Read-only bundle of every table the engine queries.

    Build it once with from_documents() and share it; to reload, build a new
    instance and swap the reference.
    """

    desgravamen: DesgravamenTable
    cesantia_bank: UnemploymentTable
    cesantia_preferential: Mapping[str, UnemploymentRate]

    def __post_init__(self) -> None:
        missing = [key for key in TRANCHE_KEYS if key not in self.cesantia_preferential]
        if missing:
            raise RateTableError(f"Preferential unemployment table missing tranches: {', '.join(missing)}")

    @classmethod
    def from_documents(
        cls,
        desgravamen: Dict[str, Any],
        cesantia_bank: Dict[str, Any],
        cesantia_preferential: Dict[str, Any],
    ) -> "RateTables":
        """
        Build from the JSON-shaped documents.

        desgravamen:           {institution: {hasta_55|desde_56: {"2000000": {"12": 0.01}}}}
        cesantia_bank:         {institution: {tramo_N: {desde, hasta, tasa_mensual}}}
        cesantia_preferential: {tramo_N: {desde, hasta, tasa_mensual}}

        Raises:
            RateTableError: On non-numeric keys or rates, or missing fields
        """
        try:
            desgravamen_table = MappingProxyType({
                institution: MappingProxyType({
                    tranche: MappingProxyType({
                        int(amount): MappingProxyType({
                            int(installments): float(rate)
                            for installments, rate in by_installments.items()
                        })
                        for amount, by_installments in by_amount.items()
                    })
                    for tranche, by_amount in by_tranche.items()
                })
                for institution, by_tranche in desgravamen.items()
            })
            bank_table = MappingProxyType({
                institution: MappingProxyType({
                    tranche: _parse_unemployment_rate(entry)
                    for tranche, entry in by_tranche.items()
                })
                for institution, by_tranche in cesantia_bank.items()
            })
            preferential_table = MappingProxyType({
                tranche: _parse_unemployment_rate(entry)
                for tranche, entry in cesantia_preferential.items()
            })
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise RateTableError(f"Malformed rate table: {e!r}") from e

        return cls(
            desgravamen=desgravamen_table,
            cesantia_bank=bank_table,
            cesantia_preferential=preferential_table,
        )

    def lookup_bank_rate(
        self,
        institution_key: str,
        age: int,
        amount: float,
        installments: int,
    ) -> Optional[BankRateLookup]:
        """
        Resolve the bank's desgravamen rate.

        Falls back to the nearest tabulated installment count when the exact
        one is missing. Returns None when the institution, age tranche or
        amount row is absent, or the row has no installment counts.
        """
        rounded_amount = round_table_amount(amount)
        by_installments = (
            self.desgravamen
            .get(institution_key, {})
            .get(age_tranche(age), {})
            .get(rounded_amount)
        )
        if not by_installments:
            return None

        installments_used = installments
        if installments not in by_installments:
            installments_used = nearest_installments(by_installments.keys(), installments)
            if installments_used is None:
                return None

        return BankRateLookup(
            rate=by_installments[installments_used],
            installments_used=installments_used,
            rounded_amount=rounded_amount,
        )

    def lookup_unemployment_rate(self, institution_key: str, tranche: str) -> Optional[float]:
        entry = self.cesantia_bank.get(institution_key, {}).get(tranche)
        return entry.monthly_rate if entry is not None else None

    def preferential_unemployment_rate(self, tranche: str) -> float:
        return self.cesantia_preferential[tranche].monthly_rate


def _parse_unemployment_rate(entry: Dict[str, Any]) -> UnemploymentRate:
    upper = entry.get("hasta")
    return UnemploymentRate(
        lower_bound=int(entry["desde"]),
        upper_bound=int(upper) if upper is not None else None,
        monthly_rate=float(entry["tasa_mensual"]),
    )
