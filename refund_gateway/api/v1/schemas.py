"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional

from refund_gateway.domain.models import CoverageMode


class CalculationRequest(BaseModel):
    """Request body for POST /v1/calculation"""

    institution: str = Field(..., min_length=1, description="Institution display name, e.g. 'Chile'")
    age: int = Field(..., ge=0, le=120, description="Borrower age in years")
    amount: int = Field(..., gt=0, description="Credit amount in CLP")
    total_installments: int = Field(..., gt=0)
    remaining_installments: int = Field(..., gt=0)
    coverage: CoverageMode = "desgravamen"

    @model_validator(mode="after")
    def check_remaining_installments(self) -> "CalculationRequest":
        if self.remaining_installments > self.total_installments:
            raise ValueError("remaining_installments cannot exceed total_installments")
        return self


class DesgravamenLegSchema(BaseModel):
    bank_premium: int
    preferential_premium: int
    refund_amount: int
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


class CesantiaLegSchema(BaseModel):
    bank_premium: int
    preferential_premium: int
    refund_amount: int
    tranche_used: str
    bank_rate: float
    preferential_rate: float


class CalculationResponse(BaseModel):
    """Response for POST /v1/calculation. Numeric fields are zero when error is set."""

    bank_premium: int
    preferential_premium: int
    refund_amount: int
    monthly_saving: int
    total_bank_premium: int
    total_preferential_premium: int
    total_saving: int
    applied_rate: float
    tranche_used: str
    coverage: str
    gross_refund: int
    margin_pct: float
    desgravamen: Optional[DesgravamenLegSchema] = None
    cesantia: Optional[CesantiaLegSchema] = None
    error: Optional[str] = None


class SnapshotRequest(BaseModel):
    """calculationSnapshot as persisted with a refund request (camelCase keys)"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_amount: Optional[float] = Field(None, alias="totalAmount")
    remaining_installments: Optional[int] = Field(None, alias="remainingInstallments")
    current_monthly_premium: Optional[float] = Field(None, alias="currentMonthlyPremium")
    new_monthly_premium: Optional[float] = Field(None, alias="newMonthlyPremium")
    total_saving: Optional[float] = Field(None, alias="totalSaving")
    institution_id: Optional[str] = Field(None, alias="institutionId")
    insurance_to_evaluate: Optional[str] = Field(None, alias="insuranceToEvaluate")
    tipo_seguro: Optional[str] = Field(None, alias="tipoSeguro")


class BreakdownLegSchema(BaseModel):
    bank_premium: float
    preferential_premium: float
    total_bank_premium: float
    total_preferential_premium: float
    refund: int


class BreakdownResponse(BaseModel):
    """Response for breakdown endpoints (null when the snapshot is not an 'ambos' calculation)"""

    desgravamen: BreakdownLegSchema
    cesantia: BreakdownLegSchema
    total_refund: int
    total_with_margin: int
    margin_pct: int
    margin_inferred: bool
    margin_floored: bool
    institution_name: str  # commercial name of the snapshot's institutionId


class InstitutionItem(BaseModel):
    """Institution offered by the calculator form"""

    name: str
    rate_table_key: str


class InstitutionsResponse(BaseModel):
    institutions: List[InstitutionItem]
