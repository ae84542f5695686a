"""POST /v1/calculation - premium refund calculation endpoint"""

import time
from dataclasses import asdict
from fastapi import APIRouter, Depends, Request

from refund_gateway.api.v1.schemas import CalculationRequest, CalculationResponse
from refund_gateway.api.dependencies import get_request_id, get_tables
from refund_gateway.config import settings
from refund_gateway.domain.rate_tables import RateTables
from refund_gateway.domain.refund import calculate_refund
from refund_gateway.infrastructure.observability.metrics import record_calculation
from refund_gateway.infrastructure.observability.logging import log_calculation

router = APIRouter()


@router.post("/calculation", response_model=CalculationResponse)
def create_calculation(
    request_body: CalculationRequest,
    request: Request,
    tables: RateTables = Depends(get_tables),
):
    """
    Quote the refund for a consumer credit's insurance premiums.

    Unsupported institution/installment combinations are a normal outcome:
    the response is 200 with `error` set and every amount at zero.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    result = calculate_refund(
        tables,
        institution=request_body.institution,
        age=request_body.age,
        amount=request_body.amount,
        total_installments=request_body.total_installments,
        remaining_installments=request_body.remaining_installments,
        coverage=request_body.coverage,
        margin_pct=settings.refund_margin_pct,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_calculation(result.coverage, result.refund_amount, result.error)
    log_calculation(
        request_id,
        request_body.institution,
        result.coverage,
        result.refund_amount,
        result.error,
        duration_ms,
    )

    return CalculationResponse(**asdict(result))
