"""GET /v1/institutions - institutions offered by the calculator"""

from fastapi import APIRouter

from refund_gateway.api.v1.schemas import InstitutionItem, InstitutionsResponse
from refund_gateway.domain.institutions import AVAILABLE_INSTITUTIONS, resolve_institution

router = APIRouter()


@router.get("/institutions", response_model=InstitutionsResponse)
def list_institutions():
    return InstitutionsResponse(
        institutions=[
            InstitutionItem(name=name, rate_table_key=resolve_institution(name))
            for name in AVAILABLE_INSTITUTIONS
        ]
    )
