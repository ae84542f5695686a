"""Snapshot breakdown endpoints - rebuild desgravamen + cesantía figures of a saved calculation"""

import logging
from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from refund_gateway.api.v1.schemas import BreakdownResponse, SnapshotRequest
from refund_gateway.api.dependencies import get_refund_admin_client, get_request_id, get_tables
from refund_gateway.domain.breakdown import reconstruct_breakdown
from refund_gateway.domain.exceptions import RefundAdminAPIError, RefundNotFoundError
from refund_gateway.domain.institutions import institution_display_name
from refund_gateway.domain.models import Snapshot
from refund_gateway.domain.rate_tables import RateTables
from refund_gateway.infrastructure.clients.refund_admin import RefundAdminClient
from refund_gateway.infrastructure.observability.metrics import (
    record_breakdown,
    refund_admin_fetch_failures_counter,
)
from refund_gateway.infrastructure.observability.logging import log_breakdown

router = APIRouter()


def _breakdown(
    tables: RateTables,
    snapshot_request: Optional[SnapshotRequest],
    request_id: str,
) -> Optional[BreakdownResponse]:
    document = snapshot_request.model_dump(by_alias=True, exclude_none=True) if snapshot_request else None
    snapshot = Snapshot.from_document(document) if document else None
    result = reconstruct_breakdown(tables, snapshot)

    record_breakdown(result is not None, bool(result and result.margin_floored))
    log_breakdown(
        request_id,
        snapshot.institution_id if snapshot else None,
        result is not None,
        result.margin_pct if result else None,
        bool(result and result.margin_floored),
    )

    if result is None:
        return None
    return BreakdownResponse(
        **asdict(result),
        institution_name=institution_display_name(snapshot.institution_id),
    )


@router.post("/breakdown", response_model=Optional[BreakdownResponse])
def create_breakdown(
    snapshot: SnapshotRequest,
    request: Request,
    tables: RateTables = Depends(get_tables),
):
    """
    Rebuild the per-coverage breakdown of a persisted calculationSnapshot.

    Returns null when the snapshot is not an "ambos" calculation or lacks
    the amount or remaining installments.
    """
    return _breakdown(tables, snapshot, get_request_id(request))


@router.get("/refunds/{public_id}/breakdown", response_model=Optional[BreakdownResponse])
async def get_refund_breakdown(
    public_id: str,
    request: Request,
    tables: RateTables = Depends(get_tables),
    refund_admin_client: RefundAdminClient = Depends(get_refund_admin_client),
):
    """
    Fetch a refund request from the admin backend and rebuild its breakdown.

    The stored snapshot is validated like a POSTed one (numeric strings are
    coerced); a snapshot that cannot be read is a backend data failure (503).
    """
    request_id = get_request_id(request)

    try:
        refund = await refund_admin_client.get_refund(public_id)
        document = refund.get("calculationSnapshot")
        snapshot = SnapshotRequest.model_validate(document) if isinstance(document, dict) else None
    except RefundNotFoundError:
        raise HTTPException(status_code=404, detail="Refund not found")
    except RefundAdminAPIError as e:
        refund_admin_fetch_failures_counter.inc()
        logging.error(f"Refund admin API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Refund admin service unavailable")
    except ValidationError as e:
        refund_admin_fetch_failures_counter.inc()
        logging.error(f"Invalid calculationSnapshot for refund {public_id}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Refund admin returned an unreadable snapshot")

    return _breakdown(tables, snapshot, request_id)
