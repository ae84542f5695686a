"""Dependency injection for FastAPI endpoints"""

import logging
from fastapi import HTTPException, Request
from refund_gateway.domain.exceptions import RateTableError
from refund_gateway.domain.rate_tables import RateTables
from refund_gateway.infrastructure.clients.refund_admin import RefundAdminClient
from refund_gateway.infrastructure.rate_tables.loader import get_rate_tables


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_tables() -> RateTables:
    """Provide the process-wide rate tables"""
    try:
        return get_rate_tables()
    except RateTableError as e:
        logging.error(f"Rate tables unavailable: {e}")
        raise HTTPException(status_code=503, detail=f"Rate tables unavailable: {e}")


def get_refund_admin_client() -> RefundAdminClient:
    """Provide refund admin API client instance"""
    return RefundAdminClient()
