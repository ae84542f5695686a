"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "refund-gateway", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "refund-gateway") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_calculation(
    request_id: str,
    institution: str,
    coverage: str,
    refund_amount: int,
    error: Optional[str],
    duration_ms: float,
) -> None:
    """Log structured calculation outcome for analysis"""
    logging.info(
        "Calculation completed",
        extra={
            "request_id": request_id,
            "institution": institution,
            "step": "calculation_complete",
            "coverage": coverage,
            "outcome": "error" if error else "ok",
            "refund_amount": refund_amount,
            "calculation_error": error,
            "duration_ms": duration_ms,
        },
    )


def log_breakdown(
    request_id: str,
    institution_id: Optional[str],
    applied: bool,
    margin_pct: Optional[int],
    margin_floored: bool,
) -> None:
    """Log structured snapshot breakdown outcome"""
    logging.info(
        "Breakdown completed",
        extra={
            "request_id": request_id,
            "institution_id": institution_id,
            "step": "breakdown_complete",
            "outcome": "applied" if applied else "not_applicable",
            "margin_pct": margin_pct,
            "margin_floored": margin_floored,
        },
    )
