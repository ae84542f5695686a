"""Pytest fixtures for testing"""

import copy
import pytest
from typing import Any, Dict, Tuple
from fastapi.testclient import TestClient
from refund_gateway.api.main import create_app
from refund_gateway.api.dependencies import get_tables
from refund_gateway.domain.rate_tables import RateTables


# Rates are illustrative, chosen so expected amounts are easy to derive by hand
DESGRAVAMEN_RATES: Dict[str, Any] = {
    "BANCO CHILE": {
        "hasta_55": {
            "2000000": {"12": 0.01, "24": 0.02, "36": 0.03, "48": 0.04},
            "5000000": {"12": 0.01, "24": 0.02, "36": 0.03, "48": 0.04},
            "25000000": {"24": 0.02, "48": 0.04},
            "60000000": {"48": 0.05},
        },
        "desde_56": {
            "5000000": {"12": 0.015, "24": 0.03, "36": 0.045, "48": 0.06},
        },
    },
    "BANCO BICE": {
        "hasta_55": {"5000000": {"48": 0.001}},
    },
    "BANCO SECURITY": {
        "hasta_55": {"5000000": {"48": 0.04}},
    },
    "BANCO SANTANDER": {
        "hasta_55": {"5000000": {}},
    },
}

CESANTIA_BANK_RATES: Dict[str, Any] = {
    "BANCO CHILE": {
        "tramo_1": {"desde": 500000, "hasta": 1000000, "tasa_mensual": 0.0012},
        "tramo_2": {"desde": 1000001, "hasta": 3000000, "tasa_mensual": 0.0010},
        "tramo_3": {"desde": 3000001, "hasta": 5000000, "tasa_mensual": 0.0009},
        "tramo_4": {"desde": 5000001, "hasta": 7000000, "tasa_mensual": 0.0008},
        "tramo_5": {"desde": 7000001, "hasta": None, "tasa_mensual": 0.0007},
    },
    "BANCO BICE": {
        "tramo_3": {"desde": 3000001, "hasta": 5000000, "tasa_mensual": 0.0001},
    },
}

CESANTIA_PREFERENTIAL_RATES: Dict[str, Any] = {
    "tramo_1": {"desde": 500000, "hasta": 1000000, "tasa_mensual": 0.0006},
    "tramo_2": {"desde": 1000001, "hasta": 3000000, "tasa_mensual": 0.0005},
    "tramo_3": {"desde": 3000001, "hasta": 5000000, "tasa_mensual": 0.0005},
    "tramo_4": {"desde": 5000001, "hasta": 7000000, "tasa_mensual": 0.0004},
    "tramo_5": {"desde": 7000001, "hasta": None, "tasa_mensual": 0.0004},
}


@pytest.fixture
def rate_documents() -> Tuple[Dict[str, Any], Dict[str, Any], Dict[str, Any]]:
    """Raw JSON-shaped rate documents (desgravamen, cesantía bank, cesantía preferential)"""
    return (
        copy.deepcopy(DESGRAVAMEN_RATES),
        copy.deepcopy(CESANTIA_BANK_RATES),
        copy.deepcopy(CESANTIA_PREFERENTIAL_RATES),
    )


@pytest.fixture
def rate_tables(rate_documents) -> RateTables:
    """Fixture rate tables"""
    return RateTables.from_documents(*rate_documents)


@pytest.fixture
def client(rate_tables: RateTables) -> TestClient:
    """Create FastAPI test client with fixture rate tables"""
    app = create_app()
    app.dependency_overrides[get_tables] = lambda: rate_tables
    return TestClient(app)
