"""Load rate tables from the JSON documents configured in settings"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from refund_gateway.config import settings
from refund_gateway.domain.exceptions import RateTableError
from refund_gateway.domain.rate_tables import RateTables


class UnemploymentRateEntry(BaseModel):
    """One tranche row of an unemployment insurance table"""

    model_config = ConfigDict(extra="ignore")

    desde: int
    hasta: Optional[int] = None
    tasa_mensual: float


_desgravamen_adapter = TypeAdapter(Dict[str, Dict[str, Dict[str, Dict[str, float]]]])
_cesantia_bank_adapter = TypeAdapter(Dict[str, Dict[str, UnemploymentRateEntry]])
_cesantia_preferential_adapter = TypeAdapter(Dict[str, UnemploymentRateEntry])


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise RateTableError(f"Cannot read rate table {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RateTableError(f"Invalid JSON in rate table {path}: {e}") from e


def load_rate_tables(
    desgravamen_path: str,
    cesantia_bank_path: str,
    cesantia_preferential_path: str,
    preferential_root_key: Optional[str] = None,
) -> RateTables:
    """
    Read and validate the three rate table documents.

    The preferential document may be wrapped in a single root key
    (TE_DEVUELVO_CESANTIA in the published tables); it is unwrapped when present.

    Raises:
        RateTableError: On unreadable files, invalid JSON or unexpected shapes
    """
    preferential_raw = _read_json(cesantia_preferential_path)
    if preferential_root_key and isinstance(preferential_raw, dict) and preferential_root_key in preferential_raw:
        preferential_raw = preferential_raw[preferential_root_key]

    try:
        desgravamen = _desgravamen_adapter.validate_python(_read_json(desgravamen_path))
        cesantia_bank = _cesantia_bank_adapter.validate_python(_read_json(cesantia_bank_path))
        cesantia_preferential = _cesantia_preferential_adapter.validate_python(preferential_raw)
    except ValidationError as e:
        raise RateTableError(f"Rate table has unexpected shape: {e}") from e

    return RateTables.from_documents(
        desgravamen,
        {
            institution: {tranche: entry.model_dump() for tranche, entry in by_tranche.items()}
            for institution, by_tranche in cesantia_bank.items()
        },
        {tranche: entry.model_dump() for tranche, entry in cesantia_preferential.items()},
    )


@lru_cache(maxsize=1)
def get_rate_tables() -> RateTables:
    """Process-wide tables, loaded on first use. Call get_rate_tables.cache_clear() to reload."""
    return load_rate_tables(
        settings.desgravamen_rates_path,
        settings.cesantia_bank_rates_path,
        settings.cesantia_preferential_rates_path,
        settings.cesantia_preferential_root_key,
    )
