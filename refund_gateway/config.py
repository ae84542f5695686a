"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Rate tables (JSON documents supplied by the host)
    desgravamen_rates_path: str = "data/tasas_desgravamen_banco.json"
    cesantia_bank_rates_path: str = "data/tasas_cesantia_banco.json"
    cesantia_preferential_rates_path: str = "data/tasas_cesantia_preferencial.json"
    cesantia_preferential_root_key: str = "TE_DEVUELVO_CESANTIA"

    # Refund calculation
    refund_margin_pct: float = 10.0

    # External Services
    refund_admin_api_base: str = "http://localhost:8001/api/v1"
    refund_admin_api_token: Optional[str] = None

    # Service
    service_name: str = "refund-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
