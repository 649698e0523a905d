from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# hexbooking/core/config.py -> BASE_DIR == repository root
BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        extra="ignore",
        env_prefix="",
        case_sensitive=False,
    )

    # Environment
    env: str = Field(default="dev", validation_alias="ENV")

    # Application
    api_name: str = Field(default="hexbooking-api", validation_alias="API_NAME")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Legacy availability systems
    legacy_reserve_api: str = Field(
        default="http://localhost:8081", validation_alias="LEGACY_RESERVE_API"
    )
    legacy_cal_api: str = Field(
        default="http://localhost:8082", validation_alias="LEGACY_CAL_API"
    )
    provider_timeout_secs: float = Field(
        default=5.0, gt=0, validation_alias="PROVIDER_TIMEOUT_SECS"
    )
    provider_max_retries: int = Field(
        default=0, ge=0, validation_alias="PROVIDER_MAX_RETRIES"
    )
    aggregate_timeout_secs: float = Field(
        default=10.0, gt=0, validation_alias="AGGREGATE_TIMEOUT_SECS"
    )

    @field_validator("legacy_reserve_api", "legacy_cal_api", mode="after")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """
        Supported env formats:
          - JSON list: '["http://localhost:3000"]'
          - Comma-separated: 'http://localhost:3000, http://localhost:5173'
          - '*' wildcard
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if not isinstance(v, str):
            raise TypeError("cors_origins must be a string or list of strings")

        s = v.strip()
        if not s:
            return []
        if s == "*":
            return ["*"]

        if s.startswith("[") and s.endswith("]"):
            try:
                parsed = json.loads(s)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return [str(x).strip() for x in parsed if str(x).strip()]
            s = s[1:-1]

        parts = [p.strip().strip('"').strip("'") for p in s.split(",")]
        return [p for p in parts if p]

    # OpenTelemetry
    otel_enabled: bool = Field(default=False, validation_alias="OTEL_ENABLED")
    otel_otlp_endpoint: str = Field(
        default="http://localhost:4318/v1/traces",
        validation_alias="OTEL_OTLP_ENDPOINT",
    )


settings = Settings()
