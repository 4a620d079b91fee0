"""
Application configuration from environment variables.
Settings class using pydantic-settings with optional validation.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from backend root so it loads when running from backend/ or project root
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"

DEFAULT_CORS_ORIGIN = "http://localhost:3000"


class Settings(BaseSettings):
    """
    Application settings loaded from environment and .env.
    All fields optional with defaults for local dev; validate for production.
    """

    # Application
    ENVIRONMENT: str = "development"
    # Store as string so env never triggers json.loads; parsed in cors_origins_list.
    cors_origins: str = Field(
        default=DEFAULT_CORS_ORIGIN,
        description="Comma-separated origins or JSON array",
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def normalize_cors_origins(cls, v: object) -> str:
        """Ensure we always have a string (avoid empty env causing json.loads in pydantic-settings)."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CORS_ORIGIN
        if isinstance(v, list):
            return ",".join(str(x).strip() for x in v if str(x).strip())
        return str(v).strip()

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Salesforce org (explicit env names so .env / deploy SALESFORCE_* are always read)
    salesforce_instance_url: str = Field(
        default="",
        description="Org instance URL, e.g. https://mydomain.my.salesforce.com",
        validation_alias="SALESFORCE_INSTANCE_URL",
    )
    salesforce_access_token: str = Field(
        default="",
        description="OAuth access token or session id (Bearer auth)",
        validation_alias="SALESFORCE_ACCESS_TOKEN",
    )
    salesforce_api_version: str = Field(
        default="60.0",
        description="REST API version without the leading 'v'",
        validation_alias="SALESFORCE_API_VERSION",
    )
    salesforce_timeout: float = Field(
        default=30.0,
        description="Per-request timeout in seconds",
        validation_alias="SALESFORCE_TIMEOUT",
    )
    salesforce_max_retries: int = Field(
        default=2,
        ge=0,
        description="Transport retries on 429/5xx and connection errors",
        validation_alias="SALESFORCE_MAX_RETRIES",
    )

    # Display sessions (server-side component state)
    display_max_sessions: int = Field(
        default=500,
        ge=1,
        description="Least recently used display sessions are evicted past this count",
        validation_alias="DISPLAY_MAX_SESSIONS",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated or JSON array string."""
        raw = (self.cors_origins or "").strip()
        if not raw:
            return [DEFAULT_CORS_ORIGIN]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                return [x.strip() for x in parsed if isinstance(x, str) and x.strip()]
        return [x.strip() for x in raw.split(",") if x.strip()] or [DEFAULT_CORS_ORIGIN]

    @field_validator("salesforce_instance_url", "salesforce_api_version", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    def validate_for_production(self) -> None:
        """
        Call to validate that required env vars are set (e.g. on startup in production).
        Raises ValueError with missing keys.
        """
        missing: List[str] = []
        if not self.salesforce_instance_url:
            missing.append("SALESFORCE_INSTANCE_URL")
        if not self.salesforce_access_token:
            missing.append("SALESFORCE_ACCESS_TOKEN")
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
