"""Application configuration via pydantic settings."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "City Venture Booking Pricing API"
    api_v1_prefix: str = "/api/v1"
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database_url: str = Field(
        "sqlite+aiosqlite:///./booking_pricing.db", alias="DATABASE_URL"
    )
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    booking_fee: Decimal = Field(Decimal("50"), alias="BOOKING_FEE")
    transaction_fee_rate: Decimal = Field(
        Decimal("0.03"), alias="TRANSACTION_FEE_RATE"
    )
    partial_payment_rate: Decimal = Field(
        Decimal("0.5"), alias="PARTIAL_PAYMENT_RATE"
    )
    currency_symbol: str = Field("₱", alias="CURRENCY_SYMBOL")

    cors_allowlist: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:8081"],
        alias="CORS_ALLOWLIST",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        case_sensitive=False,
    )

    @field_validator("cors_allowlist", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("transaction_fee_rate", "partial_payment_rate")
    @classmethod
    def _check_rate(cls, value: Decimal) -> Decimal:
        if value < 0 or value > 1:
            raise ValueError("rate must be between 0 and 1")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
