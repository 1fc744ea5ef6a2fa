from __future__ import annotations

import functools
from decimal import Decimal
from typing import Literal, Optional

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings

FallbackStrategy = Literal["random", "fixed", "error"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "Commissary Price API"
    environment: str = "development"
    # Overrides the environment-derived log level (e.g. "WARNING")
    log_level: Optional[str] = None

    # Where the price routes are mounted
    api_prefix: str = "/api"

    # CORS configuration (production only; development uses local dev servers)
    cors_origins: str = "https://shopcheeply.duckdns.org"

    # What to answer for items missing from the commissary table
    fallback_price_strategy: FallbackStrategy = "random"
    fallback_price_min: Decimal = Decimal("1.00")
    fallback_price_max: Decimal = Decimal("6.00")
    fallback_fixed_price: Decimal = Decimal("3.99")

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level name (got {v!r})")
        return v

    @field_validator("fallback_price_strategy", mode="before")
    @classmethod
    def _lower_strategy(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("fallback_price_min", "fallback_fixed_price")
    @classmethod
    def _positive_price(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Fallback prices must be positive")
        return v

    @field_validator("fallback_price_max")
    @classmethod
    def _max_above_min(cls, v: Decimal, info: ValidationInfo) -> Decimal:
        minimum = info.data.get("fallback_price_min")
        if minimum is not None and v <= minimum:
            raise ValueError(
                f"FALLBACK_PRICE_MAX ({v}) must be greater than FALLBACK_PRICE_MIN ({minimum})"
            )
        return v


@functools.lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["FallbackStrategy", "Settings", "get_settings"]
