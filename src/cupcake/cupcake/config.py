"""Application configuration via pydantic-settings.

Reads CUPCAKE_* environment variables and an optional .env file at the
project root.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# src/cupcake/cupcake/config.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CUPCAKE_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Pricing ---
    currency_prefix: str = "RM"
    default_price_per_cupcake: Decimal = Field(default=Decimal("2.00"), ge=0)
    strict_toppings: bool = True

    # --- Catalog ---
    catalog_json_path: str | None = None  # None uses the built-in catalog

    # --- Logging ---
    log_level: str = "INFO"
    log_file: str | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance (created once)."""
    return Settings()
