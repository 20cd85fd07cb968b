"""Configuration management for the payroll engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    engine_version: str
    host: str
    port: int
    debug: bool
    log_level: str
    currency: str

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            engine_version=os.getenv("ENGINE_VERSION", "1.0.0"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            currency=os.getenv("CURRENCY", "MAD"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
