import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


if Path(".env.dev").exists():
    load_dotenv(".env.dev", override=False)

load_dotenv(".env", override=False)

ENVIRONMENT = (os.getenv("ENVIRONMENT") or "dev").lower()
ENV_FILE = ".env.dev" if ENVIRONMENT == "dev" else ".env"


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    # API Configuration
    app_name: str = "budget-engine"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = ENVIRONMENT
    log_level: Optional[str] = None

    # CORS Configuration (public calculator)
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["POST", "OPTIONS", "GET"]
    cors_allow_headers: list[str] = [
        "authorization",
        "x-client-info",
        "apikey",
        "content-type",
    ]

    # Partner defaults (YAML); None means the bundled file
    partner_config_path: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
