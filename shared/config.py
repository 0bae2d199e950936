"""
Environment configuration for the RECON backend.

All settings come from environment variables (Azure Function App settings
in production, local.settings.json when running locally).
"""

import os
import sys
import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = [
    "SUPABASE_URL",
    "SUPABASE_SERVICE_KEY",
    "GROQ_API_KEY",
    "FRONTEND_URL",
]

RATE_LIMIT_WINDOW_SECONDS = 15 * 60


@dataclass(frozen=True)
class Settings:
    """Resolved application settings."""
    environment: str
    supabase_url: str
    supabase_service_key: str
    image_bucket: str
    groq_api_key: str
    groq_base_url: str
    groq_model: str
    frontend_url: Optional[str]
    rate_limit_max: int
    auth_rate_limit_max: int
    rate_limit_window: int = RATE_LIMIT_WINDOW_SECONDS

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer value for {name}: {raw!r}")
        return default


def load_settings() -> Settings:
    """Read settings from the environment, applying defaults."""
    environment = os.environ.get("ENVIRONMENT", "development")
    production = environment == "production"

    return Settings(
        environment=environment,
        supabase_url=os.environ.get("SUPABASE_URL", "").rstrip("/"),
        supabase_service_key=os.environ.get("SUPABASE_SERVICE_KEY", ""),
        image_bucket=os.environ.get("SUPABASE_IMAGE_BUCKET", "project-images"),
        groq_api_key=os.environ.get("GROQ_API_KEY", ""),
        groq_base_url=os.environ.get("GROQ_BASE_URL", "https://api.groq.com/openai/v1").rstrip("/"),
        groq_model=os.environ.get("GROQ_MODEL", "llama-3.3-70b-versatile"),
        frontend_url=os.environ.get("FRONTEND_URL") or None,
        rate_limit_max=_int_env("RATE_LIMIT_MAX", 100 if production else 1000),
        auth_rate_limit_max=_int_env("AUTH_RATE_LIMIT_MAX", 10 if production else 100),
    )


def missing_settings() -> List[str]:
    """Names of required settings that are unset or empty."""
    return [name for name in REQUIRED_SETTINGS if not os.environ.get(name)]


def validate_environment() -> None:
    """
    Check that every required setting is present.

    Exits the process with status 1 when anything is missing so the host
    never serves requests with a half-configured app.
    """
    missing = missing_settings()
    if missing:
        logger.error(
            f"Missing required environment settings: {', '.join(missing)}. "
            "Check local.settings.json or the Function App configuration."
        )
        sys.exit(1)
