"""
Application configuration settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import logging


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        # Load from .env file for local development
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env
    )

    # App metadata
    app_name: str = "Task Manager API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Environment - internal error details are only returned when set to "development"
    api_env: str = "production"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "info"

    # CORS settings
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Extra origins for deployments, comma separated
    # e.g., ALLOWED_ORIGINS_ENV=https://tasks.example.com,https://app.example.com
    allowed_origins_env: str = ""

    # Largest accepted request body (10 MiB)
    max_body_bytes: int = 10 * 1024 * 1024

    # Titles to pre-load into the store at startup, as a JSON list
    # e.g., SEED_TASKS='["Write report", "Buy milk"]'
    seed_tasks: List[str] = []

    @property
    def get_allowed_origins(self) -> List[str]:
        """Get combined allowed origins from defaults and environment"""
        origins = self.allowed_origins.copy()
        if self.allowed_origins_env:
            origins.extend([o.strip() for o in self.allowed_origins_env.split(",") if o.strip()])
        return origins

    @property
    def is_development(self) -> bool:
        return self.api_env.lower() == "development"


def configure_logging(settings: Settings) -> None:
    """Set up root logging at the configured level"""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Initialize settings - will load from environment variables
try:
    settings = Settings()
except Exception as e:
    import sys
    print(f"❌ ERROR loading settings: {e}", file=sys.stderr, flush=True)
    import traceback
    traceback.print_exc(file=sys.stderr)
    # Re-raise to fail fast
    raise
