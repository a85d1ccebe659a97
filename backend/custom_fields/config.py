from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Custom Fields API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./custom_fields.db"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Conditional visibility feature
    conditional_visibility_enabled: bool = True
    cascade_visibility: bool = False      # also hide fields whose dependencies are hidden

    # YAML field definitions compiled at startup (relative to backend directory)
    field_definitions_dir: str = "data/fields"

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_visibility: str = "INFO"       # visibility engine and services

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
