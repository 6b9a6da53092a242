"""SortQL configuration settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find project root (where .env file lives)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent  # core -> packages -> root
_ENV_FILE = _PROJECT_ROOT / ".env"


class SortSettings(BaseSettings):
    """Configuration values for sort hooks and the demo database."""

    # Hook selection
    sort_hook: str = Field(
        default="default",
        description="Registered hook name, or 'module:attribute' of a custom hook",
    )
    sort_param_key: str = Field(
        default="sort",
        description="Key holding the sort parameter in the params mapping",
    )

    # Database
    database_url: str = Field(default="sqlite+pysqlite:///:memory:")

    model_config = SettingsConfigDict(
        env_prefix="SORTQL_",
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> SortSettings:
    """Get cached SortQL settings."""
    return SortSettings()
