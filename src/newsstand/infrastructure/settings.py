"""Runtime configuration, read from the environment and an optional .env file.

Every setting can be overridden with a ``NEWSSTAND_`` prefixed variable,
e.g. ``NEWSSTAND_DATABASE_URL=postgresql://...``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NEWSSTAND_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = f"sqlite:///{_DATA_DIR / 'newsstand.db'}"
    low_stock_threshold: int = 5
    echo_sql: bool = False
    log_level: str = "INFO"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
