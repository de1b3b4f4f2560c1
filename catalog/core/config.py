"""
Configuration helpers for the catalog app.

Settings are read once from environment variables (storage backend, database
URL, share link base, upload cap) so that routers/services do not fetch
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = {"sql", "json"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    database_url: str
    data_file: str
    share_base_url: str
    max_image_bytes: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    backend = (os.getenv("STORAGE_BACKEND") or "sql").strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = "sql"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=backend,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./catalog.db"),
        data_file=os.getenv("CATALOG_DATA_FILE", "./catalog_storage.json"),
        share_base_url=os.getenv("SHARE_BASE_URL", "https://wa.me/"),
        max_image_bytes=_int(os.getenv("MAX_IMAGE_BYTES", "5242880"), 5242880),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
