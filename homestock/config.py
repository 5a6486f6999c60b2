from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="HOMESTOCK_", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Household Inventory"

    # ==============================
    # Storage
    # ==============================
    DATA_DIR: str = "data"
    DOCUMENT_NAME: str = "inventory.json"
    ID_MAX_ATTEMPTS: int = 10_000

    # ==============================
    # Images
    # ==============================
    THUMBNAIL_SIZE: int = 256
    THUMBNAIL_QUALITY: int = 85

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR).expanduser()


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
