import os
from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


# Repository root in a source checkout (the parent of the package directory).
_DEFAULT_INSTALL_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "learn-circassian-desktop"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # Packaged builds keep the store in the per-user application-data folder,
    # source checkouts keep it under <install root>/resources.
    PACKAGED: bool = False

    # --- Local API surface (loopback only) ---
    HOST: str = "127.0.0.1"
    PORT: int = 8765

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "learn-circassian-backend"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Store (read-only SQLite asset) ---
    STORE_URL: str = (
        "https://github.com/bihoqo/learn-circassian-dictionary-collection"
        "/releases/latest/download/dictionary.db"
    )
    STORE_FILENAME: str = "dictionary.db"
    # Explicit override; wins over the packaged/dev resolution when set.
    STORE_PATH: Optional[str] = None
    INSTALL_ROOT: str = _DEFAULT_INSTALL_ROOT

    # --- Asset Fetcher ---
    FETCH_MAX_REDIRECTS: int = 5
    FETCH_CHUNK_SIZE: int = 64 * 1024
    FETCH_CONNECT_TIMEOUT_SEC: float = 15.0
    # Maximum silence between two body chunks before the transfer is abandoned
    FETCH_STALL_TIMEOUT_SEC: float = 60.0

    # --- Search ---
    SEARCH_PAGE_SIZE: int = 50
    MIN_CONTAINS_CHARS: int = 3

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
