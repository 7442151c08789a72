from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Pharmacy Management API"
    ENVIRONMENT: str = "local"
    API_PREFIX: str = "/api"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./pharmacy.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None
    JWT_EXPIRE_DAYS: int = 30
    PASSWORD_PBKDF2_ROUNDS: int = 200_000
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # ==============================
    # Inventory
    # ==============================
    EXPIRY_WINDOW_DAYS: int = 30

    # ==============================
    # Sales
    # ==============================
    SALE_MAX_RETRIES: int = 3
    RECENT_SALES_LIMIT: int = 3


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
