"""Application configuration."""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Warehouse Directory API"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10

    # JWT (REQUIRED) - tokens are issued by the main platform, we only verify
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS (comma-separated)
    CORS_ORIGINS: str = "*"

    # Address defaults
    DEFAULT_COUNTRY: str = "India"

    @field_validator("DATABASE_URL")
    @classmethod
    def require_database_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("DATABASE_URL must not be empty")
        return v.strip()

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ".env"      # Local only
        case_sensitive = True
        extra = "ignore"      # Ignore unrelated env vars


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
