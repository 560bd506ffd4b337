# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Env vars (.env), all optional for local development:
      - DATABASE_URL (defaults to a local SQLite file)
      - JWT_SECRET (signing secret for admin access tokens)
      - ADMIN_EMAIL / ADMIN_PASSWORD (bootstrap admin credentials)

    In production DATABASE_URL and JWT_SECRET must be set.
    """

    PROJECT_NAME: str = "Nawab Khana Storefront API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Admin access tokens
    JWT_SECRET: str = "dev-secret-key-change-in-production"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # Admin bootstrap (/api/seed and seed_admin.py)
    ADMIN_EMAIL: str = "admin@nawabkhana.com"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_NAME: str = "Admin"

    # Storefront
    BRAND_NAME: str = "NAWAB KHANA"
    SITE_URL: str = "https://nawabkhana.com"
    DEFAULT_PRODUCT_IMAGE: str = (
        "https://images.unsplash.com/photo-1608797178974-15b35a64ede9?w=800&q=80"
    )

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
