# shopfront/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Env vars (.env), all optional for local development:
      - DATABASE_URL (defaults to a local SQLite file)
      - JWT_SECRET (signing secret for access tokens)

    Production deployments must override JWT_SECRET.
    """

    PROJECT_NAME: str = "Shopfront API"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./shopfront.db"
    DATABASE_ECHO: bool = False
    # e.g. "require" for a hosted Postgres; ignored for SQLite
    DATABASE_SSLMODE: str | None = None

    # Access tokens
    JWT_SECRET: str = "shopfront-dev-secret"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # Demo customer/seller accounts and a sample catalog on first start
    SEED_DEMO_DATA: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
