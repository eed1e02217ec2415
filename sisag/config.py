from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# Repository root (the directory holding alembic/ and seed_data.py)
_BACKEND_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Database (set a postgresql:// URL in production)
    DATABASE_URL: str = f"sqlite:///{_BACKEND_ROOT / 'sisag.db'}"

    # JWT issued by the identity service; only verified here
    JWT_SECRET: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 10080  # 7 days

    # App
    APP_NAME: str = "SISAG"
    DEBUG: bool = True
    API_PREFIX: str = "/api"

    # CORS (override with CORS_ORIGINS as a JSON array)
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:4173",
    ]

    # Indicators: number of projects sampled for phase/alignment rollups
    INDICATOR_SAMPLE_SIZE: int = 10

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
