"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Clarity Clean Suite"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./clarity_clean.db"

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # JWT Authentication
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Rate Limiting
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_DEFAULT: str = "60/minute"

    # Seed
    SEED_COMPANY_NAME: str = "Clarity Clean"
    SEED_ADMIN_PASSWORD: str = "admin"

    # Paramètres planning par défaut / Default scheduling parameters
    DEFAULT_COMPANY_TIMEZONE: str = "America/Toronto"
    # Appliqués aux jobs sans heure ou durée / Applied to jobs missing time or duration
    DEFAULT_JOB_START_TIME: str = "09:00"
    DEFAULT_JOB_DURATION_MINUTES: int = 120

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
