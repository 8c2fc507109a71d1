# backend/jobswipe/config.py

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Manages application-wide settings loaded from a .env file.
    """
    model_config = SettingsConfigDict(env_file='.env', env_ignore_empty=True, extra='ignore')

    # --- Core Application Settings ---
    APP_ENV: str = "dev"
    FRONTEND_BASE_URL: str = "http://localhost:3000"

    # --- Session Management for OAuth ---
    SESSION_SECRET_KEY: str

    # --- Google OAuth ---
    GOOGLE_CLIENT_ID: str
    GOOGLE_CLIENT_SECRET: str
    OAUTH_REDIRECT_URI: str = "http://localhost:8000/auth/google/callback"

    # --- JWT Authentication ---
    # For RS* algorithms these are PEM keys; for HS* both hold the shared secret.
    JWT_PRIVATE_KEY: str
    JWT_PUBLIC_KEY: str
    JWT_ALGORITHM: str = "RS256"
    JWT_EXPIRATION_MINUTES: int = 60
    COOKIE_NAME: str = "access_token"

    # --- Database ---
    DATABASE_URL: str

    # --- External Services ---
    # Without a key the message suggestions fall back to static lines.
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    AI_TIMEOUT_SECONDS: float = 5.0

    # --- Background Worker ---
    CELERY_BROKER_URL: str = "redis://redis:6379/0"
    OUTBOX_SWEEP_SECONDS: int = 30

    # --- Business Logic Rules ---
    FREE_SWIPES: int = 50
    FREE_SUPER_LIKES: int = 5

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

settings = Settings()
