"""Configuration settings for the resume assistant bot"""
import os
from typing import Optional
from pydantic_settings import BaseSettings


def detect_environment() -> str:
    """
    Detect current environment from the ENVIRONMENT variable or the hosting platform.
    Returns: 'dev', 'staging', or 'prod'
    """
    explicit_env = os.getenv("ENVIRONMENT", "").lower()
    if explicit_env in ("dev", "staging", "prod", "production", "development"):
        if explicit_env == "production":
            return "prod"
        if explicit_env == "development":
            return "dev"
        return explicit_env

    # Render sets RENDER=true on deployed services
    if os.getenv("RENDER"):
        return "prod"

    return "dev"


class Settings(BaseSettings):
    """Application settings using Pydantic for validation and environment variable loading"""

    # Telegram configuration
    TELEGRAM_BOT_TOKEN: str
    TELEGRAM_API_BASE: str = "https://api.telegram.org"
    TELEGRAM_MODE: str = "polling"  # polling or webhook
    TELEGRAM_WEBHOOK_URL: Optional[str] = None
    TELEGRAM_WEBHOOK_SECRET: Optional[str] = None
    TELEGRAM_POLL_TIMEOUT: int = 25

    # Gemini AI configuration
    GEMINI_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_TEMPERATURE: float = 0.7
    GEMINI_TOP_P: float = 0.9
    GEMINI_TOP_K: int = 40
    GEMINI_TIMEOUT_SECONDS: int = 60
    GEMINI_MAX_RETRIES: int = 2

    # Conversation settings
    MAX_MESSAGE_LENGTH: int = 4000
    CHUNK_DELAY_SECONDS: float = 0.5
    INTERVIEW_QUESTION_COUNT: int = 8
    DOWNLOAD_DIR: str = "./downloads"
    SESSION_TTL_MINUTES: Optional[int] = None  # None keeps sessions until the flow ends

    # Application settings
    ENVIRONMENT: str = detect_environment()
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "prod"

    @property
    def use_webhook(self) -> bool:
        """Check if updates arrive through the webhook route instead of long polling"""
        return self.TELEGRAM_MODE.lower() == "webhook"

    class Config:
        # Load from .env file
        env_file = ".env"
        case_sensitive = False


def get_settings() -> Settings:
    """Build settings from the current environment (fails fast on missing tokens)"""
    return Settings()
