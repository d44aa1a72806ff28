# stockwatch/core/config.py

import os
from functools import lru_cache
from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Data store. Empty means the service runs in degraded mode.
    DATABASE_URL: str = ""

    # Stock rules
    CRITICAL_STOCK_THRESHOLD: float = 5
    EXPIRY_WARNING_DAYS: int = 7

    # Dispatch
    DISPATCH_TIMEOUT: float = 20.0
    SWEEP_MAX_CONCURRENT: int = 2

    # Scheduled sweep
    MONITOR_SCHEDULE: str = "0 * * * *"  # hourly
    MONITOR_SCHEDULE_ENABLED: bool = False
    SERVICE_URL: str = "http://localhost:8000"

    # Change-notification webhooks
    WEBHOOK_SECRET: str = ""

    # SMTP / Email
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False
    SMTP_TIMEOUT: int = 30
    SMTP_FROM_EMAIL: Optional[str] = None
    SMTP_FROM_NAME: Optional[str] = None

    # Link rendered into alert emails
    APP_URL: str = ""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists('.env') else None,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def smtp_configured(self) -> bool:
        return bool(self.SMTP_HOST and self.SMTP_USERNAME and self.SMTP_PASSWORD)

    @property
    def database_configured(self) -> bool:
        return bool(self.DATABASE_URL)


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()


def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
