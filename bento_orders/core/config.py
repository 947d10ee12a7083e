"""Application configuration."""

from datetime import time
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "bento_orders API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO")
    database_url: str = getenv("DATABASE_URL", "sqlite:///./bento_orders.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    admin_email: str = getenv("ADMIN_EMAIL", "")
    admin_password: str = getenv("ADMIN_PASSWORD", "")
    app_default_deadline_time: time = time.fromisoformat(getenv("APP_DEFAULT_DEADLINE_TIME", "10:00"))
    closing_period_months: int = int(getenv("CLOSING_PERIOD_MONTHS", "12"))
    closing_period_months_ahead: int = int(getenv("CLOSING_PERIOD_MONTHS_AHEAD", "2"))
    next_business_day_search_days: int = int(getenv("NEXT_BUSINESS_DAY_SEARCH_DAYS", "30"))


settings: Settings = Settings()
