"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="hookshot", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # API
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    api_workers: int = Field(default=4, alias="API_WORKERS")

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./hookshot.db", alias="DATABASE_URL")

    # Redis
    redis_host: str = Field(default="localhost", alias="REDIS_HOST")
    redis_port: int = Field(default=6379, alias="REDIS_PORT")
    redis_db: int = Field(default=0, alias="REDIS_DB")
    redis_password: Optional[str] = Field(default=None, alias="REDIS_PASSWORD")
    redis_url: Optional[str] = Field(default=None, alias="REDIS_URL")

    @property
    def redis_dsn(self) -> str:
        """Construct Redis DSN."""
        if self.redis_url:
            return self.redis_url
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Celery
    celery_broker_url: Optional[str] = Field(default=None, alias="CELERY_BROKER_URL")
    celery_result_backend: Optional[str] = Field(default=None, alias="CELERY_RESULT_BACKEND")

    @property
    def broker_url(self) -> str:
        """Get Celery broker URL."""
        return self.celery_broker_url or self.redis_dsn

    @property
    def result_backend(self) -> str:
        """Get Celery result backend URL."""
        return self.celery_result_backend or self.redis_dsn

    # Site
    product_name: str = Field(default="Yobi", alias="PRODUCT_NAME")
    site_base_url: str = Field(default="http://localhost:9000", alias="SITE_BASE_URL")
    default_locale: str = Field(default="en", alias="DEFAULT_LOCALE")

    # Webhooks
    webhook_timeout: float = Field(default=5.0, alias="WEBHOOK_TIMEOUT")
    webhook_max_concurrency: int = Field(default=10, alias="WEBHOOK_MAX_CONCURRENCY")
    webhook_enforce_scope: bool = Field(default=False, alias="WEBHOOK_ENFORCE_SCOPE")
    webhook_legacy_timestamps: bool = Field(default=False, alias="WEBHOOK_LEGACY_TIMESTAMPS")
    webhook_strict_registration: bool = Field(default=True, alias="WEBHOOK_STRICT_REGISTRATION")

    @property
    def webhook_user_agent(self) -> str:
        """User-Agent header sent with every delivery."""
        return f"{self.product_name}-Hookshot"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
