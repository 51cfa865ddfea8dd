"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRADESMAN_",
        extra="ignore",
    )

    # Session store; in-memory SQLite keeps nothing beyond the process
    database_url: str = "sqlite://"

    # Service
    service_name: str = "tradesman-finance"
    log_level: str = "INFO"

    # Lead webhook (Zapier / CRM); empty disables delivery
    lead_webhook_url: Optional[str] = None
    lead_source: str = "tradesmanfinance.co.uk"

    # HTTP Client
    http_timeout_seconds: float = 10.0
    webhook_max_retries: int = 5
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds


settings = Settings()
