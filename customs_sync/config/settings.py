"""
Application settings using Pydantic BaseSettings.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Customs Sync Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"

    # Sync engine
    SYNC_TICK_INTERVAL_MS: int = 5000
    SYNC_MAX_RETRIES: int = 3
    SYNC_BATCH_SIZE: int = 10
    SYNC_TRANSPORT_TIMEOUT_SECONDS: Optional[float] = 30.0
    SYNC_HISTORY_SIZE: int = 100
    SYNC_RETRY_STRATEGY: str = "fixed"
    SYNC_RETRY_BASE_DELAY_SECONDS: float = 5.0
    SYNC_RETRY_MAX_DELAY_SECONDS: float = 300.0
    SYNC_AUTOSTART: bool = True

    # Government customs system
    MOCK_TRANSPORT: bool = False
    GOVERNMENT_API_BASE_URL: str = "https://customs.gov.example/api/v1"
    GOVERNMENT_API_TOKEN: Optional[str] = None

    # Monitoring
    ENABLE_METRICS: bool = True

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("SYNC_RETRY_STRATEGY")
    @classmethod
    def validate_retry_strategy(cls, v: str) -> str:
        if v.lower() not in ["fixed", "exponential"]:
            raise ValueError("Retry strategy must be one of: fixed, exponential")
        return v.lower()

    @field_validator("SYNC_TICK_INTERVAL_MS", "SYNC_BATCH_SIZE")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be greater than zero")
        return v

    @field_validator("SYNC_MAX_RETRIES", "SYNC_HISTORY_SIZE")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Value must not be negative")
        return v

    @field_validator("SYNC_TRANSPORT_TIMEOUT_SECONDS")
    @classmethod
    def normalize_timeout(cls, v: Optional[float]) -> Optional[float]:
        # 0 disables the timeout
        if v is not None and v <= 0:
            return None
        return v

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()
