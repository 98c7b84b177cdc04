"""
Configuration management using Pydantic Settings

Application-level settings (logging, background workers) read from
environment variables and an optional ``.env`` file.
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    # Application Info
    app_name: str = Field(default="PhotoFilter")
    app_version: str = Field(default="1.0.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # Background filtering
    max_filter_workers: int = Field(default=2, ge=1)
    filter_timeout: float = Field(default=30.0, gt=0)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_max_size_mb: int = Field(default=10)
    log_backup_count: int = Field(default=5)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {', '.join(allowed)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"Log level must be one of: {', '.join(allowed)}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Returns:
        Settings: Application settings singleton
    """
    return Settings()


def get_log_config(settings: Optional[Settings] = None) -> dict:
    """Keyword arguments for ``setup_logging``"""
    settings = settings or get_settings()
    return {
        "log_level": settings.log_level,
        "log_file": settings.log_file,
        "max_file_size": settings.log_max_size_mb * 1024 * 1024,
        "backup_count": settings.log_backup_count,
        "format_string": settings.log_format,
    }


def get_filter_config(settings: Optional[Settings] = None) -> dict:
    """Background filtering configuration dict"""
    settings = settings or get_settings()
    return {
        "max_workers": settings.max_filter_workers,
        "timeout": settings.filter_timeout,
    }
