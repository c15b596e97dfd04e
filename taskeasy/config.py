"""Configuration settings using Pydantic BaseSettings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (``TASKEASY_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="TASKEASY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    storage_backend: Literal["file", "memory", "none"] = Field(
        default="file", description="Key-value store backing task persistence"
    )
    storage_dir: Path = Field(default=Path("data"), description="Directory for the file store")
    storage_key: str = Field(default="taskeasy-tasks", description="Key holding the task collection")

    # Application Configuration
    environment: str = Field(default="development", description="Deployment environment name")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Path = Field(default=Path("logs"), description="Directory for log files")
    log_to_file: bool = Field(default=True, description="Write rotating log files")


# Global settings instance
settings = Settings()
