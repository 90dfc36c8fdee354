"""Application configuration and settings."""

from enum import StrEnum
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        env_ignore_empty=True,
        validate_default=True,
    )

    # Project metadata
    PROJECT_NAME: str = "Real-IP"
    PROJECT_VERSION: str = "0.1.0"
    PROJECT_DESCRIPTION: str = "Client IP resolution middleware for services behind reverse proxies."

    # Application settings
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    LOG_LEVEL: LogLevel = "INFO"

    # Proxy headers
    FORWARDED_FOR_HEADER: str = "X-Forwarded-For"
    REAL_IP_HEADER: str = "X-Real-IP"

    # Access logging
    ACCESS_LOG_ENABLED: bool = True

    @field_validator("ENVIRONMENT", mode="before")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
