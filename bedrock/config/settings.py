"""Bedrock application settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SnapshotBackend(StrEnum):
    """Where the current snapshot is written after each mutation."""

    MEMORY = "memory"
    FILE = "file"
    SQL = "sql"


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Persistence ---
    SNAPSHOT_BACKEND: SnapshotBackend = Field(
        default=SnapshotBackend.FILE,
        description="Snapshot store implementation (memory/file/sql).",
    )
    SNAPSHOT_PATH: str = Field(
        default="./bedrock_state.json",
        description="JSON document path for the file backend.",
    )
    DATABASE_URL: str = Field(
        default="sqlite:///./bedrock.db",
        description="SQLAlchemy URL for the sql backend.",
    )
    SNAPSHOT_KEY: str = Field(
        default="bedrock_state",
        description="Row key of the snapshot document for the sql backend.",
    )

    # --- Access ---
    DEFAULT_OPERATOR_ROLE: str = Field(
        default="admin",
        description="Role assumed when a request names no operator role.",
    )

    # --- Reports ---
    REPORT_TOOL_NAME: str = Field(
        default="BCP",
        description="Prefix of exported report file names.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )


def get_settings() -> Settings:
    """Factory function for dependency injection via FastAPI Depends."""
    return Settings()
