"""Configuration management for sqlx-codegen."""

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Locate the .env file holding SQLX_CODEGEN_* overrides.

    Checked in order: ./.env, ~/.sqlx-codegen/.env, then the checkout root
    next to the sqlx_codegen package (useful for editable installs).
    """
    candidates = [
        Path(".env"),
        Path.home() / ".sqlx-codegen" / ".env",
        Path(__file__).resolve().parent.parent / ".env",
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


class Settings(BaseSettings):
    """Application settings loaded from SQLX_CODEGEN_* environment variables."""

    output_path: str = Field(
        default="target/models/",
        description="Directory the generated Rust files are written to"
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the sqlx_codegen loggers"
    )

    # Connection defaults
    default_host: str = Field(
        default="localhost",
        description="Database host used when --host is not given"
    )
    mysql_port: int = Field(
        default=3306,
        description="Default MySQL port"
    )
    postgres_port: int = Field(
        default=5432,
        description="Default PostgreSQL port"
    )
    connect_timeout: int = Field(
        default=10,
        description="Connection timeout in seconds"
    )

    class Config:
        env_prefix = "SQLX_CODEGEN_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
