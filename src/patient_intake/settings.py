"""Application configuration using Pydantic Settings.

This module centralizes runtime configuration for the patient intake service.
Values can be provided via environment variables (preferred) or fall back to
the defaults below. A ``Settings`` instance is intended to be retrieved via
``get_settings`` which caches the object for reuse across the process.

Environment variable prefix: ``PATIENT_INTAKE_`` (e.g. ``PATIENT_INTAKE_HOST``).
"""

from datetime import date
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


def normalize_log_level(v: str | None) -> str:
    """Upper-case a log level name, rejecting unknown levels.

    Attribute assignment on ``Settings`` is not validated, so CLI overrides
    call this directly.

    Raises:
        ValueError: If the level is not one of ``LOG_LEVELS``
    """
    if v is None:
        return "INFO"

    v_upper = str(v).upper()
    if v_upper not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(LOG_LEVELS))}")

    return v_upper


class Settings(BaseSettings):
    """Runtime application settings.

    Attributes map directly to environment variables using the ``PATIENT_INTAKE_``
    prefix (case-insensitive). For example, ``host`` <- ``PATIENT_INTAKE_HOST``.
    """

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host interface to bind the server",
    )  # fmt: skip
    port: int = Field(
        default=8080,
        description="Server port",
    )  # fmt: skip
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )
    reload: bool = Field(
        default=False,
        description="Enable auto-reload in development",
    )  # fmt: skip

    # Persistence settings
    sql_log: bool = Field(
        default=False,
        description="Enable SQL statement logging (bound parameters are never logged)",
    )  # fmt: skip
    database_url: str = Field(
        default="sqlite:///./patient_intake.db",
        description="Database connection string",
    )  # fmt: skip

    # Audit and validation settings
    audit_log_file: str | None = Field(
        default=None,
        description="Optional file receiving serialized audit records (JSON lines)",
    )  # fmt: skip
    earliest_date_of_birth: date = Field(
        default=date(1900, 1, 1),
        description="Oldest date of birth accepted as plausible",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        return normalize_log_level(v)

    model_config = SettingsConfigDict(
        env_prefix="PATIENT_INTAKE_",  # Prefix for env vars
        case_sensitive=False,
        extra="ignore",  # Ignore unexpected env vars
        env_file=".env",  # Optional .env loading (if present)
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object to ensure consistent config.
    """

    return Settings()


__all__ = ["LOG_LEVELS", "Settings", "get_settings", "normalize_log_level"]
