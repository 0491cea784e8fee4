"""Typed configuration models for the date builder.

The config subsystem relies on pydantic to validate YAML files and to provide
strongly-typed settings to the factories and the logging setup.
"""
from __future__ import annotations

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingSettings(BaseModel):
    """Arguments forwarded to :func:`datebuilder.telemetry.configure_logging`."""

    level: str = Field("INFO")
    log_dir: Optional[str] = None
    logger_name: str = Field("datebuilder", min_length=1)

    model_config = ConfigDict(frozen=True)

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


class BuilderSettings(BaseModel):
    """Deployment defaults for builders.

    The builder never reads these on its own; callers pass
    ``default_timezone`` through the factories' ``zone`` argument.
    """

    default_timezone: str = Field("UTC", min_length=1)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = ConfigDict(frozen=True)

    @field_validator("default_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value
