"""Configuration loading and validation package."""

from .loader import load_settings
from .models import BuilderSettings, LoggingSettings

__all__ = [
    "BuilderSettings",
    "LoggingSettings",
    "load_settings",
]
