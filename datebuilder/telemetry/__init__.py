"""Logging subsystem package."""
from .logging_setup import JsonFormatter, configure_logging, configure_logging_from_settings

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
]
