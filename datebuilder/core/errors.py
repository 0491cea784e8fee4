"""Error hierarchy shared by the datebuilder subsystems.

Every failure raised by the package derives from :class:`DateBuilderError` so
callers can catch the library's errors in one place. Submodules should raise
the most specific error available.
"""
from __future__ import annotations


class DateBuilderError(Exception):
    """Base class for all custom exceptions in the package."""


class InvalidArgumentError(DateBuilderError, ValueError):
    """Raised when a builder factory or mutation receives an unusable value.

    Covers unparsable date strings, calendar-invalid dates, out-of-range
    month/day values, unknown zones and results outside the supported years.
    """


class ConfigurationError(DateBuilderError):
    """Raised when configuration files are missing or invalid."""
