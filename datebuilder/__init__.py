"""Fluent builder for calendar date/time values.

Typical use::

    from datebuilder import mm_dd_yyyy, today

    start = today().subtract_days(7).build()
    birthday = mm_dd_yyyy("08_29_1974").build()
"""

from .builder import (
    Builder,
    DateBuilder,
    from_formatted_string,
    mm_dd_yyyy,
    now,
    today,
    tomorrow,
    yesterday,
)
from .core.errors import ConfigurationError, DateBuilderError, InvalidArgumentError
from .instant import Instant

__all__ = [
    "Builder",
    "ConfigurationError",
    "DateBuilder",
    "DateBuilderError",
    "Instant",
    "InvalidArgumentError",
    "from_formatted_string",
    "mm_dd_yyyy",
    "now",
    "today",
    "tomorrow",
    "yesterday",
]
