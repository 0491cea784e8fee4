"""Core primitives shared across all subsystems.

This module aggregates common types, time helpers and error classes. Higher
level modules import from here to avoid circular dependencies.
"""

from . import errors, time_utils, types

__all__ = ["errors", "time_utils", "types"]
