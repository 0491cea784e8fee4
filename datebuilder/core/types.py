"""Shared type aliases for readability and contract enforcement."""
from __future__ import annotations

from datetime import tzinfo
from typing import NewType, TypeAlias, Union

EpochMillis = NewType("EpochMillis", int)

ZoneLike: TypeAlias = Union[str, tzinfo]
