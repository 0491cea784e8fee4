"""Utilities for dealing with timezones, epoch values and calendar fields.

The builder keeps its value as an aware datetime in the active zone. The
helpers below are the single source of truth for resolving zones, converting
between aware datetimes and epoch milliseconds, and for the day-of-month
clamping rule used by the year and month setters.
"""
from __future__ import annotations

from calendar import monthrange
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidArgumentError
from .types import EpochMillis, ZoneLike

DEFAULT_TZ_NAME = "UTC"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)


def get_zone(zone: ZoneLike | None = None) -> tzinfo:
    """Return the tzinfo for a zone name or pass a tzinfo through unchanged.

    Only ``None`` falls back to UTC; an empty name is rejected like any other
    unknown zone.
    """

    if isinstance(zone, tzinfo):
        return zone
    target_name = DEFAULT_TZ_NAME if zone is None else zone
    if not isinstance(target_name, str):
        raise InvalidArgumentError(f"Zone must be a name or tzinfo, got {type(zone).__name__}")
    if not target_name:
        raise InvalidArgumentError("Zone name must not be empty")
    try:
        return ZoneInfo(target_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidArgumentError(f"Unknown time zone: {target_name!r}") from exc


def now_utc() -> datetime:
    """Return the current UTC datetime with tzinfo."""

    return datetime.now(timezone.utc)


def truncate_to_millis(dt: datetime) -> datetime:
    """Drop the sub-millisecond part of ``dt``."""

    return dt.replace(microsecond=dt.microsecond - dt.microsecond % 1000)


def to_epoch_millis(dt: datetime) -> EpochMillis:
    """Convert an aware datetime to whole milliseconds since the UNIX epoch."""

    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("Datetime must be timezone-aware before conversion")
    return EpochMillis((dt - EPOCH) // _ONE_MILLISECOND)


def from_epoch_millis(epoch_millis: int, zone: tzinfo) -> datetime:
    """Resolve epoch milliseconds into an aware datetime in ``zone``."""

    return (EPOCH + timedelta(milliseconds=epoch_millis)).astimezone(zone)


def resolve_local(dt: datetime, prefer_offset: timedelta | None = None) -> datetime:
    """Normalize a wall-clock datetime to a real instant in its own zone.

    Wall times inside a DST gap come back shifted forward by the gap length.
    An ambiguous wall time keeps ``prefer_offset`` when that offset is one of
    its two readings, and otherwise resolves to the first occurrence
    (``fold=0``).
    """

    wall = dt.replace(tzinfo=None)
    if prefer_offset is not None:
        for fold in (0, 1):
            candidate = dt.replace(fold=fold).astimezone(timezone.utc).astimezone(dt.tzinfo)
            if candidate.utcoffset() == prefer_offset and candidate.replace(tzinfo=None) == wall:
                return candidate
    return dt.replace(fold=0).astimezone(timezone.utc).astimezone(dt.tzinfo)


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp ``day`` to the last valid day of ``year``-``month``."""

    return min(day, days_in_month(year, month))
