"""Fluent builder for calendar date/time values.

All dates are built in UTC unless another zone is passed explicitly, either
per call (``zone=...`` on the factories and the constructor) or later through
:meth:`DateBuilder.in_time_zone`. Loaded settings are applied by passing
``zone=settings.default_timezone``.

Examples::

    from datebuilder import now, today, tomorrow, yesterday, mm_dd_yyyy

    midnight_in_2009 = now().in_year(2009).at_midnight_exactly().build()
    birthday = mm_dd_yyyy("08_29_1974").build()
    same_birthday = now().in_year(1974).in_month(8).on_day(29).build()

A builder holds one mutable value and is not safe for concurrent mutation
from several threads.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable, NoReturn, Optional, Protocol, TypeVar

from datebuilder.core.errors import InvalidArgumentError
from datebuilder.core.time_utils import (
    clamp_day,
    days_in_month,
    from_epoch_millis,
    get_zone,
    now_utc,
    resolve_local,
    to_epoch_millis,
    truncate_to_millis,
)
from datebuilder.core.types import ZoneLike
from datebuilder.instant import Instant

LOGGER = logging.getLogger(__name__)

T_co = TypeVar("T_co", covariant=True)

Clock = Callable[[], datetime]

# MM_dd_yyyy: zero-padded month and day, four-digit year.
_MM_DD_YYYY = re.compile(r"([0-9]{2})_([0-9]{2})_([0-9]{4})")


class Builder(Protocol[T_co]):
    """Anything that produces a finished value from accumulated state."""

    def build(self) -> T_co:
        ...


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an int, got {type(value).__name__}")
    return value


class DateBuilder:
    """Accumulates date/time adjustments and produces an :class:`Instant`.

    Every mutation returns the builder itself so calls can be chained, and is
    applied strictly in call order. A mutation that fails raises
    :class:`InvalidArgumentError` and leaves the held value untouched.

    Day and year arithmetic works on wall-clock fields of the active zone and
    keeps the current UTC offset whenever the new wall time allows it; hour
    and minute arithmetic works on elapsed time. Setting a year or month
    whose target month is shorter than the current day clamps the day to the
    month's last day (Feb 29 -> Feb 28).
    """

    def __init__(self, epoch_millis: int, zone: ZoneLike | None = None) -> None:
        _require_int(epoch_millis, "epoch_millis")
        self._zone: tzinfo = get_zone(zone)
        try:
            self._value = from_epoch_millis(epoch_millis, self._zone)
        except (ValueError, OverflowError) as exc:
            raise InvalidArgumentError(f"epoch_millis out of range: {epoch_millis}") from exc
        LOGGER.debug("Builder created", extra={"epoch_millis": epoch_millis, "zone": str(self._zone)})

    @classmethod
    def from_datetime(cls, dt: datetime, zone: ZoneLike | None = None) -> "DateBuilder":
        """Start from an aware datetime, in ``zone`` or else in ``dt``'s own zone."""

        if not isinstance(dt, datetime) or dt.tzinfo is None or dt.utcoffset() is None:
            raise InvalidArgumentError("DateBuilder needs a timezone-aware datetime")
        return cls(to_epoch_millis(truncate_to_millis(dt)), zone if zone is not None else dt.tzinfo)

    @property
    def zone(self) -> tzinfo:
        return self._zone

    def peek(self) -> datetime:
        """Return the held value as an aware datetime in the active zone."""

        return self._value

    # Field resets and setters ------------------------------------------
    def at_midnight_exactly(self) -> "DateBuilder":
        """Zero the hour, minute, second and millisecond fields."""

        return self._apply(
            "at_midnight_exactly",
            lambda: self._resolve(self._value.replace(hour=0, minute=0, second=0, microsecond=0)),
        )

    def in_year(self, year: int) -> "DateBuilder":
        _require_int(year, "year")
        return self._apply("in_year", lambda: self._with_fields(year=year))

    def in_month(self, month: int) -> "DateBuilder":
        """Set the month, one-based (1=January ... 12=December)."""

        _require_int(month, "month")
        if not 1 <= month <= 12:
            self._reject("in_month", f"month must be within 1..12, got {month}")
        return self._apply("in_month", lambda: self._with_fields(month=month))

    def on_day(self, day: int) -> "DateBuilder":
        """Set the day of the month; days past the end of the month are rejected."""

        _require_int(day, "day")
        last_day = days_in_month(self._value.year, self._value.month)
        if not 1 <= day <= last_day:
            self._reject(
                "on_day",
                f"day must be within 1..{last_day} for {self._value.year}-{self._value.month:02d}, got {day}",
            )
        return self._apply("on_day", lambda: self._with_fields(day=day))

    # Relative arithmetic -----------------------------------------------
    def add_days(self, days: int) -> "DateBuilder":
        _require_int(days, "days")
        return self._apply("add_days", lambda: self._resolve(self._value + timedelta(days=days)))

    def subtract_days(self, days: int) -> "DateBuilder":
        _require_int(days, "days")
        return self.add_days(-days)

    def add_years(self, years: int) -> "DateBuilder":
        _require_int(years, "years")
        return self._apply("add_years", lambda: self._with_fields(year=self._value.year + years))

    def add_hours(self, hours: int) -> "DateBuilder":
        _require_int(hours, "hours")
        return self._apply("add_hours", lambda: self._shift_elapsed(timedelta(hours=hours)))

    def subtract_minutes(self, minutes: int) -> "DateBuilder":
        _require_int(minutes, "minutes")
        return self._apply("subtract_minutes", lambda: self._shift_elapsed(timedelta(minutes=-minutes)))

    # Zone ----------------------------------------------------------------
    def in_time_zone(self, zone: ZoneLike) -> "DateBuilder":
        """Re-base subsequent field operations on ``zone``, keeping the instant."""

        new_zone = get_zone(zone)
        self._apply("in_time_zone", lambda: self._value.astimezone(new_zone))
        LOGGER.debug("Builder zone changed", extra={"from_zone": str(self._zone), "to_zone": str(new_zone)})
        self._zone = new_zone
        return self

    def build(self) -> Instant:
        return Instant(to_epoch_millis(self._value))

    # Internals -----------------------------------------------------------
    def _apply(self, operation: str, compute: Callable[[], datetime]) -> "DateBuilder":
        try:
            value = compute()
        except InvalidArgumentError:
            raise
        except (ValueError, OverflowError) as exc:
            self._reject(operation, f"{operation} produced an unsupported date: {exc}", exc)
        self._value = value
        return self

    def _reject(self, operation: str, message: str, cause: Exception | None = None) -> NoReturn:
        LOGGER.debug(
            "Rejected builder operation",
            extra={"operation": operation, "value": self._value.isoformat(), "error": message},
        )
        raise InvalidArgumentError(message) from cause

    def _resolve(self, local: datetime) -> datetime:
        return resolve_local(local, prefer_offset=self._value.utcoffset())

    def _with_fields(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        day: Optional[int] = None,
    ) -> datetime:
        target_year = self._value.year if year is None else year
        target_month = self._value.month if month is None else month
        target_day = clamp_day(target_year, target_month, self._value.day if day is None else day)
        return self._resolve(self._value.replace(year=target_year, month=target_month, day=target_day))

    def _shift_elapsed(self, delta: timedelta) -> datetime:
        return (self._value.astimezone(timezone.utc) + delta).astimezone(self._zone)

    def __repr__(self) -> str:
        return f"DateBuilder({self._value.isoformat(timespec='milliseconds')}, zone={self._zone})"


def _start(zone: ZoneLike | None, clock: Clock | None) -> DateBuilder:
    reading = (clock or now_utc)()
    return DateBuilder.from_datetime(reading, zone=get_zone(zone))


def now(*, zone: ZoneLike | None = None, clock: Clock | None = None) -> DateBuilder:
    """Builder starting at the current time."""

    return _start(zone, clock)


def today(*, zone: ZoneLike | None = None, clock: Clock | None = None) -> DateBuilder:
    """Builder starting at the current date at midnight exactly."""

    return _start(zone, clock).at_midnight_exactly()


def yesterday(*, zone: ZoneLike | None = None, clock: Clock | None = None) -> DateBuilder:
    """Builder starting at yesterday's date at the current time."""

    return _start(zone, clock).subtract_days(1)


def tomorrow(*, zone: ZoneLike | None = None, clock: Clock | None = None) -> DateBuilder:
    """Builder starting at tomorrow's date at the current time."""

    return _start(zone, clock).add_days(1)


def from_formatted_string(date: str, *, zone: ZoneLike | None = None) -> DateBuilder:
    """Builder at midnight of the date given as ``MM_dd_yyyy`` (e.g. ``"08_29_1974"``).

    Raises :class:`InvalidArgumentError` when ``date`` does not have that
    shape, names a day that does not exist, or falls outside the supported
    range once resolved in ``zone``.
    """

    if not isinstance(date, str):
        raise InvalidArgumentError(f"Expected a MM_dd_yyyy string, got {type(date).__name__}")
    match = _MM_DD_YYYY.fullmatch(date)
    if match is None:
        LOGGER.debug("Rejected date string", extra={"value": date})
        raise InvalidArgumentError(f"Expected a date formatted as MM_dd_yyyy, got {date!r}")
    month, day, year = (int(part) for part in match.groups())
    target_zone = get_zone(zone)
    try:
        local_midnight = datetime(year, month, day, tzinfo=target_zone)
    except ValueError as exc:
        LOGGER.debug("Rejected date string", extra={"value": date, "error": str(exc)})
        raise InvalidArgumentError(f"{date!r} is not a valid calendar date") from exc
    try:
        local_midnight = resolve_local(local_midnight)
    except (ValueError, OverflowError) as exc:
        LOGGER.debug("Rejected date string", extra={"value": date, "zone": str(target_zone), "error": str(exc)})
        raise InvalidArgumentError(f"{date!r} is outside the supported range in {target_zone}") from exc
    return DateBuilder.from_datetime(local_midnight)


mm_dd_yyyy = from_formatted_string


__all__ = [
    "Builder",
    "Clock",
    "DateBuilder",
    "from_formatted_string",
    "mm_dd_yyyy",
    "now",
    "today",
    "tomorrow",
    "yesterday",
]
