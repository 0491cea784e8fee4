"""Immutable point-in-time value produced by :meth:`DateBuilder.build`."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from datebuilder.core.time_utils import from_epoch_millis, get_zone, to_epoch_millis
from datebuilder.core.types import EpochMillis, ZoneLike


@dataclass(frozen=True, order=True, slots=True)
class Instant:
    """An absolute point in time, stored as milliseconds since the UNIX epoch.

    Instants carry no zone; calendar fields only exist once the instant is
    resolved through :meth:`to_datetime`. Ordering and equality compare the
    epoch value, so instants built in different zones compare by the moment
    they denote.
    """

    epoch_millis: EpochMillis

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        return cls(to_epoch_millis(dt))

    def to_datetime(self, zone: ZoneLike | None = None) -> datetime:
        """Return an aware datetime for this instant in ``zone`` (UTC by default)."""

        return from_epoch_millis(self.epoch_millis, get_zone(zone))

    def timestamp(self) -> float:
        """Return the instant as float seconds, like :meth:`datetime.timestamp`."""

        return self.epoch_millis / 1000

    def isoformat(self, zone: ZoneLike | None = None) -> str:
        return self.to_datetime(zone).isoformat(timespec="milliseconds")

    def __int__(self) -> int:
        return int(self.epoch_millis)

    def __str__(self) -> str:
        return self.isoformat()
