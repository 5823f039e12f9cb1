# prayerclock/services/timetable/models.py

import datetime
from dataclasses import dataclass
from typing import Dict, Optional

PRAYER_NAMES = ("Fajr", "Dhuhr", "Asr", "Maghrib", "Isha")


@dataclass(frozen=True)
class TimeTableRecord:
    """One day's raw timing table exactly as the upstream provider reported it."""
    readable_date: str
    timings: Dict[str, str]
    timezone: str
    city: Optional[str] = None


@dataclass(frozen=True)
class ZonedInstant:
    """
    An unambiguous point in time for a named event.

    `timestamp` is always an aware UTC datetime; `zone` only records where the
    reading came from and is used to render the wall clock back.
    """
    event: str
    timestamp: datetime.datetime
    zone: str

    def __post_init__(self):
        if self.timestamp.tzinfo is None:
            raise ValueError("ZonedInstant requires a timezone-aware timestamp.")
        object.__setattr__(self, "timestamp", self.timestamp.astimezone(datetime.timezone.utc))


@dataclass(frozen=True)
class ProjectedTime:
    """A ZonedInstant re-expressed as wall-clock time in a target zone."""
    event: str
    zone: str
    date: datetime.date
    hour: int
    minute: int
    display: str
    instant: ZonedInstant

    @property
    def hhmm(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def as_instant(self) -> ZonedInstant:
        """The same instant, now anchored to the projected zone."""
        return ZonedInstant(event=self.event, timestamp=self.instant.timestamp, zone=self.zone)
