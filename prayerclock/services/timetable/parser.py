# prayerclock/services/timetable/parser.py
"""
Turns the provider's naive readings ('02 Jun 2025' plus '03:50'-style timings)
into ZonedInstants anchored to the city's timezone.

Everything here is strict: a reading that does not match the expected shape is
rejected, never guessed at or truncated.
"""
import datetime
import re
from typing import Dict, Iterable, Mapping, Optional
from zoneinfo import ZoneInfo

from .errors import MalformedDate, MalformedTiming
from .models import PRAYER_NAMES, TimeTableRecord, ZonedInstant
from .zones import resolve_timezone

# English abbreviations as the provider spells them in 'date.readable'.
MONTH_ABBREVIATIONS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

_DAY_PATTERN = re.compile(r"\d{2}")
_YEAR_PATTERN = re.compile(r"\d{4}")
_TIMING_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


def parse_readable_date(readable_date: str) -> datetime.date:
    """
    Parses 'DD MON YYYY' against the fixed month table.

    Raises:
        MalformedDate: wrong field count, non-numeric day or year, unknown
            month abbreviation, or a calendar date that does not exist.
    """
    if not isinstance(readable_date, str):
        raise MalformedDate(f"Date must be a string, got {type(readable_date).__name__}.")

    parts = readable_date.split(" ")
    if len(parts) != 3:
        raise MalformedDate(f"Date '{readable_date}' does not match 'DD MON YYYY'.")

    day_str, month_str, year_str = parts
    if not _DAY_PATTERN.fullmatch(day_str):
        raise MalformedDate(f"Day '{day_str}' in '{readable_date}' is not a two-digit number.")
    if not _YEAR_PATTERN.fullmatch(year_str):
        raise MalformedDate(f"Year '{year_str}' in '{readable_date}' is not a four-digit number.")

    month = MONTH_ABBREVIATIONS.get(month_str)
    if month is None:
        raise MalformedDate(f"Unknown month abbreviation '{month_str}' in '{readable_date}'.")

    try:
        return datetime.date(int(year_str), month, int(day_str))
    except ValueError as e:
        raise MalformedDate(f"Date '{readable_date}' does not exist: {e}") from e


def parse_timing(event: str, value: str) -> datetime.time:
    """Parses a strict 24-hour 'HH:MM'. Suffixes like ' (BST)' are rejected, not stripped."""
    if not isinstance(value, str):
        raise MalformedTiming(f"Timing for {event} must be a string, got {type(value).__name__}.", field=event)

    match = _TIMING_PATTERN.fullmatch(value)
    if not match:
        raise MalformedTiming(f"Timing for {event} ('{value}') is not a valid 'HH:MM' value.", field=event)
    return datetime.time(int(match.group(1)), int(match.group(2)))


def build_zoned_instant(event: str, date_obj: datetime.date, time_obj: datetime.time, timezone_name: str,
                        zone: Optional[ZoneInfo] = None) -> ZonedInstant:
    """
    Anchors a naive date and time to an IANA zone.

    A reading inside a fall-back fold resolves to its first occurrence; a
    reading inside a spring-forward gap never happened and is rejected.
    `zone` may be passed when the caller has already resolved `timezone_name`.
    """
    if zone is None:
        zone = resolve_timezone(timezone_name)
    local = datetime.datetime.combine(date_obj, time_obj).replace(tzinfo=zone)

    round_trip = local.astimezone(datetime.timezone.utc).astimezone(zone)
    if round_trip.replace(tzinfo=None) != local.replace(tzinfo=None):
        raise MalformedTiming(
            f"Timing for {event} ({time_obj.strftime('%H:%M')} on {date_obj.isoformat()}) "
            f"does not exist in {timezone_name}.",
            field=event,
        )

    return ZonedInstant(event=event, timestamp=local, zone=timezone_name)


def parse_timetable(readable_date: str, timings: Mapping[str, str], timezone_name: str,
                    events: Iterable[str] = PRAYER_NAMES) -> Dict[str, ZonedInstant]:
    """
    Parses one day's timing table into ZonedInstants, keyed and ordered by event.

    The date is checked first, then the zone, then each event in order, so the
    error raised always names the first field that could not be interpreted.
    """
    date_obj = parse_readable_date(readable_date)
    zone = resolve_timezone(timezone_name)

    if timings is None:
        timings = {}

    instants = {}
    for event in events:
        if event not in timings:
            raise MalformedTiming(f"Timing for {event} is missing from the record.", field=event)
        time_obj = parse_timing(event, timings[event])
        instants[event] = build_zoned_instant(event, date_obj, time_obj, timezone_name, zone=zone)
    return instants


def parse_record(record: TimeTableRecord, events: Iterable[str] = PRAYER_NAMES) -> Dict[str, ZonedInstant]:
    return parse_timetable(record.readable_date, record.timings, record.timezone, events=events)
