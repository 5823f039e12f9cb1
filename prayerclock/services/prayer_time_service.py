"""
Prayer time service: the boundary between the upstream adapter, the timetable
core and the HTTP layer.

The core raises typed TimeDataError exceptions; this module catches them and
returns them inside result objects, so the routes only ever see structured
outcomes and decide the user-facing message themselves.
"""
import datetime
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Optional

from flask import current_app

from .api_adapters.aladhan_adapter import get_selected_api_adapter
from .timetable.errors import TimeDataError, UpstreamUnavailable
from .timetable.models import ProjectedTime, TimeTableRecord
from .timetable.parser import parse_record, parse_timetable
from .timetable.projector import localize, project
from ..metrics import TIME_LOOKUPS_TOTAL, TIME_PROJECTIONS_TOTAL


@dataclass
class CityTimes:
    """All five prayers for one city, formatted in the city's own zone."""
    city: str
    timezone: str
    readable_date: str
    date: datetime.date
    prayer_times: Dict[str, ProjectedTime] = field(default_factory=dict)


@dataclass
class ReferenceTime:
    """The designated prayer of a city, shown on the reference zone's clock."""
    label: str
    timezone: str
    event: str
    source: ProjectedTime
    projected: ProjectedTime
    summary: str


@dataclass
class PrayerTimesResult:
    city: str
    times: Optional[CityTimes] = None
    reference: Optional[ReferenceTime] = None
    error: Optional[TimeDataError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DualCityResult:
    city: str
    reference_city: str
    source: Optional[CityTimes] = None
    reference_times: Optional[CityTimes] = None
    reference: Optional[ReferenceTime] = None
    error: Optional[TimeDataError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ConversionResult:
    source: Optional[ProjectedTime] = None
    projected: Optional[ProjectedTime] = None
    error: Optional[TimeDataError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# --- Building blocks ---

def fetch_timetable_record(city: str, country: Optional[str] = None, method_id: Optional[int] = None, field_name: str = "city") -> TimeTableRecord:
    """
    Fetches one city's raw timing table through the configured adapter.
    Raises UpstreamUnavailable when the adapter is missing or returns nothing.
    """
    adapter = get_selected_api_adapter()
    if not adapter:
        raise UpstreamUnavailable("No prayer time adapter is configured.", field=field_name)

    record = adapter.fetch_timings_by_city(city, country=country, method_id=method_id)
    if not record:
        raise UpstreamUnavailable(f"City '{city}' not found or prayer time data unavailable.", field=field_name)
    return record


def build_city_times(record: TimeTableRecord) -> CityTimes:
    """Parses a record and formats every prayer on the city's own clock."""
    instants = parse_record(record)
    prayer_times = {event: localize(instant) for event, instant in instants.items()}
    # Every reading was anchored to the record's date, so any of them carries it.
    return CityTimes(
        city=record.city,
        timezone=record.timezone,
        readable_date=record.readable_date,
        date=next(iter(prayer_times.values())).date,
        prayer_times=prayer_times,
    )


def build_reference_time(times: CityTimes, target_timezone: str, label: str, event: str) -> ReferenceTime:
    source = times.prayer_times[event]
    projected = project(source.instant, target_timezone)
    TIME_PROJECTIONS_TOTAL.labels(target_timezone=target_timezone).inc()
    return ReferenceTime(
        label=label,
        timezone=target_timezone,
        event=event,
        source=source,
        projected=projected,
        summary=f"When it is {source.display} in {times.city}, it is {projected.display} in {label}.",
    )


def _resolve_method_id(method_id: Optional[int]) -> int:
    if method_id is None:
        return int(current_app.config.get('DEFAULT_CALCULATION_METHOD_ID', 2))
    return method_id


# --- Main Service Functions ---

def get_city_prayer_times(city: str, country: Optional[str] = None, method_id: Optional[int] = None, reference_timezone: Optional[str] = None) -> PrayerTimesResult:
    """
    Looks up a city's prayer times and, when the city is outside the reference
    zone, the reference zone's clock time at the designated prayer.
    """
    reference_timezone = reference_timezone or current_app.config['REFERENCE_TIMEZONE']
    label = current_app.config.get('REFERENCE_LABEL') or reference_timezone
    designated = current_app.config.get('DESIGNATED_PRAYER', 'Fajr')
    result = PrayerTimesResult(city=city)

    try:
        record = fetch_timetable_record(city, country=country, method_id=_resolve_method_id(method_id))
        result.times = build_city_times(record)

        if result.times.timezone != reference_timezone:
            result.reference = build_reference_time(result.times, reference_timezone, label, designated)
        else:
            current_app.logger.debug(f"Service: '{city}' is already in {reference_timezone}; no reference projection needed.")

    except TimeDataError as e:
        current_app.logger.warning(f"Service: Prayer time lookup for '{city}' failed with {e.kind} ({e.field}): {e.message}")
        result.times = None
        result.reference = None
        result.error = e

    TIME_LOOKUPS_TOTAL.labels(lookup='city', outcome=result.error.kind if result.error else 'success').inc()
    return result


def get_dual_city_prayer_times(city: str, reference_city: str, country: Optional[str] = None, reference_country: Optional[str] = None, method_id: Optional[int] = None) -> DualCityResult:
    """
    Looks up two cities and shows the designated prayer of the first city on
    the second city's clock. The two upstream fetches are independent and run
    in parallel; both must finish before anything is combined.
    """
    designated = current_app.config.get('DESIGNATED_PRAYER', 'Fajr')
    method_id = _resolve_method_id(method_id)
    result = DualCityResult(city=city, reference_city=reference_city)

    app = current_app._get_current_object()

    def _fetch_in_context(name, name_country, field_name):
        with app.app_context():
            return fetch_timetable_record(name, country=name_country, method_id=method_id, field_name=field_name)

    try:
        with ThreadPoolExecutor(max_workers=app.config.get('UPSTREAM_MAX_WORKERS', 2)) as executor:
            source_future = executor.submit(_fetch_in_context, city, country, "city")
            reference_future = executor.submit(_fetch_in_context, reference_city, reference_country, "reference_city")
            source_record = source_future.result()
            reference_record = reference_future.result()

        result.source = build_city_times(source_record)
        result.reference_times = build_city_times(reference_record)
        result.reference = build_reference_time(result.source, result.reference_times.timezone, reference_city, designated)

    except TimeDataError as e:
        current_app.logger.warning(f"Service: Dual lookup '{city}' -> '{reference_city}' failed with {e.kind} ({e.field}): {e.message}")
        result.source = None
        result.reference_times = None
        result.reference = None
        result.error = e

    TIME_LOOKUPS_TOTAL.labels(lookup='dual_city', outcome=result.error.kind if result.error else 'success').inc()
    return result


def convert_reading(readable_date: str, time_str: str, source_timezone: str, target_timezone: str, event: str = "Fajr") -> ConversionResult:
    """Interprets one reading in `source_timezone` and shows it on `target_timezone`'s clock."""
    result = ConversionResult()
    try:
        instants = parse_timetable(readable_date, {event: time_str}, source_timezone, events=(event,))
        instant = instants[event]
        result.source = localize(instant)
        result.projected = project(instant, target_timezone)
        TIME_PROJECTIONS_TOTAL.labels(target_timezone=target_timezone).inc()
    except TimeDataError as e:
        current_app.logger.info(f"Service: Conversion of '{readable_date} {time_str}' failed with {e.kind} ({e.field}).")
        result.source = None
        result.error = e

    TIME_LOOKUPS_TOTAL.labels(lookup='convert', outcome=result.error.kind if result.error else 'success').inc()
    return result
