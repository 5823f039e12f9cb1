# prayerclock/services/timetable/projector.py

from .models import ProjectedTime, ZonedInstant
from .zones import resolve_timezone


def format_time_12h(hour: int, minute: int) -> str:
    """Formats wall-clock fields as '5:42 AM': no leading zero on the hour."""
    suffix = "AM" if hour < 12 else "PM"
    hour_12 = hour % 12 or 12
    return f"{hour_12}:{minute:02d} {suffix}"


def project(instant: ZonedInstant, target_timezone: str) -> ProjectedTime:
    """
    Re-expresses an instant as wall-clock time in `target_timezone`.

    The offset comes from the instant's own UTC timestamp, so the DST rules of
    the event's date apply, not those in force when this is called. Projecting
    into the instant's own zone is an identity projection.

    Raises:
        UnknownTimezone: the target zone cannot be resolved.
    """
    zone = resolve_timezone(target_timezone, field="target_timezone")
    local = instant.timestamp.astimezone(zone)
    return ProjectedTime(
        event=instant.event,
        zone=target_timezone,
        date=local.date(),
        hour=local.hour,
        minute=local.minute,
        display=format_time_12h(local.hour, local.minute),
        instant=instant,
    )


def localize(instant: ZonedInstant) -> ProjectedTime:
    """Identity projection: the instant's wall clock in the zone it was read in."""
    return project(instant, instant.zone)
