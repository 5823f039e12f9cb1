# prayerclock/services/timetable/zones.py

import re
import zoneinfo
from zoneinfo import ZoneInfo

from .errors import UnknownTimezone

# Area/Location[/Sublocation], plus single-segment names such as 'UTC' or 'EST5EDT'.
_IANA_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_+\-]*(/[A-Za-z0-9_+\-]+)*")


def is_valid_timezone_name(name) -> bool:
    """Syntactic check only; says nothing about the local timezone database."""
    return isinstance(name, str) and _IANA_NAME_PATTERN.fullmatch(name) is not None


def resolve_timezone(name: str, field: str = "timezone") -> ZoneInfo:
    """
    Resolves an IANA identifier to a ZoneInfo.
    Raises UnknownTimezone instead of ever falling back to another zone.
    """
    if not is_valid_timezone_name(name):
        raise UnknownTimezone(f"'{name}' is not a valid IANA timezone identifier.", field=field)
    try:
        return ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError, OSError) as e:
        # Area names such as "America" are directories in the tz database.
        raise UnknownTimezone(f"Timezone '{name}' could not be resolved: {e}", field=field) from e
