# prayerclock/services/timetable/errors.py

class TimeDataError(Exception):
    """
    Base class for every failure while interpreting prayer time data.
    Each error carries a machine-readable `kind` and the `field` that could
    not be interpreted, so callers can decide the user-visible message.
    """
    kind = "TimeDataError"

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        return {"kind": self.kind, "field": self.field, "message": self.message}


class MalformedDate(TimeDataError):
    """The readable date does not match 'DD MON YYYY' or names an unknown month."""
    kind = "MalformedDate"

    def __init__(self, message, field="date"):
        super().__init__(message, field)


class MalformedTiming(TimeDataError):
    """A named timing is missing, is not 'HH:MM', or names a non-existent local time."""
    kind = "MalformedTiming"


class UnknownTimezone(TimeDataError):
    """The source or target timezone identifier cannot be resolved."""
    kind = "UnknownTimezone"

    def __init__(self, message, field="timezone"):
        super().__init__(message, field)


class UpstreamUnavailable(TimeDataError):
    """The upstream provider failed or returned no usable record."""
    kind = "UpstreamUnavailable"

    def __init__(self, message, field="city"):
        super().__init__(message, field)
