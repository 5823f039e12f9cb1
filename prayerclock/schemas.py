# prayerclock/schemas.py

from marshmallow import Schema, fields, validate

from .services.timetable.models import PRAYER_NAMES

# --- Query argument schemas ---

class PrayerTimesArgsSchema(Schema):
    city = fields.Str(required=True, validate=validate.Length(min=1))
    country = fields.Str(load_default=None)
    method = fields.Int(load_default=None, validate=validate.Range(min=0, max=99))

class DualCityArgsSchema(PrayerTimesArgsSchema):
    reference_city = fields.Str(required=True, validate=validate.Length(min=1))
    reference_country = fields.Str(load_default=None)

class ConvertArgsSchema(Schema):
    """Raw strings on purpose: the timetable parser is the one that validates them."""
    date = fields.Str(required=True)
    time = fields.Str(required=True)
    source_tz = fields.Str(required=True)
    target_tz = fields.Str(required=True)
    event = fields.Str(load_default="Fajr", validate=validate.OneOf(PRAYER_NAMES))

# --- Response schemas ---

class ProjectedTimeSchema(Schema):
    event = fields.Str()
    timezone = fields.Str(attribute="zone")
    date = fields.Date()
    time = fields.Str(attribute="hhmm")
    display = fields.Str()

class CityTimesSchema(Schema):
    city = fields.Str()
    timezone = fields.Str()
    readableDate = fields.Str(attribute="readable_date")
    date = fields.Date()
    prayerTimes = fields.Dict(keys=fields.Str(), values=fields.Nested(ProjectedTimeSchema), attribute="prayer_times")

class ReferenceTimeSchema(Schema):
    label = fields.Str()
    timezone = fields.Str()
    event = fields.Str()
    source = fields.Nested(ProjectedTimeSchema)
    projected = fields.Nested(ProjectedTimeSchema)
    summary = fields.Str()

class PrayerTimesResponseSchema(Schema):
    city = fields.Str()
    times = fields.Nested(CityTimesSchema)
    reference = fields.Nested(ReferenceTimeSchema, allow_none=True)

class DualCityResponseSchema(Schema):
    city = fields.Str()
    referenceCity = fields.Str(attribute="reference_city")
    source = fields.Nested(CityTimesSchema)
    referenceTimes = fields.Nested(CityTimesSchema, attribute="reference_times")
    reference = fields.Nested(ReferenceTimeSchema)

class ConversionResponseSchema(Schema):
    source = fields.Nested(ProjectedTimeSchema)
    projected = fields.Nested(ProjectedTimeSchema)

class MessageSchema(Schema):
    message = fields.Str(required=True)
