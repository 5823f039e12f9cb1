# prayerclock/routes/api_routes.py
from prayerclock.extensions import limiter
from flask import current_app
from flask_smorest import Blueprint, abort
from typing import Dict, Any
from prometheus_client import generate_latest

from ..schemas import (
    PrayerTimesArgsSchema,
    DualCityArgsSchema,
    ConvertArgsSchema,
    PrayerTimesResponseSchema,
    DualCityResponseSchema,
    ConversionResponseSchema,
    MessageSchema,
)
from ..services.prayer_time_service import (
    get_city_prayer_times,
    get_dual_city_prayer_times,
    convert_reading,
)

api_bp = Blueprint('API', __name__, url_prefix='/api')

# One user-facing message per failure category; the error kind tells them apart.
UPSTREAM_UNAVAILABLE_MESSAGE = "City not found. Please check the spelling or try another city."
TIME_DATA_MESSAGE = "Time data could not be interpreted."


def _abort_for_lookup_error(error) -> None:
    """Maps a failed lookup to an HTTP error. Upstream failures are 404, bad upstream data is 502."""
    if error.kind == "UpstreamUnavailable":
        abort(404, message=UPSTREAM_UNAVAILABLE_MESSAGE, errors=error.to_dict())
    abort(502, message=TIME_DATA_MESSAGE, errors=error.to_dict())


@api_bp.route('/metrics')
def metrics():
    return generate_latest(), 200, {'Content-Type': 'text/plain; version=0.0.4; charset=utf-8'}


@api_bp.route('/prayer-times')
@limiter.limit("60 per minute")
@api_bp.arguments(PrayerTimesArgsSchema, location='query')
@api_bp.response(200, PrayerTimesResponseSchema)
@api_bp.alt_response(404, schema=MessageSchema, description="City not found or the prayer time service is unavailable.")
@api_bp.alt_response(502, schema=MessageSchema, description="The prayer time service returned data that could not be interpreted.")
def prayer_times(args: Dict[str, Any]):
    """
    Get today's prayer times for a city.
    When the city is outside the reference timezone, the response also carries
    the reference zone's clock time at the designated prayer (Fajr by default).
    """
    result = get_city_prayer_times(args['city'], country=args.get('country'), method_id=args.get('method'))
    if not result.ok:
        _abort_for_lookup_error(result.error)

    current_app.logger.info(f"API: Served prayer times for '{result.city}' ({result.times.timezone}).")
    return result


@api_bp.route('/prayer-times/compare')
@limiter.limit("30 per minute")
@api_bp.arguments(DualCityArgsSchema, location='query')
@api_bp.response(200, DualCityResponseSchema)
@api_bp.alt_response(404, schema=MessageSchema, description="One of the cities was not found.")
@api_bp.alt_response(502, schema=MessageSchema, description="The prayer time service returned data that could not be interpreted.")
def compare_prayer_times(args: Dict[str, Any]):
    """
    Get prayer times for two cities, with the first city's designated prayer
    shown on the reference city's clock.
    """
    result = get_dual_city_prayer_times(
        args['city'],
        args['reference_city'],
        country=args.get('country'),
        reference_country=args.get('reference_country'),
        method_id=args.get('method'),
    )
    if not result.ok:
        _abort_for_lookup_error(result.error)
    return result


@api_bp.route('/convert')
@api_bp.arguments(ConvertArgsSchema, location='query')
@api_bp.response(200, ConversionResponseSchema)
@api_bp.alt_response(400, schema=MessageSchema, description="The reading or one of the timezones could not be interpreted.")
def convert(args: Dict[str, Any]):
    """
    Convert a single reading ('02 Jun 2025', '03:50') from one timezone to another.
    """
    result = convert_reading(args['date'], args['time'], args['source_tz'], args['target_tz'], event=args['event'])
    if not result.ok:
        abort(400, message=TIME_DATA_MESSAGE, errors=result.error.to_dict())
    return result
