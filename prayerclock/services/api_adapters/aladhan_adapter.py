# prayerclock/services/api_adapters/aladhan_adapter.py

import requests
from flask import current_app # To access app.logger and app.config
from typing import Optional

from .base_adapter import BasePrayerAdapter
from ..timetable.models import TimeTableRecord
from ...metrics import API_REQUESTS_TOTAL, API_REQUEST_DURATION_SECONDS


class AlAdhanAdapter(BasePrayerAdapter):
    """
    API Adapter for AlAdhan.com Prayer Times API.
    Returns the provider's readings untouched; interpreting them is the parser's job.
    """

    def fetch_timings_by_city(self, city: str, country: Optional[str] = None, method_id: Optional[int] = None) -> Optional[TimeTableRecord]:
        """
        Fetches today's prayer times for a city from the AlAdhan.com API.
        """
        current_app.logger.info(f"AlAdhanAdapter: Fetching timings for city '{city}' (country: '{country or ''}')")

        endpoint = f"{self.base_url}/timingsByCity"
        params = {
            "city": city,
            "country": country or "",
        }
        if method_id is not None:
            params["method"] = method_id

        current_app.logger.debug(f"AlAdhanAdapter: Fetching timingsByCity with params: {params}")

        status = "failure"
        try:
            with API_REQUEST_DURATION_SECONDS.labels(adapter_name='AlAdhanAdapter', endpoint='timingsByCity').time():
                response = requests.get(endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            if not isinstance(data, dict):
                current_app.logger.error(f"AlAdhanAdapter: Unexpected response body for city '{city}': {type(data).__name__}")
                return None

            if data.get("code") != 200 or not isinstance(data.get("data"), dict):
                current_app.logger.error(f"AlAdhanAdapter: API error for city '{city}'. Code: {data.get('code')}, Status: {data.get('status')}")
                return None

            raw_data = data["data"]
            date_info = raw_data.get("date")
            meta = raw_data.get("meta")
            if not isinstance(date_info, dict) or not isinstance(meta, dict):
                current_app.logger.error(f"AlAdhanAdapter: Incomplete payload for city '{city}'. date: {date_info!r}, meta: {meta!r}")
                return None

            readable_date = date_info.get("readable")
            timings = raw_data.get("timings")
            timezone = meta.get("timezone")

            if not readable_date or not isinstance(timings, dict) or not timezone:
                current_app.logger.error(f"AlAdhanAdapter: Incomplete payload for city '{city}'. date: {readable_date!r}, timezone: {timezone!r}")
                return None

            status = "success"
            current_app.logger.info(f"AlAdhanAdapter: Successfully fetched timings for '{city}' ({timezone}, {readable_date}).")
            return TimeTableRecord(
                readable_date=readable_date,
                timings=dict(timings),
                timezone=timezone,
                city=city,
            )

        except requests.exceptions.Timeout:
            current_app.logger.error(f"AlAdhanAdapter: Timeout error fetching prayer times for city '{city}'.")
            return None
        except requests.exceptions.RequestException as e:
            current_app.logger.error(f"AlAdhanAdapter: RequestException for city '{city}': {e}", exc_info=True)
            return None
        except ValueError as e:
            current_app.logger.error(f"AlAdhanAdapter: Invalid JSON for city '{city}': {e}", exc_info=True)
            return None
        finally:
            API_REQUESTS_TOTAL.labels(adapter_name='AlAdhanAdapter', endpoint='timingsByCity', status=status).inc()


def get_selected_api_adapter():
    """
    Instantiates and returns the API adapter based on configuration.
    """
    adapter_name = current_app.config.get('PRAYER_API_ADAPTER', "AlAdhanAdapter")
    base_url = current_app.config.get('PRAYER_API_BASE_URL')
    api_key = current_app.config.get('PRAYER_API_KEY')
    timeout = current_app.config.get('PRAYER_API_TIMEOUT', 10)

    if adapter_name == "AlAdhanAdapter":
        if not base_url:
            current_app.logger.error("AlAdhan API base URL is not configured.")
            return None
        return AlAdhanAdapter(base_url=base_url, api_key=api_key, timeout=timeout)
    else:
        current_app.logger.error(f"Unsupported Prayer API Adapter: {adapter_name}")
        return None
