# tests/test_aladhan_adapter.py

import pytest
import requests
from unittest.mock import MagicMock

from prayerclock.services.api_adapters.aladhan_adapter import AlAdhanAdapter, get_selected_api_adapter
from prayerclock.services.timetable.models import TimeTableRecord

ALADHAN_PAYLOAD = {
    "code": 200,
    "status": "OK",
    "data": {
        "timings": {
            "Fajr": "03:50", "Sunrise": "04:44", "Dhuhr": "13:00", "Asr": "17:21",
            "Sunset": "21:13", "Maghrib": "21:13", "Isha": "22:08", "Imsak": "03:40",
        },
        "date": {
            "readable": "02 Jun 2025",
            "timestamp": "1748847600",
            "gregorian": {"date": "02-06-2025"},
        },
        "meta": {"timezone": "Europe/London", "method": {"id": 2}},
    },
}


def _mock_response(payload, http_error=None):
    response = MagicMock()
    response.json.return_value = payload
    if http_error:
        response.raise_for_status.side_effect = http_error
    return response


@pytest.fixture
def adapter():
    return AlAdhanAdapter(base_url="https://api.aladhan.test/v1/", timeout=5)


def test_fetch_timings_by_city_success(app_context, adapter, mocker):
    mock_get = mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                            return_value=_mock_response(ALADHAN_PAYLOAD))

    record = adapter.fetch_timings_by_city("London", method_id=2)

    assert isinstance(record, TimeTableRecord)
    assert record.readable_date == "02 Jun 2025"
    assert record.timezone == "Europe/London"
    assert record.timings["Fajr"] == "03:50"
    assert record.city == "London"
    mock_get.assert_called_once_with(
        "https://api.aladhan.test/v1/timingsByCity",
        params={"city": "London", "country": "", "method": 2},
        timeout=5,
    )


def test_fetch_timings_by_city_passes_country_and_omits_missing_method(app_context, adapter, mocker):
    mock_get = mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                            return_value=_mock_response(ALADHAN_PAYLOAD))

    adapter.fetch_timings_by_city("London", country="United Kingdom")

    assert mock_get.call_args.kwargs["params"] == {"city": "London", "country": "United Kingdom"}


def test_fetch_timings_by_city_keeps_timings_untouched(app_context, adapter, mocker):
    """Suffixed values are passed through; rejecting them is the parser's job."""
    payload = {"code": 200, "data": dict(ALADHAN_PAYLOAD["data"], timings={"Fajr": "03:50 (BST)"})}
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                 return_value=_mock_response(payload))

    record = adapter.fetch_timings_by_city("London")

    assert record.timings == {"Fajr": "03:50 (BST)"}


def test_fetch_timings_by_city_timeout_returns_none(app_context, adapter, mocker):
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                 side_effect=requests.exceptions.Timeout())
    assert adapter.fetch_timings_by_city("London") is None


def test_fetch_timings_by_city_http_error_returns_none(app_context, adapter, mocker):
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                 return_value=_mock_response({}, http_error=requests.exceptions.HTTPError("400 Bad Request")))
    assert adapter.fetch_timings_by_city("Atlantis") is None


def test_fetch_timings_by_city_api_error_code_returns_none(app_context, adapter, mocker):
    payload = {"code": 400, "status": "BAD_REQUEST", "data": "Unable to find city."}
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                 return_value=_mock_response(payload))
    assert adapter.fetch_timings_by_city("Atlantis") is None


@pytest.mark.parametrize("missing", ["date", "meta", "timings"])
def test_fetch_timings_by_city_incomplete_payload_returns_none(app_context, adapter, mocker, missing):
    data = {k: v for k, v in ALADHAN_PAYLOAD["data"].items() if k != missing}
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                 return_value=_mock_response({"code": 200, "data": data}))
    assert adapter.fetch_timings_by_city("London") is None


@pytest.mark.parametrize("field, value", [
    ("date", "02 Jun 2025"),
    ("meta", "Europe/London"),
    ("date", ["02 Jun 2025"]),
    ("timings", ["03:50"]),
])
def test_fetch_timings_by_city_wrongly_shaped_payload_returns_none(app_context, adapter, mocker, field, value):
    data = dict(ALADHAN_PAYLOAD["data"], **{field: value})
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                 return_value=_mock_response({"code": 200, "data": data}))
    assert adapter.fetch_timings_by_city("London") is None


@pytest.mark.parametrize("body", [[ALADHAN_PAYLOAD], "OK", None, 200])
def test_fetch_timings_by_city_non_object_body_returns_none(app_context, adapter, mocker, body):
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get',
                 return_value=_mock_response(body))
    assert adapter.fetch_timings_by_city("London") is None


def test_fetch_timings_by_city_invalid_json_returns_none(app_context, adapter, mocker):
    response = MagicMock()
    response.json.side_effect = ValueError("No JSON object could be decoded")
    mocker.patch('prayerclock.services.api_adapters.aladhan_adapter.requests.get', return_value=response)
    assert adapter.fetch_timings_by_city("London") is None


def test_get_selected_api_adapter_uses_config(app_context):
    adapter = get_selected_api_adapter()
    assert isinstance(adapter, AlAdhanAdapter)
    assert adapter.base_url == "https://api.aladhan.test/v1"


def test_get_selected_api_adapter_unsupported_name(app_context, monkeypatch):
    monkeypatch.setitem(app_context.config, 'PRAYER_API_ADAPTER', "MuslimSalatAdapter")
    assert get_selected_api_adapter() is None


def test_get_selected_api_adapter_missing_base_url(app_context, monkeypatch):
    monkeypatch.setitem(app_context.config, 'PRAYER_API_BASE_URL', None)
    assert get_selected_api_adapter() is None
