# tests/conftest.py

import pytest
from unittest.mock import MagicMock

from prayerclock import create_app
from prayerclock.services.timetable.models import TimeTableRecord


@pytest.fixture(scope='session')
def app():
    """Session-wide application for testing."""
    app = create_app('testing')
    return app


@pytest.fixture(scope='function')
def test_client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture(scope='function')
def app_context(app):
    with app.app_context():
        yield app


def make_record(city="London", timezone="Europe/London", readable_date="02 Jun 2025", **overrides):
    """Builds a TimeTableRecord shaped like an AlAdhan timingsByCity reading."""
    timings = {
        "Fajr": "03:50", "Sunrise": "04:44", "Dhuhr": "13:00",
        "Asr": "17:21", "Sunset": "21:13", "Maghrib": "21:13",
        "Isha": "22:08", "Imsak": "03:40", "Midnight": "01:00",
    }
    timings.update(overrides)
    return TimeTableRecord(readable_date=readable_date, timings=timings, timezone=timezone, city=city)


@pytest.fixture
def london_record():
    return make_record()


@pytest.fixture
def karachi_record():
    return make_record(
        city="Karachi", timezone="Asia/Karachi",
        Fajr="04:12", Dhuhr="12:32", Asr="17:08", Maghrib="19:21", Isha="20:45",
    )


@pytest.fixture
def mock_adapter(mocker):
    """
    Replaces the configured upstream adapter with a MagicMock.
    Tests set `fetch_timings_by_city.return_value` or `.side_effect` on it.
    """
    adapter = MagicMock()
    mocker.patch('prayerclock.services.prayer_time_service.get_selected_api_adapter', return_value=adapter)
    return adapter
