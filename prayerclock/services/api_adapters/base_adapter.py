# This module defines the base interface for all prayer time API adapters.
from abc import ABC, abstractmethod


class BasePrayerAdapter(ABC):
    """
    Abstract base class for prayer time API adapters. It ensures that all adapters
    return a TimeTableRecord holding the provider's raw, unparsed readings.
    """

    def __init__(self, base_url, api_key=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout

    @abstractmethod
    def fetch_timings_by_city(self, city, country=None, method_id=None):
        """Fetches today's timing table for a city. Returns a TimeTableRecord or None."""
        pass
