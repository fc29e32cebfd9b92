"""WeatherAPI.com forecast provider implementation."""
import logging
import os
from typing import Optional

import requests

from weather_provider import WeatherProviderBase, WeatherProviderError, error_payload


class WeatherApiProvider(WeatherProviderBase):
    """
    Weather provider using the WeatherAPI.com forecast endpoint.

    See https://www.weatherapi.com/docs/ - one request returns location,
    current conditions and up to 14 forecast days with hourly breakdowns.
    """

    BASE_URL = "https://api.weatherapi.com/v1"
    REPORT_TYPE = "forecast.json"
    DAYS_FETCHED = 14

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = 10,
        days: int = DAYS_FETCHED,
    ):
        """
        Initialize WeatherAPI.com provider.

        Args:
            api_key: API key; when omitted, WEATHER_API_KEY is read at request time
            timeout: HTTP request timeout in seconds
            days: Number of forecast days to request
        """
        self.api_key = api_key
        self.timeout = timeout
        self.days = days

    @property
    def url(self) -> str:
        return f"{self.BASE_URL}/{self.REPORT_TYPE}"

    def get_forecast(self, city: str) -> dict:
        """
        Fetch the forecast for ``city``.

        Failures are logged and returned as an error payload so callers
        never see an exception from this boundary.
        """
        try:
            return self._request(city)
        except WeatherProviderError as e:
            return error_payload(str(e))

    def _request(self, city: str) -> dict:
        api_key = self.api_key or os.getenv("WEATHER_API_KEY")
        if not api_key:
            logging.error("No WeatherAPI.com key configured")
            raise WeatherProviderError("Missing WEATHER_API_KEY")

        params = {
            "key": api_key,
            "q": city,
            "days": self.days,
            "aqi": "no",
        }

        try:
            logging.info(f"Making WeatherAPI request: {self.url} (q={city}, days={self.days})")
            response = requests.get(self.url, params=params, timeout=self.timeout)
            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                raise WeatherProviderError(
                    f"Weather data fetch failed: HTTP {response.status_code}: {response.text[:200]}"
                )

            data = response.json()
            if not isinstance(data, dict):
                raise WeatherProviderError("Failed to parse response: body is not a JSON object")
            logging.debug(f"API response data keys: {list(data.keys())}")
            return data

        # requests' JSONDecodeError is both a ValueError and a RequestException
        except ValueError as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")
