"""Shared fixtures: WeatherAPI.com-shaped forecast payloads."""
from datetime import date, timedelta

import pytest


def build_day(day: date, offset: int = 0) -> dict:
    return {
        "date": day.isoformat(),
        "day": {
            "maxtemp_c": 20.0 + offset,
            "maxtemp_f": 68.0 + offset,
            "mintemp_c": 10.0 + offset,
            "mintemp_f": 50.0 + offset,
            "condition": {"text": f"Cloudy day {offset}", "icon": "//cdn.weatherapi.com/116.png"},
        },
        "astro": {"sunrise": "05:32 AM", "sunset": "08:21 PM"},
        "hour": [
            {
                "time": f"{day.isoformat()} {hour:02d}:00",
                "temp_c": 10.0 + hour / 2,
                "temp_f": 50.0 + hour,
                "condition": {"text": "Partly cloudy", "icon": "//cdn.weatherapi.com/116.png"},
            }
            for hour in range(24)
        ],
    }


def build_payload(days: int = 14, start: date = date(2024, 5, 6)) -> dict:
    return {
        "location": {"name": "London", "region": "City of London, Greater London", "country": "United Kingdom"},
        "current": {
            "last_updated": f"{start.isoformat()} 14:15",
            "temp_c": 17.5,
            "temp_f": 63.5,
            "condition": {"text": "Sunny", "icon": "//cdn.weatherapi.com/113.png"},
            "feelslike_c": 16.2,
            "feelslike_f": 61.2,
            "humidity": 55,
            "wind_degree": 240,
            "wind_dir": "WSW",
            "uv": 5.0,
            "vis_km": 10.0,
            "precip_mm": 0.0,
        },
        "forecast": {
            "forecastday": [build_day(start + timedelta(days=i), i) for i in range(days)],
        },
    }


@pytest.fixture
def sample_payload():
    """Fourteen-day forecast payload starting 2024-05-06."""
    return build_payload()


@pytest.fixture
def make_payload():
    return build_payload
