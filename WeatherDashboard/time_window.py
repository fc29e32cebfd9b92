"""Hourly window selection - keeps only hours that have not elapsed yet."""
from datetime import datetime
from typing import Optional

# WeatherAPI.com hourly timestamps are local time, e.g. "2024-05-06 15:00"
HOUR_FORMAT = "%Y-%m-%d %H:%M"


def parse_hour(timestamp: str) -> datetime:
    """Parse an hourly timestamp from the forecast API."""
    return datetime.strptime(timestamp.strip(), HOUR_FORMAT)


def is_future_hour(timestamp: str, now: Optional[datetime] = None) -> bool:
    """
    Check whether an hourly timestamp is strictly later than ``now``.

    Args:
        timestamp: Local-time string in the API's hourly format
        now: Reference time (defaults to the current local time)

    Returns:
        True if the hour has not started yet
    """
    if now is None:
        now = datetime.now()
    return parse_hour(timestamp) > now


def next_24_hours(hours, now: Optional[datetime] = None) -> list:
    """
    Trim already-elapsed hours from today's and tomorrow's hourly entries.

    Order is preserved. Late in the day fewer than 24 entries remain; the
    window is never topped up from a third day.
    """
    if now is None:
        now = datetime.now()
    return [entry for entry in hours if is_future_hour(entry.time, now)]
