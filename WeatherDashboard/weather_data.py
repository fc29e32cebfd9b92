"""Forecast domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Location:
    """Where the forecast applies."""
    name: str
    region: str = ""
    country: str = ""


@dataclass
class HourlyEntry:
    """One hourly bucket of a forecast day."""
    time: str  # local time, e.g. "2024-05-06 15:00"
    temp_c: float
    temp_f: float
    condition_text: str = ""
    condition_icon: str = ""


@dataclass
class ForecastDay:
    """One calendar day's aggregate plus its hourly breakdown."""
    date: str  # e.g. "2024-05-06"
    maxtemp_c: float
    maxtemp_f: float
    mintemp_c: float
    mintemp_f: float
    condition_text: str = ""
    condition_icon: str = ""
    sunrise: str = ""
    sunset: str = ""
    hours: List[HourlyEntry] = field(default_factory=list)


@dataclass
class CurrentConditions:
    """Current conditions, enriched with today's high/low and astro times."""
    last_updated: str
    temp_c: float
    temp_f: float
    high_c: float
    high_f: float
    low_c: float
    low_f: float
    condition_text: str = ""
    condition_icon: str = ""
    sunrise: str = ""
    sunset: str = ""

    # Optional display fields, missing from some responses
    feelslike_c: Optional[float] = None
    feelslike_f: Optional[float] = None
    humidity: Optional[int] = None
    wind_degree: Optional[int] = None
    wind_dir: Optional[str] = None
    uv: Optional[float] = None
    vis_km: Optional[float] = None
    precip_mm: Optional[float] = None


# Slice bounds for the multi-day views
FORECAST_START = 0
SEVEN_DAY_FORECAST_END = 7
FOURTEEN_DAY_FORECAST_END = 14


def seven_day(days: List[ForecastDay]) -> List[ForecastDay]:
    return days[FORECAST_START:SEVEN_DAY_FORECAST_END]


def fourteen_day(days: List[ForecastDay]) -> List[ForecastDay]:
    """Days for the 14-day trend; the 7-day trend is always a prefix of it."""
    return days[FORECAST_START:FOURTEEN_DAY_FORECAST_END]


@dataclass
class Forecast:
    """A validated forecast, ready for the dashboard views."""
    location: Location
    current: CurrentConditions
    hours: List[HourlyEntry]  # today's and tomorrow's hours, 48 entries
    days: List[ForecastDay]
