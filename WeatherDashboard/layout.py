"""Layout and rendering logic for the dashboard - pure functions for testability."""
from datetime import datetime
from typing import List, Optional

from temperature import TemperatureUnit, format_temperature, project
from time_window import next_24_hours, parse_hour
from weather_data import (
    CurrentConditions,
    ForecastDay,
    HourlyEntry,
    Location,
    fourteen_day,
    seven_day,
)
from weather_service import DashboardState

LOADING_TEXT = "Loading weather data..."


def full_location(name: str, region: str = "", country: str = "") -> str:
    """
    Join location parts for the page header, skipping blanks and repeats.

    ``("London", "City of London, Greater London", "United Kingdom")`` keeps
    all three; ``("Singapore", "", "Singapore")`` collapses to one.
    """
    parts = []
    for part in (name, region, country):
        part = (part or "").strip()
        if part and part not in parts:
            parts.append(part)
    return ", ".join(parts)


def format_date_abbreviation(date: str) -> str:
    """``"2024-05-06"`` -> ``"Mon, May 6"``."""
    day = datetime.strptime(date, "%Y-%m-%d")
    return f"{day:%a}, {day:%b} {day.day}"


def format_hour(timestamp: str) -> str:
    """``"2024-05-06 15:00"`` -> ``"3 PM"``."""
    hour = parse_hour(timestamp).hour
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12} {suffix}"


def _temp(celsius: float, fahrenheit: float, unit: TemperatureUnit) -> str:
    return format_temperature(project(celsius, fahrenheit, unit), unit)


def _optional(value, fmt: str) -> str:
    return "N/A" if value is None else fmt.format(value)


def current_card(current: CurrentConditions, unit: TemperatureUnit) -> List[str]:
    """Lines for the current-conditions card."""
    feels = "N/A"
    if current.feelslike_c is not None and current.feelslike_f is not None:
        feels = _temp(current.feelslike_c, current.feelslike_f, unit)
    wind = current.wind_dir or "N/A"
    if current.wind_degree is not None:
        wind += f" ({current.wind_degree}°)"

    return [
        f"Updated {current.last_updated}",
        f"{_temp(current.temp_c, current.temp_f, unit)}  {current.condition_text}".rstrip(),
        f"H: {_temp(current.high_c, current.high_f, unit)}  L: {_temp(current.low_c, current.low_f, unit)}",
        f"Feels like {feels}  Humidity {_optional(current.humidity, '{}%')}  Wind {wind}",
        f"UV {_optional(current.uv, '{:g}')}  Visibility {_optional(current.vis_km, '{:g} km')}  "
        f"Precipitation {_optional(current.precip_mm, '{:g} mm')}",
        f"Sunrise {current.sunrise or 'N/A'}  Sunset {current.sunset or 'N/A'}",
    ]


def hourly_card(entry: HourlyEntry, unit: TemperatureUnit) -> str:
    return f"{format_hour(entry.time):>5}  {_temp(entry.temp_c, entry.temp_f, unit):>6}  {entry.condition_text}".rstrip()


def seven_day_card(day: ForecastDay, unit: TemperatureUnit) -> str:
    return (
        f"{format_date_abbreviation(day.date):<12}  "
        f"H: {_temp(day.maxtemp_c, day.maxtemp_f, unit):>6}  "
        f"L: {_temp(day.mintemp_c, day.mintemp_f, unit):>6}  {day.condition_text}"
    ).rstrip()


def fourteen_day_card(day: ForecastDay, unit: TemperatureUnit) -> str:
    # Same content as the 7-day card, condition text included
    return seven_day_card(day, unit)


def render_dashboard(state: DashboardState, now: Optional[datetime] = None) -> List[str]:
    """
    Render the whole dashboard as text lines.

    Args:
        state: Shared dashboard state
        now: Reference time for the hourly window (defaults to local now)

    Returns:
        List of lines to print
    """
    if state.loading:
        return [LOADING_TEXT]
    if state.error:
        return [f"Error: {state.error}"]
    if not state.is_populated:
        return [LOADING_TEXT]

    unit = state.unit
    location = state.location or Location(name="")
    lines = [full_location(location.name, location.region, location.country), ""]
    lines.extend(current_card(state.current, unit))

    lines.extend(["", "Hourly"])
    lines.extend(hourly_card(entry, unit) for entry in next_24_hours(state.hours or [], now))

    days = state.days or []
    lines.extend(["", "7 Day Trend"])
    lines.extend(seven_day_card(day, unit) for day in seven_day(days))

    lines.extend(["", "14 Day Trend"])
    lines.extend(fourteen_day_card(day, unit) for day in fourteen_day(days))
    return lines
