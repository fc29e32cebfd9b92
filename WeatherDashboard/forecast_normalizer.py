"""Turns a raw forecast payload into typed dashboard data.

The payload is classified first, by the presence of the success-marker
field alone. Only a classified success is read any further, and it is
validated into ``Forecast`` dataclasses or rejected outright with
``ForecastContractError``; partially-valid forecasts are never returned.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from time_window import parse_hour
from weather_data import (
    CurrentConditions,
    Forecast,
    ForecastDay,
    HourlyEntry,
    Location,
)
from weather_provider import ERROR_MESSAGE_FIELD

WEATHER_API_SUCCESS_FIELD = "forecast"
INVALID_CITY_MESSAGE = "Weather data could not be found for that city. Please check the name and try again."
INCOMPLETE_FORECAST_MESSAGE = "The weather service returned an incomplete forecast. Please try again later."

# Today and tomorrow feed the hourly window
MIN_FORECAST_DAYS = 2


class ForecastContractError(ValueError):
    """Raised when a success payload breaks the upstream data contract."""
    pass


@dataclass
class ForecastSuccess:
    forecast: Forecast
    ok: bool = True


@dataclass
class ForecastFailure:
    message: str
    ok: bool = False


ForecastResult = Union[ForecastSuccess, ForecastFailure]


def is_success(payload) -> bool:
    """Classify a payload by the success-marker field only."""
    return isinstance(payload, dict) and WEATHER_API_SUCCESS_FIELD in payload


def normalize(payload) -> ForecastResult:
    """
    Classify and normalize a forecast payload.

    Args:
        payload: Raw success payload or error payload from a provider

    Returns:
        ForecastSuccess with a validated Forecast, or ForecastFailure
        carrying the fixed invalid-city message

    Raises:
        ForecastContractError: If a success payload is malformed, e.g. it
            carries fewer than two forecast days
    """
    if not is_success(payload):
        upstream = payload.get(ERROR_MESSAGE_FIELD, payload.get("error")) if isinstance(payload, dict) else payload
        logging.warning(f"Forecast request failed: {upstream}")
        return ForecastFailure(message=INVALID_CITY_MESSAGE)

    days = _parse_days(payload[WEATHER_API_SUCCESS_FIELD])
    today = days[0]
    hours = days[0].hours + days[1].hours

    forecast = Forecast(
        location=_parse_location(payload.get("location")),
        current=_parse_current(payload.get("current"), today),
        hours=hours,
        days=days,
    )
    logging.info(
        f"Normalized forecast for {forecast.location.name or 'unknown location'}: "
        f"{len(days)} days, {len(hours)} hours"
    )
    return ForecastSuccess(forecast=forecast)


def _require(block: dict, key: str, where: str):
    if not isinstance(block, dict) or block.get(key) is None:
        raise ForecastContractError(f"Forecast payload missing '{where}.{key}'")
    return block[key]


def _number(block: dict, key: str, where: str) -> float:
    value = _require(block, key, where)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ForecastContractError(f"Forecast payload has non-numeric '{where}.{key}': {value!r}")


def _optional(block: dict, key: str, cast=float):
    value = block.get(key)
    if value is None:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        logging.debug(f"Ignoring unusable optional field {key}={value!r}")
        return None


def _block(value, where: str) -> dict:
    """An optional nested object: absent is empty, anything but a dict is a violation."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ForecastContractError(f"Forecast payload has non-object '{where}': {value!r}")
    return value


def _timestamp(block: dict, key: str, where: str, parse) -> str:
    value = str(_require(block, key, where))
    try:
        parse(value)
    except ValueError:
        raise ForecastContractError(f"Forecast payload has unparseable '{where}.{key}': {value!r}")
    return value


def _parse_date(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d")


def _condition(block: dict, where: str) -> tuple:
    condition = _block(block.get("condition"), f"{where}.condition")
    return condition.get("text", ""), condition.get("icon", "")


def _parse_location(block) -> Location:
    block = _block(block, "location")
    return Location(
        name=block.get("name", ""),
        region=block.get("region", ""),
        country=block.get("country", ""),
    )


def _parse_hour(block) -> HourlyEntry:
    time = _timestamp(block, "time", "hour", parse_hour)
    text, icon = _condition(block, "hour")
    return HourlyEntry(
        time=time,
        temp_c=_number(block, "temp_c", "hour"),
        temp_f=_number(block, "temp_f", "hour"),
        condition_text=text,
        condition_icon=icon,
    )


def _parse_day(block) -> ForecastDay:
    date = _timestamp(block, "date", "forecastday", _parse_date)
    day = _require(block, "day", "forecastday")
    astro = _block(block.get("astro"), "forecastday.astro")
    text, icon = _condition(_block(day, "forecastday.day"), "day")
    hours = block.get("hour") or []
    if not isinstance(hours, list):
        raise ForecastContractError(f"Forecast payload has non-list 'forecastday.hour': {hours!r}")
    return ForecastDay(
        date=date,
        maxtemp_c=_number(day, "maxtemp_c", "day"),
        maxtemp_f=_number(day, "maxtemp_f", "day"),
        mintemp_c=_number(day, "mintemp_c", "day"),
        mintemp_f=_number(day, "mintemp_f", "day"),
        condition_text=text,
        condition_icon=icon,
        sunrise=astro.get("sunrise", ""),
        sunset=astro.get("sunset", ""),
        hours=[_parse_hour(hour) for hour in hours],
    )


def _parse_days(block) -> list:
    raw_days = _require(block, "forecastday", "forecast")
    if not isinstance(raw_days, list) or len(raw_days) < MIN_FORECAST_DAYS:
        count = len(raw_days) if isinstance(raw_days, list) else 0
        raise ForecastContractError(
            f"Forecast payload has {count} forecast days, need at least {MIN_FORECAST_DAYS}"
        )
    return [_parse_day(day) for day in raw_days]


def _parse_current(block, today: ForecastDay) -> CurrentConditions:
    if not isinstance(block, dict):
        raise ForecastContractError("Forecast payload missing 'current' block")
    text, icon = _condition(block, "current")
    return CurrentConditions(
        last_updated=str(_require(block, "last_updated", "current")),
        temp_c=_number(block, "temp_c", "current"),
        temp_f=_number(block, "temp_f", "current"),
        high_c=today.maxtemp_c,
        high_f=today.maxtemp_f,
        low_c=today.mintemp_c,
        low_f=today.mintemp_f,
        condition_text=text,
        condition_icon=icon,
        sunrise=today.sunrise,
        sunset=today.sunset,
        feelslike_c=_optional(block, "feelslike_c"),
        feelslike_f=_optional(block, "feelslike_f"),
        humidity=_optional(block, "humidity", int),
        wind_degree=_optional(block, "wind_degree", int),
        wind_dir=_optional(block, "wind_dir", str),
        uv=_optional(block, "uv"),
        vis_km=_optional(block, "vis_km"),
        precip_mm=_optional(block, "precip_mm"),
    )
