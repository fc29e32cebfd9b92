"""Temperature unit selection and display formatting."""
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum


class TemperatureUnit(str, Enum):
    """Unit used for every temperature shown on the dashboard."""
    CELSIUS = "C"
    FAHRENHEIT = "F"

    def toggled(self) -> "TemperatureUnit":
        if self is TemperatureUnit.FAHRENHEIT:
            return TemperatureUnit.CELSIUS
        return TemperatureUnit.FAHRENHEIT


def project(celsius: float, fahrenheit: float, unit: TemperatureUnit) -> float:
    """Pick the value matching ``unit``. No rounding happens here."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return fahrenheit
    return celsius


def round_temperature(value: float) -> int:
    """Round to the nearest integer, halves away from zero (-2.5 -> -3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_temperature(value: float, unit: TemperatureUnit) -> str:
    """Format a projected temperature for display, e.g. ``21°C``."""
    return f"{round_temperature(value)}°{unit.value}"
