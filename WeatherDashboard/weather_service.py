"""Dashboard view state and the controller that loads it."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from forecast_normalizer import (
    INCOMPLETE_FORECAST_MESSAGE,
    ForecastContractError,
    normalize,
)
from temperature import TemperatureUnit
from weather_data import CurrentConditions, ForecastDay, HourlyEntry, Location
from weather_provider import WeatherProviderBase

DEFAULT_CITY = "London"


class ViewPhase(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class DashboardState:
    """
    Session-wide dashboard state, shared by reference between the
    controller (the only writer) and the presentation layer.

    Each data slice is None until loaded.
    """
    location: Optional[Location] = None
    current: Optional[CurrentConditions] = None
    hours: Optional[List[HourlyEntry]] = None
    days: Optional[List[ForecastDay]] = None
    unit: TemperatureUnit = TemperatureUnit.CELSIUS
    loading: bool = True
    error: Optional[str] = None
    phase: ViewPhase = ViewPhase.EMPTY

    @property
    def is_populated(self) -> bool:
        return self.current is not None

    def clear(self) -> None:
        """Drop loaded data and errors, keeping the unit selection."""
        self.location = None
        self.current = None
        self.hours = None
        self.days = None
        self.error = None
        self.loading = True
        self.phase = ViewPhase.EMPTY


class ViewStateController:
    """
    Loads the forecast into a DashboardState at most once per mount.

    Empty -> Loading -> Loaded | Failed. Loaded and Failed are terminal;
    only an explicit reload() starts over.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        state: DashboardState,
        default_city: str = DEFAULT_CITY,
    ):
        """
        Initialize the controller.

        Args:
            provider: Forecast data source
            state: Shared state container to populate
            default_city: City used when no city is requested
        """
        self.provider = provider
        self.state = state
        self.default_city = default_city
        self._mounted = True

    def initialize(self, city: Optional[str] = None) -> ViewPhase:
        """
        Populate the state with the forecast for ``city``, unless already populated.

        Returns:
            ViewPhase: The phase the state ends in

        Raises:
            ForecastContractError: If the provider returned a malformed forecast
        """
        if not self._mounted:
            logging.debug("Dashboard torn down, ignoring initialize")
            return self.state.phase
        if self.state.phase == ViewPhase.FAILED:
            logging.debug("Dashboard already failed, waiting for a manual reload")
            return self.state.phase
        if self.state.is_populated:
            logging.debug("Dashboard state already populated, skipping fetch")
            self.state.loading = False
            self.state.phase = ViewPhase.LOADED
            return self.state.phase

        query = (city or "").strip() or self.default_city
        self.state.loading = True
        self.state.phase = ViewPhase.LOADING
        logging.info(f"Fetching forecast for {query}")

        payload = self.provider.get_forecast(query)
        if not self._mounted:
            logging.info(f"Dashboard torn down while fetching {query}, dropping result")
            return self.state.phase

        try:
            result = normalize(payload)
        except ForecastContractError as e:
            logging.error(f"Malformed forecast for {query}: {e}")
            self._fail(INCOMPLETE_FORECAST_MESSAGE)
            raise

        if not result.ok:
            self._fail(result.message)
            return self.state.phase

        forecast = result.forecast
        self.state.location = forecast.location
        self.state.current = forecast.current
        self.state.hours = forecast.hours
        self.state.days = forecast.days
        self.state.error = None
        self.state.loading = False
        self.state.phase = ViewPhase.LOADED
        logging.info(f"Dashboard loaded for {query}")
        return self.state.phase

    def reload(self, city: Optional[str] = None) -> ViewPhase:
        """Manually retry: discard loaded data and fetch again."""
        logging.info("Reloading dashboard")
        self.state.clear()
        return self.initialize(city)

    def set_unit(self, unit: TemperatureUnit) -> None:
        """Switch the display unit; loaded data is untouched."""
        self.state.unit = TemperatureUnit(unit)
        logging.debug(f"Temperature unit set to {self.state.unit.value}")

    def toggle_unit(self) -> TemperatureUnit:
        self.set_unit(self.state.unit.toggled())
        return self.state.unit

    def teardown(self) -> None:
        """Stop writing to the state; an in-flight fetch result is dropped."""
        self._mounted = False

    def _fail(self, message: str) -> None:
        self.state.error = message
        self.state.loading = False
        self.state.phase = ViewPhase.FAILED
        logging.warning(f"Dashboard failed: {message}")
