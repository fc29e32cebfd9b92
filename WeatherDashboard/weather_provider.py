"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod

# Key of the error body a provider returns instead of raising
ERROR_MESSAGE_FIELD = "errorMessage"


class WeatherProviderBase(ABC):
    """Abstract base class for forecast data providers."""

    @abstractmethod
    def get_forecast(self, city: str) -> dict:
        """
        Fetch the forecast for a city.

        Returns:
            dict: The raw forecast payload on success, or
            ``{"errorMessage": ...}`` on any failure. Providers never raise.
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider request fails."""
    pass


def error_payload(message: str) -> dict:
    """Build the uniform error body returned at the provider boundary."""
    return {ERROR_MESSAGE_FIELD: message}
