"""Tests for the dashboard view state controller."""
import pytest
from forecast_normalizer import INCOMPLETE_FORECAST_MESSAGE, INVALID_CITY_MESSAGE, ForecastContractError, normalize
from layout import render_dashboard
from temperature import TemperatureUnit
from weather_provider import WeatherProviderBase, error_payload
from weather_service import DEFAULT_CITY, DashboardState, ViewPhase, ViewStateController


class MockProvider(WeatherProviderBase):
    """Mock forecast provider for testing."""

    def __init__(self, return_data=None):
        self.return_data = return_data
        self.call_count = 0
        self.cities = []
        self.on_fetch = None

    def get_forecast(self, city):
        self.call_count += 1
        self.cities.append(city)
        if self.on_fetch:
            self.on_fetch()
        return self.return_data


@pytest.fixture
def state():
    return DashboardState()


def test_initial_state_is_empty(state):
    assert state.phase == ViewPhase.EMPTY
    assert state.loading is True
    assert state.current is None
    assert state.hours is None
    assert state.days is None
    assert state.unit == TemperatureUnit.CELSIUS


def test_initialize_loads_forecast(state, sample_payload):
    """Test a successful fetch populates every slice."""
    provider = MockProvider(return_data=sample_payload)
    controller = ViewStateController(provider, state)

    phase = controller.initialize("London")

    assert phase == ViewPhase.LOADED
    assert provider.call_count == 1
    assert provider.cities == ["London"]
    assert state.loading is False
    assert state.error is None
    assert state.location.name == "London"
    assert state.current.temp_c == 17.5
    assert len(state.hours) == 48
    assert len(state.days) == 14


@pytest.mark.parametrize("city", [None, "", "   "])
def test_initialize_blank_city_uses_default(state, sample_payload, city):
    provider = MockProvider(return_data=sample_payload)
    controller = ViewStateController(provider, state, default_city="Toronto")

    controller.initialize(city)

    assert provider.cities == ["Toronto"]


def test_default_city_constant(state, sample_payload):
    provider = MockProvider(return_data=sample_payload)

    ViewStateController(provider, state).initialize()

    assert provider.cities == [DEFAULT_CITY]


def test_initialize_skips_fetch_when_populated(state, sample_payload):
    """Test state restored from a prior navigation is not refetched."""
    provider = MockProvider(return_data=sample_payload)
    ViewStateController(provider, state).initialize("London")
    state.loading = True

    second = ViewStateController(provider, state)
    phase = second.initialize("Paris")

    assert phase == ViewPhase.LOADED
    assert provider.call_count == 1
    assert state.loading is False
    assert state.location.name == "London"


def test_http_500_ends_failed(state):
    """Test a server error leaves the fixed message and no data."""
    provider = MockProvider(return_data=error_payload("Weather data fetch failed: HTTP 500: Internal error"))
    controller = ViewStateController(provider, state)

    phase = controller.initialize("London")

    assert phase == ViewPhase.FAILED
    assert state.error == INVALID_CITY_MESSAGE
    assert state.loading is False
    assert state.current is None
    assert state.hours is None
    assert state.days is None


def test_failure_is_not_retried(state):
    """Test a failed fetch is attempted exactly once."""
    provider = MockProvider(return_data=error_payload("boom"))
    controller = ViewStateController(provider, state)

    controller.initialize("Atlantis")

    assert provider.call_count == 1
    assert state.phase == ViewPhase.FAILED
    assert "boom" not in state.error


def test_failed_is_terminal(state):
    """Test a second initialize after failure does not fetch again."""
    provider = MockProvider(return_data=error_payload("boom"))
    controller = ViewStateController(provider, state)

    controller.initialize("Atlantis")
    phase = controller.initialize("Atlantis")

    assert phase == ViewPhase.FAILED
    assert provider.call_count == 1
    assert state.error == INVALID_CITY_MESSAGE
    assert state.loading is False


def test_initialize_after_teardown_does_nothing(state, sample_payload):
    """Test a torn-down controller neither fetches nor writes state."""
    provider = MockProvider(return_data=sample_payload)
    controller = ViewStateController(provider, state)
    controller.teardown()

    phase = controller.initialize("London")

    assert phase == ViewPhase.EMPTY
    assert provider.call_count == 0
    assert state.phase == ViewPhase.EMPTY
    assert state.current is None


def test_malformed_forecast_fails_loudly(state, make_payload):
    """Test a one-day forecast fails the dashboard and raises."""
    provider = MockProvider(return_data=make_payload(days=1))
    controller = ViewStateController(provider, state)

    with pytest.raises(ForecastContractError):
        controller.initialize("London")

    assert state.phase == ViewPhase.FAILED
    assert state.error == INCOMPLETE_FORECAST_MESSAGE
    assert state.loading is False
    assert state.current is None


def test_unit_toggle_does_not_refetch(state, sample_payload):
    """Test switching units changes display only."""
    provider = MockProvider(return_data=sample_payload)
    controller = ViewStateController(provider, state)
    controller.initialize("London")
    before = render_dashboard(state)

    controller.set_unit(TemperatureUnit.FAHRENHEIT)
    controller.initialize("London")
    after = render_dashboard(state)

    assert provider.call_count == 1
    assert state.unit == TemperatureUnit.FAHRENHEIT
    assert before != after
    assert "18°C  Sunny" in before
    assert "64°F  Sunny" in after
    assert not any("°C" in line for line in after)


def test_toggle_unit(state):
    controller = ViewStateController(MockProvider(), state)

    assert controller.toggle_unit() == TemperatureUnit.FAHRENHEIT
    assert controller.toggle_unit() == TemperatureUnit.CELSIUS


def test_set_unit_accepts_string(state):
    controller = ViewStateController(MockProvider(), state)

    controller.set_unit("F")

    assert state.unit is TemperatureUnit.FAHRENHEIT


def test_teardown_mid_fetch_drops_result(state, sample_payload):
    """Test a result arriving after teardown is not written."""
    provider = MockProvider(return_data=sample_payload)
    controller = ViewStateController(provider, state)
    provider.on_fetch = controller.teardown

    controller.initialize("London")

    assert provider.call_count == 1
    assert state.current is None
    assert state.hours is None
    assert state.error is None
    assert state.phase == ViewPhase.LOADING


def test_reload_fetches_again(state, sample_payload):
    """Test a manual reload replaces a failed state."""
    provider = MockProvider(return_data=error_payload("boom"))
    controller = ViewStateController(provider, state)
    controller.initialize("London")
    controller.set_unit(TemperatureUnit.FAHRENHEIT)

    provider.return_data = sample_payload
    phase = controller.reload("London")

    assert phase == ViewPhase.LOADED
    assert provider.call_count == 2
    assert state.error is None
    assert state.current is not None
    assert state.unit == TemperatureUnit.FAHRENHEIT


def test_state_matches_normalized_forecast(state, sample_payload):
    provider = MockProvider(return_data=sample_payload)
    ViewStateController(provider, state).initialize("London")

    forecast = normalize(sample_payload).forecast

    assert state.current == forecast.current
    assert state.hours == forecast.hours
    assert state.days == forecast.days


@pytest.mark.parametrize("breakage", ["null_hour", "bad_time"])
def test_broken_hour_ends_failed(state, sample_payload, breakage):
    """Test a malformed hourly entry never leaves the dashboard loading."""
    hours = sample_payload["forecast"]["forecastday"][0]["hour"]
    if breakage == "null_hour":
        hours[3] = None
    else:
        hours[3]["time"] = "tomorrow 3am"
    controller = ViewStateController(MockProvider(return_data=sample_payload), state)

    with pytest.raises(ForecastContractError):
        controller.initialize("London")

    assert state.phase == ViewPhase.FAILED
    assert state.loading is False
    assert state.hours is None
    assert render_dashboard(state) == [f"Error: {INCOMPLETE_FORECAST_MESSAGE}"]
