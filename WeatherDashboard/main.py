"""Command-line weather dashboard."""
import argparse
import logging
import os
import sys
from typing import Optional, Tuple

from dotenv import load_dotenv

from forecast_normalizer import ForecastContractError
from layout import render_dashboard
from temperature import TemperatureUnit
from weather_service import DEFAULT_CITY, DashboardState, ViewPhase, ViewStateController
from weatherapi_provider import WeatherApiProvider


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather dashboard")
    parser.add_argument("--city", default="", help="City to show (defaults to WEATHER_DEFAULT_CITY)")
    parser.add_argument("--units", choices=[u.value for u in TemperatureUnit], default=TemperatureUnit.CELSIUS.value)
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config() -> Tuple[str, str]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    default_city = os.getenv("WEATHER_DEFAULT_CITY", DEFAULT_CITY)

    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")

    logging.info("Configuration loaded: default_city=%s", default_city)
    return api_key, default_city


def build_controller(api_key: str, default_city: str, state: DashboardState, args: argparse.Namespace) -> ViewStateController:
    provider = WeatherApiProvider(api_key=api_key, timeout=args.timeout)
    controller = ViewStateController(provider=provider, state=state, default_city=default_city)
    controller.set_unit(TemperatureUnit(args.units))
    logging.info("Dashboard controller ready (timeout=%ss)", args.timeout)
    return controller


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key, default_city = load_config()

    state = DashboardState()
    controller = build_controller(api_key, default_city, state, args)

    try:
        phase = controller.initialize(args.city)
    except ForecastContractError as err:
        logging.error("Forecast rejected: %s", err)
        phase = ViewPhase.FAILED
    finally:
        controller.teardown()

    for line in render_dashboard(state):
        print(line)

    return 0 if phase == ViewPhase.LOADED else 1


if __name__ == "__main__":
    sys.exit(main())
