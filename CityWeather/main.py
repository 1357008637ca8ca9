"""Terminal front end: type a city, get its current weather card."""
import argparse
import logging
import os
import signal
import sys
from typing import List, Optional

from dotenv import load_dotenv

from accuweather_provider import AccuWeatherProvider
from layout import render_state
from weather_service import ViewState, ViewStatus, WeatherService

DEFAULT_LOG_FILE = "city-weather.log"
PROMPT = "Enter city name: "


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("city-weather", description="Current weather for a city")
    parser.add_argument("city", nargs="?", help="City to look up once; omit for an interactive prompt")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds (default: none)")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def load_config() -> Optional[str]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    if not api_key:
        # Requests still go out and fail provider-side
        logging.warning("WEATHER_API_KEY is not set; weather requests will be rejected")
    else:
        logging.info("Configuration loaded")
    return api_key


def build_weather_service(api_key: Optional[str], args: argparse.Namespace) -> WeatherService:
    provider = AccuWeatherProvider(api_key=api_key, timeout=args.timeout)
    service = WeatherService(provider=provider)
    service.subscribe(print_state)
    logging.info("Weather service ready (timeout=%s)", args.timeout)
    return service


def print_state(state: ViewState) -> None:
    text = render_state(state)
    if text:
        print(text, flush=True)


def run_once(service: WeatherService, city: str) -> int:
    state = service.search(city)
    return 1 if state.status is ViewStatus.ERROR else 0


def prompt_loop(service: WeatherService) -> None:
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return
        service.search(line)


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key = load_config()
    service = build_weather_service(api_key, args)

    signal.signal(signal.SIGTERM, signal_handler)

    if args.city is not None:
        return run_once(service, args.city)

    try:
        prompt_loop(service)
    except KeyboardInterrupt:
        print()
        logging.info("Stopping")
    return 0


if __name__ == "__main__":
    sys.exit(main())
