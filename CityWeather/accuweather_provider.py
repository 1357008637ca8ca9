"""AccuWeather location search and current conditions provider implementation."""
import logging
import requests
from typing import Any, Dict, Optional
from weather_provider import LookupResult, LookupStatus, WeatherProviderBase, WeatherProviderError
from weather_data import ConditionRecord, Location


class AccuWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the AccuWeather Locations and Current Conditions APIs.

    A search is two calls: the city search endpoint turns free text into a
    location key, then the current conditions endpoint returns the
    observation for that key. See https://developer.accuweather.com/apis
    """

    LOCATION_URL = "https://dataservice.accuweather.com/locations/v1/cities/search"
    CONDITIONS_URL = "https://dataservice.accuweather.com/currentconditions/v1/"

    def __init__(self, api_key: Optional[str], timeout: Optional[float] = None):
        """
        Initialize AccuWeather provider.

        Args:
            api_key: AccuWeather API key (sent as-is, even when empty)
            timeout: HTTP request timeout in seconds, None to wait indefinitely
        """
        self.api_key = api_key
        self.timeout = timeout

    def find_location(self, query: str) -> LookupResult[Location]:
        """
        Resolve a city name with the AccuWeather city search.

        Only the first match is used; there is no disambiguation between
        cities sharing a name.

        Returns:
            LookupResult: FOUND with the first Location, or NOT_FOUND

        Raises:
            WeatherProviderError: If the API request fails
        """
        data = self._get_json(self.LOCATION_URL, {"apikey": self.api_key, "q": query})
        logging.debug(f"Location response (truncated): {str(data)[:500]}")

        if not data or not isinstance(data, list):
            logging.warning(f"No location found for query '{query}'")
            return LookupResult.failure(LookupStatus.NOT_FOUND)

        first = data[0]
        try:
            location = Location(
                key=str(first["Key"]),
                city=first["LocalizedName"],
                country=first["Country"]["LocalizedName"],
            )
        except (KeyError, TypeError) as e:
            logging.error(f"Failed to parse location response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

        logging.info(f"City: {location.city}, Country: {location.country} (key {location.key})")
        return LookupResult.success(location)

    def get_conditions(self, location: Location) -> LookupResult[ConditionRecord]:
        """
        Fetch detailed current conditions for a location key.

        Returns:
            LookupResult: FOUND, UNAVAILABLE (empty collection) or
            INCOMPLETE (no metric temperature in the first record)

        Raises:
            WeatherProviderError: If the API request fails
        """
        url = f"{self.CONDITIONS_URL}{location.key}"
        data = self._get_json(url, {"apikey": self.api_key, "details": "true"})
        logging.debug(f"Conditions response (truncated): {str(data)[:500]}")

        if not data or not isinstance(data, list):
            logging.warning(f"No current conditions for location key {location.key}")
            return LookupResult.failure(LookupStatus.UNAVAILABLE)

        current = data[0]
        if not isinstance(current, dict):
            logging.error(f"Unexpected conditions record: {current!r}")
            return LookupResult.failure(LookupStatus.INCOMPLETE)

        record = ConditionRecord(location=location, payload=current)
        if not record.has_temperature():
            logging.error(f"Missing required weather properties: {current}")
            return LookupResult.failure(LookupStatus.INCOMPLETE)

        logging.info(f"Successfully parsed conditions: {record.temperature}°C, {record.weather_text}")
        return LookupResult.success(record)

    def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        """Issue a GET request and return the decoded JSON body."""
        try:
            logging.info(f"Making AccuWeather API request: {url}")
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")

        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            return response.json()
        except ValueError as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from an AccuWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        logging.error(f"AccuWeather API error response: {error_data}")
        if not isinstance(error_data, dict):
            raise WeatherProviderError(f"HTTP {response.status_code}: {str(error_data)[:200]}")

        code = error_data.get("Code", response.status_code)
        message = error_data.get("Message", "Unknown error")
        raise WeatherProviderError(f"AccuWeather API error {response.status_code} ({code}): {message}")
