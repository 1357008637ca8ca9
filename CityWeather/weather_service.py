"""Search orchestration: city lookup followed by a current conditions fetch."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
from weather_provider import LookupStatus, WeatherProviderBase, WeatherProviderError
from weather_data import ConditionRecord

NOT_FOUND_MESSAGE = "City not found. Please check the spelling and try again."
UNAVAILABLE_MESSAGE = "Weather data not available for this location."
INCOMPLETE_MESSAGE = "Weather data is incomplete or in an unexpected format."
TRANSPORT_MESSAGE = "An error occurred while fetching the weather data. Please try again later."

ERROR_MESSAGES = {
    LookupStatus.NOT_FOUND: NOT_FOUND_MESSAGE,
    LookupStatus.UNAVAILABLE: UNAVAILABLE_MESSAGE,
    LookupStatus.INCOMPLETE: INCOMPLETE_MESSAGE,
}


class ViewStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    """Snapshot of everything the view shows. Replaced whole, never mutated."""
    query: str = ""
    record: Optional[ConditionRecord] = None
    error: Optional[str] = None
    loading: bool = False

    @property
    def status(self) -> ViewStatus:
        if self.loading:
            return ViewStatus.LOADING
        if self.error is not None:
            return ViewStatus.ERROR
        if self.record is not None:
            return ViewStatus.RESULT
        return ViewStatus.IDLE


StateListener = Callable[[ViewState], None]


class WeatherService:
    """
    Runs a search against a provider and owns the resulting view state.

    The conditions call only starts once the city lookup has succeeded.
    Every search ends with exactly one new state: either a record and no
    error, or an error and no record.
    """

    def __init__(self, provider: WeatherProviderBase):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to use
        """
        self.provider = provider
        self._state = ViewState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        """Register a callback invoked with each new state."""
        self._listeners.append(listener)

    def search(self, query: str) -> ViewState:
        """
        Look up current conditions for a city name.

        Blank input is ignored and leaves the state untouched.

        Returns:
            ViewState: The state after the search settles
        """
        query = (query or "").strip()
        if not query:
            logging.debug("Ignoring empty search query")
            return self._state

        self._set_state(ViewState(query=query, loading=True))
        try:
            self._set_state(self._run(query))
        except WeatherProviderError as e:
            logging.error(f"Weather search for '{query}' failed: {e}")
            self._set_state(ViewState(query=query, error=TRANSPORT_MESSAGE))
        return self._state

    def _run(self, query: str) -> ViewState:
        logging.info(f"Searching weather for '{query}'")

        location_result = self.provider.find_location(query)
        if not location_result.found:
            return self._failed(query, location_result.status)

        conditions_result = self.provider.get_conditions(location_result.value)
        if not conditions_result.found:
            return self._failed(query, conditions_result.status)

        record = conditions_result.value
        logging.info(f"Weather for {record.location.display_name}: {record.temperature}°C, {record.weather_text}")
        return ViewState(query=query, record=record)

    def _failed(self, query: str, status: LookupStatus) -> ViewState:
        message = ERROR_MESSAGES[status]
        logging.warning(f"Weather search for '{query}' ended with {status.value}")
        return ViewState(query=query, error=message)

    def _set_state(self, state: ViewState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)
