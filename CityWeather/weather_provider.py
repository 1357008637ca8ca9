"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from weather_data import ConditionRecord, Location

T = TypeVar("T")


class LookupStatus(Enum):
    """Outcome of a single provider step that reached the provider."""
    FOUND = "found"
    NOT_FOUND = "not_found"  # geocoding returned no matches
    UNAVAILABLE = "unavailable"  # conditions endpoint returned no records
    INCOMPLETE = "incomplete"  # conditions record lacks the metric temperature


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """Tagged result of a provider step; ``value`` is set only when FOUND."""
    status: LookupStatus
    value: Optional[T] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @classmethod
    def success(cls, value: T) -> "LookupResult[T]":
        return cls(LookupStatus.FOUND, value)

    @classmethod
    def failure(cls, status: LookupStatus) -> "LookupResult[T]":
        return cls(status)


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def find_location(self, query: str) -> LookupResult[Location]:
        """
        Resolve free text to the first matching location.

        Args:
            query: Trimmed, non-empty city name

        Returns:
            LookupResult: FOUND with a Location, or NOT_FOUND

        Raises:
            WeatherProviderError: On network failure or a non-2xx response
        """
        pass

    @abstractmethod
    def get_conditions(self, location: Location) -> LookupResult[ConditionRecord]:
        """
        Fetch current conditions for a resolved location.

        Args:
            location: Location returned by find_location

        Returns:
            LookupResult: FOUND with a ConditionRecord, UNAVAILABLE or INCOMPLETE

        Raises:
            WeatherProviderError: On network failure or a non-2xx response
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass
