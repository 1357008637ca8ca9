"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field
from typing import Any, Optional


def extract_path(data: Any, *path: str) -> Optional[Any]:
    """
    Read a nested value from a semi-structured payload.

    Walks ``path`` one key at a time and returns None as soon as a level is
    missing or is not a mapping, so callers never need their own guards.

    Example:
        extract_path(payload, "Wind", "Speed", "Metric", "Value")
    """
    current = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


@dataclass(frozen=True)
class Location:
    """A place resolved by the geocoding endpoint."""
    key: str  # opaque location key used by the conditions endpoint
    city: str
    country: str

    @property
    def display_name(self) -> str:
        return f"{self.city}, {self.country}"


@dataclass(frozen=True)
class ConditionRecord:
    """
    Current conditions for one location.

    ``payload`` is the provider's record as returned. Numeric fields are read
    through ``extract_path`` so a missing unit group shows up as None.
    """
    location: Location
    payload: dict = field(default_factory=dict)

    @property
    def temperature(self) -> Optional[float]:
        return extract_path(self.payload, "Temperature", "Metric", "Value")

    @property
    def feels_like(self) -> Optional[float]:
        return extract_path(self.payload, "RealFeelTemperature", "Metric", "Value")

    @property
    def humidity(self) -> Optional[float]:
        return extract_path(self.payload, "RelativeHumidity")

    @property
    def wind_speed(self) -> Optional[float]:
        return extract_path(self.payload, "Wind", "Speed", "Metric", "Value")

    @property
    def wind_speed_unit(self) -> Optional[str]:
        return extract_path(self.payload, "Wind", "Speed", "Metric", "Unit")

    @property
    def pressure(self) -> Optional[float]:
        return extract_path(self.payload, "Pressure", "Metric", "Value")

    @property
    def pressure_unit(self) -> Optional[str]:
        return extract_path(self.payload, "Pressure", "Metric", "Unit")

    @property
    def weather_text(self) -> Optional[str]:
        return extract_path(self.payload, "WeatherText")

    @property
    def weather_icon(self) -> Optional[int]:
        return extract_path(self.payload, "WeatherIcon")

    @property
    def observed_at(self) -> Optional[str]:
        """Local observation time as an ISO-8601 string (e.g. 2024-05-01T14:35:00+02:00)."""
        return extract_path(self.payload, "LocalObservationDateTime")

    def has_temperature(self) -> bool:
        """True when the metric temperature group is present."""
        return isinstance(extract_path(self.payload, "Temperature", "Metric"), dict)
