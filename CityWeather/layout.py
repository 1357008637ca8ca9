"""Layout and rendering logic for the weather card - pure functions for testability."""
import logging
import math
from datetime import datetime
from typing import Callable, List, Optional
from weather_data import ConditionRecord
from weather_service import ViewState, ViewStatus

PLACEHOLDER = "N/A"
ICON_URL_TEMPLATE = "https://developer.accuweather.com/sites/default/files/{code}-s.png"
LOADING_TEXT = "Loading..."


def safe_render(render: Callable[[], str], fallback: str = PLACEHOLDER) -> str:
    """
    Evaluate a single field formatter, falling back on a data fault.

    A missing nested group shows up as None, so formatting it raises
    TypeError; that field gets the fallback and the rest of the card renders.

    Args:
        render: Zero-argument callable producing the field text
        fallback: Text used when the field cannot be read

    Returns:
        The rendered field text, or the fallback
    """
    try:
        return render()
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logging.warning(f"Failed to render value: {e}")
        return fallback


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def get_icon_url(icon_code: Optional[int]) -> str:
    """
    Map a provider icon code to its asset URL.

    Codes below 10 are zero-padded to two digits. The code range is not
    checked; a missing or zero code gives an empty string.
    """
    if not icon_code:
        return ""
    code = f"0{icon_code}" if icon_code < 10 else str(icon_code)
    return ICON_URL_TEMPLATE.format(code=code)


def get_condition_text(record: ConditionRecord) -> str:
    """Weather text with each word capitalized, or 'Unknown'."""
    text = record.weather_text
    if not text:
        return "Unknown"
    return " ".join(word[:1].upper() + word[1:] for word in text.split())


def format_temperature(value: Optional[float]) -> str:
    return f"{round_half_up(value)}°C"


def format_measure(value: Optional[float], unit: Optional[str], default_unit: str) -> str:
    """Pass a server value through with its unit; a missing value is an error."""
    if value is None:
        raise TypeError("value missing")
    return f"{value} {unit or default_unit}"


def format_humidity(value: Optional[float]) -> str:
    if value is None:
        raise TypeError("humidity missing")
    return f"{value}%"


def format_observation_time(observed_at: Optional[str]) -> str:
    """Format the provider's local observation timestamp as YYYY-MM-DD HH:MM."""
    return datetime.fromisoformat(observed_at).strftime("%Y-%m-%d %H:%M")


def calculate_card(record: ConditionRecord) -> List[str]:
    """
    Build the text lines of the weather card.

    Each numeric field goes through safe_render on its own, so a record with
    no wind group still shows temperature, humidity and pressure.

    Args:
        record: Conditions to display

    Returns:
        Card lines, top to bottom
    """
    header = record.location.display_name
    observed = safe_render(lambda: format_observation_time(record.observed_at))

    lines = [
        f"{header}  ({observed})",
    ]

    icon_url = safe_render(lambda: get_icon_url(record.weather_icon), fallback="")
    if icon_url:
        lines.append(f"Icon: {icon_url}")

    lines.append(safe_render(lambda: format_temperature(record.temperature)))
    lines.append(get_condition_text(record))
    lines.append(f"Feels Like: {safe_render(lambda: format_temperature(record.feels_like))}")
    lines.append(f"Humidity: {safe_render(lambda: format_humidity(record.humidity))}")
    lines.append(
        "Wind Speed: "
        + safe_render(lambda: format_measure(record.wind_speed, record.wind_speed_unit, "km/h"))
    )
    lines.append(
        "Pressure: "
        + safe_render(lambda: format_measure(record.pressure, record.pressure_unit, "mb"))
    )
    return lines


def render_state(state: ViewState) -> str:
    """
    Render the whole view for a state.

    Loading shows only the busy line; an error shows only the banner, so a
    stale card is never printed next to an error.
    """
    status = state.status
    if status is ViewStatus.LOADING:
        return LOADING_TEXT
    if status is ViewStatus.ERROR:
        return f"Error: {state.error}"
    if status is ViewStatus.RESULT:
        return "\n".join(calculate_card(state.record))
    return ""
