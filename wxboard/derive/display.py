"""Derived display fields: compass labels, UV risk, daylight, formatting."""

from datetime import datetime
from enum import StrEnum

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

PLACEHOLDER = "--"


class UvRisk(StrEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very high"
    EXTREME = "extreme"
    UNKNOWN = "unknown"


# (exclusive upper bound, risk), WHO UV index categories
UV_THRESHOLDS: list[tuple[float, UvRisk]] = [
    (3.0, UvRisk.LOW),
    (6.0, UvRisk.MODERATE),
    (8.0, UvRisk.HIGH),
    (11.0, UvRisk.VERY_HIGH),
]


def compass_label(degrees: float | None) -> str:
    """8-point compass label for a wind direction in degrees.

    Each sector is 45 degrees wide and centred on its point, so N covers
    [337.5, 22.5). Any real number is accepted and wrapped into [0, 360).
    """
    if degrees is None:
        return PLACEHOLDER
    normalized = degrees % 360
    index = int((normalized + 22.5) // 45) % 8
    return COMPASS_POINTS[index]


def uv_risk(uv: float | None) -> UvRisk:
    if uv is None:
        return UvRisk.UNKNOWN
    for upper, risk in UV_THRESHOLDS:
        if uv < upper:
            return risk
    return UvRisk.EXTREME


def daylight_progress(now: datetime, sunrise: datetime, sunset: datetime) -> float:
    """Fraction of the day's daylight already elapsed, clamped to [0, 1]."""
    total = (sunset - sunrise).total_seconds()
    if total <= 0:
        return 0.0
    elapsed = (now - sunrise).total_seconds()
    return min(max(elapsed / total, 0.0), 1.0)


def daylight_hours(sunrise: datetime, sunset: datetime) -> float:
    return max((sunset - sunrise).total_seconds() / 3600, 0.0)


def format_measure(value: float | None, unit: str = "", digits: int = 1) -> str:
    if value is None:
        return PLACEHOLDER
    return f"{value:.{digits}f}{unit}"


def feels_like_text(
    temperature: float | None, apparent: float | None, unit: str = "°C"
) -> str:
    """E.g. "Feels like 10.2°C (2.1° colder)"."""
    if apparent is None:
        return f"Feels like {PLACEHOLDER}"
    text = f"Feels like {format_measure(apparent, unit)}"
    if temperature is None:
        return text
    delta = apparent - temperature
    if abs(delta) < 0.5:
        return f"{text} (same)"
    direction = "warmer" if delta > 0 else "colder"
    return f"{text} ({abs(delta):.1f}° {direction})"


def format_clock(dt: datetime | None) -> str:
    if dt is None:
        return "--:--"
    return dt.strftime("%H:%M")
