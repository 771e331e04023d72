"""WMO weather code classification.

Open-Meteo reports sky and precipitation state as a WMO weather code. The
table below is the single source of truth for which condition a code belongs
to; codes not listed classify as ``unknown``.
"""

from dataclasses import dataclass
from enum import StrEnum


class WeatherCondition(StrEnum):
    CLEAR = "clear"
    CLOUDY = "cloudy"
    FOG = "fog"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    THUNDERSTORM = "thunderstorm"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ConditionInfo:
    code: int | None
    condition: WeatherCondition
    description: str
    icon: str
    color: str


# code -> (condition, description, day icon, night icon)
WEATHER_CODES: dict[int, tuple[WeatherCondition, str, str, str]] = {
    0: (WeatherCondition.CLEAR, "Clear sky", "sun.max.fill", "moon.stars.fill"),
    1: (WeatherCondition.CLEAR, "Mainly clear", "sun.max", "moon.fill"),
    2: (WeatherCondition.CLOUDY, "Partly cloudy", "cloud.sun.fill", "cloud.moon.fill"),
    3: (WeatherCondition.CLOUDY, "Overcast", "cloud.fill", "cloud.fill"),
    45: (WeatherCondition.FOG, "Fog", "cloud.fog.fill", "cloud.fog.fill"),
    48: (WeatherCondition.FOG, "Depositing rime fog", "cloud.fog.fill", "cloud.fog.fill"),
    51: (WeatherCondition.DRIZZLE, "Light drizzle", "cloud.drizzle.fill", "cloud.drizzle.fill"),
    53: (WeatherCondition.DRIZZLE, "Drizzle", "cloud.drizzle.fill", "cloud.drizzle.fill"),
    55: (WeatherCondition.DRIZZLE, "Dense drizzle", "cloud.drizzle.fill", "cloud.drizzle.fill"),
    56: (WeatherCondition.DRIZZLE, "Light freezing drizzle", "cloud.sleet.fill", "cloud.sleet.fill"),
    57: (WeatherCondition.DRIZZLE, "Freezing drizzle", "cloud.sleet.fill", "cloud.sleet.fill"),
    61: (WeatherCondition.RAIN, "Slight rain", "cloud.rain.fill", "cloud.rain.fill"),
    63: (WeatherCondition.RAIN, "Rain", "cloud.rain.fill", "cloud.rain.fill"),
    65: (WeatherCondition.RAIN, "Heavy rain", "cloud.heavyrain.fill", "cloud.heavyrain.fill"),
    66: (WeatherCondition.RAIN, "Light freezing rain", "cloud.sleet.fill", "cloud.sleet.fill"),
    67: (WeatherCondition.RAIN, "Freezing rain", "cloud.sleet.fill", "cloud.sleet.fill"),
    71: (WeatherCondition.SNOW, "Slight snow", "cloud.snow.fill", "cloud.snow.fill"),
    73: (WeatherCondition.SNOW, "Snow", "cloud.snow.fill", "cloud.snow.fill"),
    75: (WeatherCondition.SNOW, "Heavy snow", "snowflake", "snowflake"),
    77: (WeatherCondition.SNOW, "Snow grains", "cloud.snow.fill", "cloud.snow.fill"),
    80: (WeatherCondition.RAIN, "Slight rain showers", "cloud.sun.rain.fill", "cloud.moon.rain.fill"),
    81: (WeatherCondition.RAIN, "Rain showers", "cloud.sun.rain.fill", "cloud.moon.rain.fill"),
    82: (WeatherCondition.RAIN, "Violent rain showers", "cloud.heavyrain.fill", "cloud.heavyrain.fill"),
    85: (WeatherCondition.SNOW, "Slight snow showers", "cloud.snow.fill", "cloud.snow.fill"),
    86: (WeatherCondition.SNOW, "Heavy snow showers", "cloud.snow.fill", "cloud.snow.fill"),
    95: (WeatherCondition.THUNDERSTORM, "Thunderstorm", "cloud.bolt.fill", "cloud.bolt.fill"),
    96: (WeatherCondition.THUNDERSTORM, "Thunderstorm with hail", "cloud.bolt.rain.fill", "cloud.bolt.rain.fill"),
    99: (WeatherCondition.THUNDERSTORM, "Thunderstorm with heavy hail", "cloud.bolt.rain.fill", "cloud.bolt.rain.fill"),
}

CONDITION_COLORS: dict[WeatherCondition, str] = {
    WeatherCondition.CLEAR: "#FFD700",
    WeatherCondition.CLOUDY: "#87CEEB",
    WeatherCondition.FOG: "#B0C4DE",
    WeatherCondition.DRIZZLE: "#778899",
    WeatherCondition.RAIN: "#4682B4",
    WeatherCondition.SNOW: "#E0FFFF",
    WeatherCondition.THUNDERSTORM: "#483D8B",
    WeatherCondition.UNKNOWN: "#808080",
}

_UNKNOWN_ICON = "questionmark.circle.fill"


def _lookup(code: int | None) -> tuple[WeatherCondition, str, str, str] | None:
    if code is None or isinstance(code, bool):
        return None
    return WEATHER_CODES.get(code)


def classify(code: int | None) -> WeatherCondition:
    """Map a weather code to its condition. Never raises."""
    entry = _lookup(code)
    if entry is None:
        return WeatherCondition.UNKNOWN
    return entry[0]


def describe(code: int | None, is_day: bool = True) -> ConditionInfo:
    """Full display info for a weather code, with day/night icon variants."""
    entry = _lookup(code)
    if entry is None:
        return ConditionInfo(
            code=code,
            condition=WeatherCondition.UNKNOWN,
            description="Unknown",
            icon=_UNKNOWN_ICON,
            color=CONDITION_COLORS[WeatherCondition.UNKNOWN],
        )
    condition, description, day_icon, night_icon = entry
    return ConditionInfo(
        code=code,
        condition=condition,
        description=description,
        icon=day_icon if is_day else night_icon,
        color=CONDITION_COLORS[condition],
    )


def codes_for(condition: WeatherCondition) -> list[int]:
    """All codes that classify as the given condition, ascending."""
    return sorted(c for c, entry in WEATHER_CODES.items() if entry[0] == condition)
