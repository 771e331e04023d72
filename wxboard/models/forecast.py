"""Normalized forecast records: one record per timestep."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from wxboard.derive.conditions import WeatherCondition, classify


@dataclass(frozen=True)
class ForecastRecord:
    time: datetime
    values: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    @property
    def day(self) -> date:
        return self.time.date()

    @property
    def weather_code(self) -> int | None:
        return self.values.get("weather_code")

    @property
    def condition(self) -> WeatherCondition:
        return classify(self.weather_code)


@dataclass(frozen=True)
class CurrentConditions(ForecastRecord):
    @property
    def is_day(self) -> bool:
        # Open-Meteo reports 1 for day, 0 for night; assume day when absent
        return self.values.get("is_day", 1) == 1


@dataclass(frozen=True)
class NormalizedForecast:
    location_name: str
    latitude: float
    longitude: float
    elevation: float | None
    timezone: str
    observed_at: datetime | None
    current: CurrentConditions | None
    hourly: tuple[ForecastRecord, ...]
    daily: tuple[ForecastRecord, ...]
    units: dict[str, dict[str, str]] = field(default_factory=dict)

    def unit(self, section: str, name: str, default: str = "") -> str:
        return self.units.get(section, {}).get(name, default)

    @property
    def today(self) -> ForecastRecord | None:
        return self.daily[0] if self.daily else None
