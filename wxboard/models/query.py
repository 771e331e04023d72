"""Forecast request parameters."""

import re
from dataclasses import dataclass

from wxboard.config.schema import DashboardConfig
from wxboard.errors import InvalidRequest

MAX_FORECAST_DAYS = 16

_VARIABLE_RE = re.compile(r"^[a-z0-9_]+$")


@dataclass(frozen=True)
class ForecastQuery:
    latitude: float
    longitude: float
    current: tuple[str, ...] = ()
    hourly: tuple[str, ...] = ()
    daily: tuple[str, ...] = ()
    timezone: str = "auto"
    forecast_days: int = 7

    @classmethod
    def from_config(cls, config: DashboardConfig) -> "ForecastQuery":
        return cls(
            latitude=config.location.latitude,
            longitude=config.location.longitude,
            current=tuple(config.forecast.current),
            hourly=tuple(config.forecast.hourly),
            daily=tuple(config.forecast.daily),
            timezone=config.location.timezone,
            forecast_days=config.forecast.forecast_days,
        )

    def requested_sections(self) -> dict[str, tuple[str, ...]]:
        """Non-empty variable groups keyed by section name."""
        sections = {
            "current": self.current,
            "hourly": self.hourly,
            "daily": self.daily,
        }
        return {name: names for name, names in sections.items() if names}

    def validate(self) -> None:
        """Raise InvalidRequest if the query cannot form a sensible request."""
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidRequest(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidRequest(f"Longitude out of range: {self.longitude}")
        if not 1 <= self.forecast_days <= MAX_FORECAST_DAYS:
            raise InvalidRequest(
                f"forecast_days must be between 1 and {MAX_FORECAST_DAYS} "
                f"(got {self.forecast_days})"
            )
        if not self.timezone or not self.timezone.strip():
            raise InvalidRequest("Timezone must not be empty")

        sections = self.requested_sections()
        if not sections:
            raise InvalidRequest("At least one of current/hourly/daily is required")
        for section, names in sections.items():
            for name in names:
                if not _VARIABLE_RE.match(name):
                    raise InvalidRequest(
                        f"Invalid {section} variable name: {name!r}"
                    )

    def to_params(self) -> dict[str, str | int | float]:
        """Query parameters in the exact shape the Open-Meteo API expects."""
        params: dict[str, str | int | float] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        for section, names in self.requested_sections().items():
            params[section] = ",".join(names)
        params["timezone"] = self.timezone
        params["forecast_days"] = self.forecast_days
        return params
