"""Pydantic models of the Open-Meteo forecast JSON.

Sections are columnar: ``hourly`` and ``daily`` hold a ``time`` array plus one
array per requested variable, aligned by index. Variable names depend on the
request, so they are kept as extra fields rather than declared one by one.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class RawSeries(BaseModel):
    """Parallel arrays for one forecast section (hourly or daily)."""

    model_config = ConfigDict(extra="allow", frozen=True)

    time: list[str | None]

    @model_validator(mode="after")
    def _columns_are_arrays(self) -> "RawSeries":
        for name, value in (self.model_extra or {}).items():
            if not isinstance(value, list):
                raise ValueError(f"column {name!r} must be an array")
        return self

    def columns(self) -> dict[str, list[Any]]:
        """Every value array except ``time``."""
        return dict(self.model_extra or {})

    def lengths(self) -> dict[str, int]:
        lengths = {"time": len(self.time)}
        lengths.update({name: len(values) for name, values in self.columns().items()})
        return lengths


class RawCurrent(BaseModel):
    """Scalar ``current`` section."""

    model_config = ConfigDict(extra="allow", frozen=True)

    time: str
    interval: int | None = None

    def values(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class RawForecastResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    elevation: float | None = None
    generationtime_ms: float | None = None
    utc_offset_seconds: int = 0
    timezone: str = "GMT"
    timezone_abbreviation: str | None = None

    current: RawCurrent | None = None
    current_units: dict[str, str] = {}
    hourly: RawSeries | None = None
    hourly_units: dict[str, str] = {}
    daily: RawSeries | None = None
    daily_units: dict[str, str] = {}

    def section(self, name: str) -> RawSeries | RawCurrent | None:
        if name not in ("current", "hourly", "daily"):
            raise KeyError(f"Unknown forecast section: {name}")
        return getattr(self, name)

    def missing_variables(self, section: str, names: tuple[str, ...]) -> list[str]:
        """Requested variables absent from a section of this response."""
        data = self.section(section)
        if data is None:
            return list(names)
        if isinstance(data, RawCurrent):
            present = data.values()
        else:
            present = data.columns()
        return [n for n in names if n not in present]
