"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from wxboard.config.defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_CURRENT_VARIABLES,
    DEFAULT_DAILY_VARIABLES,
    DEFAULT_HOURLY_VARIABLES,
    DEFAULT_USER_AGENT,
)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = "Sapporo"
    latitude: float = Field(default=43.0642, ge=-90.0, le=90.0)
    longitude: float = Field(default=141.3469, ge=-180.0, le=180.0)
    timezone: str = Field(default="Asia/Tokyo", min_length=1)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    user_agent: str = DEFAULT_USER_AGENT


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_days: int = Field(default=10, ge=1, le=16)
    hourly_window: int = Field(default=24, ge=1)
    daily_cap: int = Field(default=7, ge=1)
    current: list[str] = Field(default_factory=lambda: list(DEFAULT_CURRENT_VARIABLES))
    hourly: list[str] = Field(default_factory=lambda: list(DEFAULT_HOURLY_VARIABLES))
    daily: list[str] = Field(default_factory=lambda: list(DEFAULT_DAILY_VARIABLES))


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    location: LocationConfig = LocationConfig()
    api: ApiConfig = ApiConfig()
    forecast: ForecastConfig = ForecastConfig()
