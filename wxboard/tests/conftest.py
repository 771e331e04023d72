"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from wxboard.config.schema import DashboardConfig
from wxboard.models.raw import RawForecastResponse

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def sapporo_payload() -> dict:
    """Recorded-shape Open-Meteo response: 48 hourly and 10 daily entries."""
    with open(FIXTURE_DIR / "openmeteo_sapporo.json") as f:
        return json.load(f)


@pytest.fixture
def sapporo_raw(sapporo_payload: dict) -> RawForecastResponse:
    return RawForecastResponse.model_validate(sapporo_payload)


@pytest.fixture
def default_config() -> DashboardConfig:
    return DashboardConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "location": {
            "name": "Sendai",
            "latitude": 38.2682,
            "longitude": 140.8694,
            "timezone": "Asia/Tokyo",
        },
        "forecast": {"forecast_days": 5},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
