"""Fetch pipeline: config -> query -> HTTP -> normalized forecast."""

import logging
import time
from datetime import datetime

from wxboard.config.loader import config_hash
from wxboard.config.schema import DashboardConfig
from wxboard.ingest.normalizer import ForecastNormalizer
from wxboard.ingest.openmeteo_client import OpenMeteoClient
from wxboard.models.forecast import NormalizedForecast
from wxboard.models.query import ForecastQuery

logger = logging.getLogger(__name__)


class ForecastPipeline:
    def __init__(
        self,
        config: DashboardConfig,
        client: OpenMeteoClient | None = None,
        normalizer: ForecastNormalizer | None = None,
    ):
        self.config = config
        self.config_hash = config_hash(config)
        self.client = client or OpenMeteoClient(
            base_url=config.api.base_url,
            timeout=config.api.timeout_seconds,
            user_agent=config.api.user_agent,
        )
        self.normalizer = normalizer or ForecastNormalizer(
            hourly_window=config.forecast.hourly_window,
            daily_cap=config.forecast.daily_cap,
        )

    def query(self) -> ForecastQuery:
        return ForecastQuery.from_config(self.config)

    def run(self, reference: datetime | None = None) -> NormalizedForecast:
        """Fetch and normalize one forecast. ForecastErrors propagate."""
        location = self.config.location
        logger.info(
            "Fetching forecast for %s (%.4f, %.4f), config %s",
            location.name, location.latitude, location.longitude, self.config_hash,
        )
        started = time.monotonic()

        raw = self.client.get_forecast(self.query())
        forecast = self.normalizer.normalize(raw, location.name, reference)

        logger.info(
            "Forecast for %s: %d hourly, %d daily records in %.2fs",
            location.name, len(forecast.hourly), len(forecast.daily),
            time.monotonic() - started,
        )
        return forecast
