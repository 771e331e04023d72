"""Screen state for one forecast dashboard, independent of any UI toolkit.

A screen moves through Idle -> Loading -> Loaded | Failed. Only one fetch is
in flight at a time: a refresh requested while another is running is ignored
and returns the current Loading state. After ``close()`` any fetch that
completes is discarded without touching the state.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime

from wxboard.errors import ForecastError
from wxboard.models.forecast import NormalizedForecast
from wxboard.pipeline.forecast_pipeline import ForecastPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded:
    forecast: NormalizedForecast


@dataclass(frozen=True)
class Failed:
    error: ForecastError
    message: str


ScreenState = Idle | Loading | Loaded | Failed


class ForecastScreen:
    def __init__(self, pipeline: ForecastPipeline):
        self.pipeline = pipeline
        self._state: ScreenState = Idle()
        self._lock = threading.Lock()
        self._in_flight = False
        self._closed = False

    @property
    def state(self) -> ScreenState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def refresh(self, reference: datetime | None = None) -> ScreenState:
        """Run one fetch and return the resulting state."""
        with self._lock:
            if self._closed:
                logger.debug("Refresh on closed screen ignored")
                return self._state
            if self._in_flight:
                logger.info("Refresh already in flight; ignoring")
                return self._state
            self._in_flight = True
            previous = self._state
            self._state = Loading()

        try:
            result: ScreenState = Loaded(self.pipeline.run(reference))
        except ForecastError as e:
            logger.warning("Forecast refresh failed: %s", e.message)
            result = Failed(error=e, message=e.message)
        except BaseException:
            with self._lock:
                self._in_flight = False
                if not self._closed:
                    self._state = previous
            raise

        with self._lock:
            self._in_flight = False
            if self._closed:
                logger.debug("Screen closed mid-request; discarding result")
                return self._state
            self._state = result
            return result

    def close(self) -> None:
        with self._lock:
            self._closed = True
