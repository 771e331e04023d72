"""Open-Meteo forecast API client.

One GET per call, no caching and no retries: every failure is mapped onto a
ForecastError subclass and left to the caller.
"""

import logging

import httpx
from pydantic import ValidationError

from wxboard.config.defaults import DEFAULT_BASE_URL, DEFAULT_USER_AGENT
from wxboard.errors import DecodeError, InvalidRequest, TransportError, UpstreamError
from wxboard.models.query import ForecastQuery
from wxboard.models.raw import RawForecastResponse

logger = logging.getLogger(__name__)


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        http: httpx.Client | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.http = http

    def build_url(self, query: ForecastQuery) -> httpx.URL:
        """Validate the query and render the full request URL."""
        query.validate()
        try:
            return httpx.URL(self.base_url, params=query.to_params())
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise InvalidRequest(f"Could not build API URL: {e}") from e

    def get_forecast(self, query: ForecastQuery) -> RawForecastResponse:
        """Fetch and decode a forecast.

        Raises InvalidRequest, TransportError, UpstreamError or DecodeError.
        """
        url = self.build_url(query)
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        try:
            resp = self._get(url, headers)
        except httpx.RequestError as e:
            logger.error("Open-Meteo request failed for %s: %s", url, e)
            raise TransportError(f"Could not reach the weather API: {e}") from e

        if not 200 <= resp.status_code <= 299:
            reason = _error_reason(resp)
            logger.error(
                "Open-Meteo returned %d for %s: %s",
                resp.status_code, url, reason or resp.text[:300],
            )
            raise UpstreamError(resp.status_code, reason)

        return _decode(resp, query)

    def _get(self, url: httpx.URL, headers: dict[str, str]) -> httpx.Response:
        if self.http is not None:
            return self.http.get(url, headers=headers, timeout=self.timeout)
        return httpx.get(url, headers=headers, timeout=self.timeout)


def _decode(resp: httpx.Response, query: ForecastQuery) -> RawForecastResponse:
    try:
        data = resp.json()
    except ValueError as e:
        logger.error("Open-Meteo body is not JSON: %s", e)
        raise DecodeError(f"Weather API returned invalid JSON: {e}") from e

    try:
        raw = RawForecastResponse.model_validate(data)
    except ValidationError as e:
        logger.error(
            "Open-Meteo body does not match schema (%d errors)", e.error_count()
        )
        raise DecodeError(f"Unexpected weather API response: {e}") from e

    for section, names in query.requested_sections().items():
        missing = raw.missing_variables(section, names)
        if missing:
            logger.error("Open-Meteo %s section missing %s", section, missing)
            raise DecodeError(
                f"Weather API response is missing {section} fields: "
                f"{', '.join(missing)}"
            )

    return raw


def _error_reason(resp: httpx.Response) -> str | None:
    """The ``reason`` Open-Meteo puts in error bodies, if any."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("reason"), str):
        return data["reason"]
    return None
