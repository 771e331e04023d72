"""Tests for the Open-Meteo client with mocked httpx."""

from unittest.mock import patch

import httpx
import pytest
import respx

from wxboard.config.schema import DashboardConfig
from wxboard.errors import (
    DecodeError,
    ForecastError,
    InvalidRequest,
    TransportError,
    UpstreamError,
)
from wxboard.ingest.openmeteo_client import OpenMeteoClient
from wxboard.models.query import ForecastQuery
from wxboard.models.raw import RawForecastResponse

BASE_URL = "https://test-meteo.example.com/v1/forecast"


@pytest.fixture
def client() -> OpenMeteoClient:
    return OpenMeteoClient(base_url=BASE_URL, timeout=2.0)


@pytest.fixture
def query() -> ForecastQuery:
    return ForecastQuery.from_config(DashboardConfig())


class TestGetForecast:
    @respx.mock
    def test_success(self, client: OpenMeteoClient, query: ForecastQuery, sapporo_payload: dict):
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, json=sapporo_payload))

        raw = client.get_forecast(query)
        assert isinstance(raw, RawForecastResponse)
        assert raw.hourly is not None
        assert len(raw.hourly.time) == 48

    @respx.mock
    def test_query_parameters(self, client: OpenMeteoClient, query: ForecastQuery, sapporo_payload: dict):
        route = respx.get(BASE_URL).mock(
            return_value=httpx.Response(200, json=sapporo_payload)
        )

        client.get_forecast(query)
        params = route.calls[0].request.url.params
        assert params["latitude"] == "43.0642"
        assert params["longitude"] == "141.3469"
        assert params["timezone"] == "Asia/Tokyo"
        assert params["forecast_days"] == "10"
        assert params["hourly"] == ",".join(query.hourly)
        assert params["daily"].startswith("weather_code,temperature_2m_max")
        assert "uv_index" in params["current"].split(",")

    @respx.mock
    def test_user_agent_header(self, client: OpenMeteoClient, query: ForecastQuery, sapporo_payload: dict):
        route = respx.get(BASE_URL).mock(
            return_value=httpx.Response(200, json=sapporo_payload)
        )

        client.get_forecast(query)
        assert "wxboard" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_injected_http_client(self, query: ForecastQuery, sapporo_payload: dict):
        route = respx.get(BASE_URL).mock(
            return_value=httpx.Response(200, json=sapporo_payload)
        )

        with httpx.Client() as http:
            raw = OpenMeteoClient(base_url=BASE_URL, http=http).get_forecast(query)
        assert raw.timezone == "Asia/Tokyo"
        assert route.call_count == 1


class TestUpstreamErrors:
    @respx.mock
    def test_404_is_upstream_error_without_decoding(self, client: OpenMeteoClient, query: ForecastQuery):
        respx.get(BASE_URL).mock(return_value=httpx.Response(404, text="Not Found"))

        with patch("wxboard.ingest.openmeteo_client._decode") as decode:
            with pytest.raises(UpstreamError) as exc_info:
                client.get_forecast(query)
        assert exc_info.value.status == 404
        decode.assert_not_called()

    @respx.mock
    def test_reason_from_error_body(self, client: OpenMeteoClient, query: ForecastQuery):
        respx.get(BASE_URL).mock(
            return_value=httpx.Response(
                400, json={"error": True, "reason": "Latitude must be in range of -90 to 90°."}
            )
        )

        with pytest.raises(UpstreamError) as exc_info:
            client.get_forecast(query)
        err = exc_info.value
        assert err.status == 400
        assert err.reason == "Latitude must be in range of -90 to 90°."
        assert "HTTP 400" in err.message
        assert "Latitude" in err.message

    @respx.mock
    def test_server_error_not_retried(self, client: OpenMeteoClient, query: ForecastQuery):
        route = respx.get(BASE_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(UpstreamError):
            client.get_forecast(query)
        assert route.call_count == 1

    @respx.mock
    def test_redirect_status_is_upstream_error(self, client: OpenMeteoClient, query: ForecastQuery):
        respx.get(BASE_URL).mock(return_value=httpx.Response(304))

        with pytest.raises(UpstreamError) as exc_info:
            client.get_forecast(query)
        assert exc_info.value.status == 304


class TestTransportErrors:
    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            httpx.RemoteProtocolError("connection reset"),
        ],
    )
    @respx.mock
    def test_request_errors(self, client: OpenMeteoClient, query: ForecastQuery, exc):
        route = respx.get(BASE_URL).mock(side_effect=exc)

        with pytest.raises(TransportError) as exc_info:
            client.get_forecast(query)
        assert isinstance(exc_info.value.__cause__, httpx.RequestError)
        assert route.call_count == 1


class TestDecodeErrors:
    @respx.mock
    def test_not_json(self, client: OpenMeteoClient, query: ForecastQuery):
        respx.get(BASE_URL).mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        with pytest.raises(DecodeError):
            client.get_forecast(query)

    @respx.mock
    def test_schema_mismatch(self, client: OpenMeteoClient, query: ForecastQuery):
        respx.get(BASE_URL).mock(
            return_value=httpx.Response(200, json={"hourly": {"time": "not-a-list"}})
        )

        with pytest.raises(DecodeError):
            client.get_forecast(query)

    @respx.mock
    def test_missing_requested_section(self, client: OpenMeteoClient, query: ForecastQuery, sapporo_payload: dict):
        del sapporo_payload["daily"]
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, json=sapporo_payload))

        with pytest.raises(DecodeError, match="daily"):
            client.get_forecast(query)

    @respx.mock
    def test_missing_requested_variable(self, client: OpenMeteoClient, query: ForecastQuery, sapporo_payload: dict):
        del sapporo_payload["hourly"]["wind_speed_10m"]
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, json=sapporo_payload))

        with pytest.raises(DecodeError, match="wind_speed_10m"):
            client.get_forecast(query)

    @respx.mock
    def test_short_arrays_are_not_a_decode_error(self, client: OpenMeteoClient, query: ForecastQuery, sapporo_payload: dict):
        sapporo_payload["hourly"]["weather_code"] = sapporo_payload["hourly"]["weather_code"][:10]
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, json=sapporo_payload))

        raw = client.get_forecast(query)
        assert raw.hourly.lengths()["weather_code"] == 10


class TestInvalidRequest:
    @respx.mock
    def test_no_request_sent(self, client: OpenMeteoClient):
        route = respx.get(BASE_URL).mock(return_value=httpx.Response(200, json={}))
        bad = ForecastQuery(latitude=95.0, longitude=0.0, hourly=("temperature_2m",))

        with pytest.raises(InvalidRequest):
            client.get_forecast(bad)
        assert not route.called

    def test_build_url(self, client: OpenMeteoClient, query: ForecastQuery):
        url = client.build_url(query)
        assert url.host == "test-meteo.example.com"
        assert url.path == "/v1/forecast"
        assert url.params["timezone"] == "Asia/Tokyo"

    def test_all_errors_share_base(self):
        for cls in (InvalidRequest, DecodeError, TransportError):
            assert issubclass(cls, ForecastError)
        assert isinstance(UpstreamError(500), ForecastError)
