"""Recoverable failures raised by the forecast client.

Every error carries a human-readable ``message`` suitable for showing next to
a retry button. None of them are retried automatically.
"""


class ForecastError(Exception):
    """Base class for forecast fetch failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(ForecastError):
    """The query could not be turned into a valid request URL."""


class UpstreamError(ForecastError):
    """The API answered with a status outside 200-299."""

    def __init__(self, status: int, reason: str | None = None):
        message = f"Weather API returned HTTP {status}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.status = status
        self.reason = reason


class DecodeError(ForecastError):
    """The response body did not match the expected forecast schema."""


class TransportError(ForecastError):
    """Network-level failure: timeout, DNS, refused or reset connection."""
