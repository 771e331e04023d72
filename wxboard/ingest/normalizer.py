"""Normalizer: turns columnar Open-Meteo sections into per-timestep records.

Parallel arrays are zipped up to the shortest array's length; anything past
that is dropped rather than treated as an error. Records whose timestamps do
not parse are dropped individually.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from wxboard.models.forecast import CurrentConditions, ForecastRecord, NormalizedForecast
from wxboard.models.raw import RawCurrent, RawForecastResponse, RawSeries

logger = logging.getLogger(__name__)

TIMESTAMP_FORMATS = ("%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d")

# Columns (besides ``time``) that carry timestamps rather than measurements
TIMESTAMP_COLUMNS = ("sunrise", "sunset")

DEFAULT_HOURLY_WINDOW = 24
DEFAULT_DAILY_CAP = 7


def parse_timestamp(raw: object, tz: tzinfo) -> datetime | None:
    """Parse an API timestamp, attaching ``tz`` when it carries no offset."""
    if not isinstance(raw, str):
        return None
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=tz)
        except ValueError:
            continue
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt


def response_tz(raw: RawForecastResponse) -> tzinfo:
    """Zone for the response's local timestamps.

    The IANA name is preferred so that offsets follow DST changes inside the
    forecast range; ``utc_offset_seconds`` is only a single offset for the
    whole response and is used when the name does not resolve.
    """
    try:
        return ZoneInfo(raw.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug(
            "Unknown time zone %r; using fixed offset %ds",
            raw.timezone, raw.utc_offset_seconds,
        )
        return timezone(timedelta(seconds=raw.utc_offset_seconds))


def common_length(series: RawSeries) -> int:
    return min(series.lengths().values())


def normalize_section(
    series: RawSeries,
    tz: tzinfo,
    timestamp_columns: Iterable[str] = TIMESTAMP_COLUMNS,
) -> tuple[ForecastRecord, ...]:
    """Zip a section's parallel arrays into records.

    Output length is at most ``common_length(series)``; it is shorter only by
    the records dropped for unparseable timestamps.
    """
    length = common_length(series)
    columns = series.columns()
    stamp_columns = [c for c in timestamp_columns if c in columns]

    if any(n != length for n in series.lengths().values()):
        logger.debug(
            "Section arrays have unequal lengths %s; truncating to %d",
            series.lengths(), length,
        )

    records: list[ForecastRecord] = []
    for i in range(length):
        when = parse_timestamp(series.time[i], tz)
        if when is None:
            logger.debug("Dropping record %d: unparseable time %r", i, series.time[i])
            continue

        values = {name: column[i] for name, column in columns.items()}
        dropped = False
        for name in stamp_columns:
            parsed = parse_timestamp(values[name], tz)
            if parsed is None:
                logger.debug(
                    "Dropping record %d: unparseable %s %r", i, name, values[name]
                )
                dropped = True
                break
            values[name] = parsed
        if dropped:
            continue

        records.append(ForecastRecord(time=when, values=values))
    return tuple(records)


def normalize_current(current: RawCurrent, tz: tzinfo) -> CurrentConditions | None:
    when = parse_timestamp(current.time, tz)
    if when is None:
        logger.warning("Could not parse observation time: %r", current.time)
        return None
    return CurrentConditions(time=when, values=current.values())


def window_hourly(
    records: Sequence[ForecastRecord],
    reference: datetime | None,
    limit: int = DEFAULT_HOURLY_WINDOW,
) -> tuple[ForecastRecord, ...]:
    """Records at or after ``reference``, truncated to ``limit`` entries.

    A reference later than every record gives an empty window; the window
    never falls back to the start of the series.
    """
    if reference is not None:
        records = [r for r in records if r.time >= reference]
    return tuple(records[:limit])


def cap_daily(
    records: Sequence[ForecastRecord], limit: int = DEFAULT_DAILY_CAP
) -> tuple[ForecastRecord, ...]:
    return tuple(records[:limit])


class ForecastNormalizer:
    def __init__(
        self,
        hourly_window: int = DEFAULT_HOURLY_WINDOW,
        daily_cap: int = DEFAULT_DAILY_CAP,
    ):
        self.hourly_window = hourly_window
        self.daily_cap = daily_cap

    def normalize(
        self,
        raw: RawForecastResponse,
        location_name: str = "",
        reference: datetime | None = None,
    ) -> NormalizedForecast:
        """Build a NormalizedForecast from a decoded response.

        Hourly records before ``reference`` are skipped; when no reference is
        given the observation time of the ``current`` section is used.
        """
        tz = response_tz(raw)

        current = None
        if raw.current is not None:
            current = normalize_current(raw.current, tz)
        observed_at = current.time if current is not None else None
        if reference is None:
            reference = observed_at
        elif reference.tzinfo is None:
            # naive references are read as forecast-local wall time
            reference = reference.replace(tzinfo=tz)

        hourly: tuple[ForecastRecord, ...] = ()
        if raw.hourly is not None:
            hourly = window_hourly(
                normalize_section(raw.hourly, tz), reference, self.hourly_window
            )

        daily: tuple[ForecastRecord, ...] = ()
        if raw.daily is not None:
            daily = cap_daily(normalize_section(raw.daily, tz), self.daily_cap)

        return NormalizedForecast(
            location_name=location_name,
            latitude=raw.latitude,
            longitude=raw.longitude,
            elevation=raw.elevation,
            timezone=raw.timezone,
            observed_at=observed_at,
            current=current,
            hourly=hourly,
            daily=daily,
            units={
                "current": dict(raw.current_units),
                "hourly": dict(raw.hourly_units),
                "daily": dict(raw.daily_units),
            },
        )
