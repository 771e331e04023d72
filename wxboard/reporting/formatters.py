"""Output formatters for normalized forecasts and screen states."""

import json
from datetime import datetime

from wxboard.derive.conditions import describe
from wxboard.derive.display import (
    compass_label,
    daylight_hours,
    daylight_progress,
    feels_like_text,
    format_clock,
    format_measure,
    uv_risk,
)
from wxboard.models.forecast import ForecastRecord, NormalizedForecast
from wxboard.pipeline.screen import Failed, Idle, Loaded, Loading, ScreenState


def format_forecast_text(f: NormalizedForecast, now: datetime | None = None) -> str:
    """Plain text dashboard for terminals and logs."""
    if now is None:
        now = f.observed_at
    lines = [f"=== {f.location_name or 'Forecast'} ({f.timezone}) ==="]

    if f.current is not None:
        c = f.current
        temp_unit = f.unit("current", "temperature_2m", "°C")
        wind_unit = f.unit("current", "wind_speed_10m", "km/h")
        info = describe(c.weather_code, is_day=c.is_day)
        lines.append(f"Observed: {c.time.strftime('%Y-%m-%d %H:%M')}")
        lines.append(
            f"Now: {info.description}, "
            f"{format_measure(c.get('temperature_2m'), temp_unit)}"
        )
        lines.append(
            feels_like_text(
                c.get("temperature_2m"), c.get("apparent_temperature"), temp_unit
            )
        )
        lines.append(
            f"Humidity: {format_measure(c.get('relative_humidity_2m'), '%', 0)} | "
            f"Wind: {format_measure(c.get('wind_speed_10m'), ' ' + wind_unit)} "
            f"{compass_label(c.get('wind_direction_10m'))}"
        )

    today = f.today
    if today is not None:
        uv = today.get("uv_index_max")
        if uv is None and f.current is not None:
            uv = f.current.get("uv_index")
        lines.append(f"UV: {format_measure(uv)} ({uv_risk(uv)})")
        sunrise, sunset = today.get("sunrise"), today.get("sunset")
        if isinstance(sunrise, datetime) and isinstance(sunset, datetime):
            line = (
                f"Sun: {format_clock(sunrise)} - {format_clock(sunset)} "
                f"({daylight_hours(sunrise, sunset):.1f}h daylight)"
            )
            if now is not None:
                if now.tzinfo is None:
                    now = now.replace(tzinfo=sunrise.tzinfo)
                progress = daylight_progress(now, sunrise, sunset)
                line += f" | {int(progress * 100)}% elapsed"
            lines.append(line)

    if f.hourly:
        lines.append("")
        lines.append("Hourly:")
        unit = f.unit("hourly", "temperature_2m", "°C")
        for r in f.hourly:
            lines.append(
                f"  {format_clock(r.time)}  {format_measure(r.get('temperature_2m'), unit):>8}  "
                f"{describe(r.weather_code).description}"
                + _precip_suffix(r, "precipitation_probability")
            )

    if f.daily:
        lines.append("")
        lines.append("Daily:")
        unit = f.unit("daily", "temperature_2m_max", "°C")
        for r in f.daily:
            lines.append(
                f"  {r.time.strftime('%a %m/%d')}  "
                f"{format_measure(r.get('temperature_2m_min'), unit)} / "
                f"{format_measure(r.get('temperature_2m_max'), unit)}  "
                f"{describe(r.weather_code).description}"
                + _precip_suffix(r, "precipitation_probability_max")
            )

    return "\n".join(lines)


def _precip_suffix(r: ForecastRecord, key: str) -> str:
    value = r.get(key)
    if value is None:
        return ""
    return f"  {value}% precip"


def _record_json(r: ForecastRecord) -> dict:
    values = {
        k: v.isoformat() if isinstance(v, datetime) else v
        for k, v in r.values.items()
    }
    return {"time": r.time.isoformat(), "condition": str(r.condition), **values}


def format_forecast_json(f: NormalizedForecast) -> str:
    """JSON document for programmatic consumption."""
    data = {
        "location": f.location_name,
        "latitude": f.latitude,
        "longitude": f.longitude,
        "elevation": f.elevation,
        "timezone": f.timezone,
        "observed_at": f.observed_at.isoformat() if f.observed_at else None,
        "current": _record_json(f.current) if f.current else None,
        "hourly": [_record_json(r) for r in f.hourly],
        "daily": [_record_json(r) for r in f.daily],
        "units": f.units,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_state_text(state: ScreenState) -> str:
    if isinstance(state, Idle):
        return "Idle"
    if isinstance(state, Loading):
        return "Loading..."
    if isinstance(state, Loaded):
        f = state.forecast
        return (
            f"Loaded {f.location_name}: {len(f.hourly)} hours, "
            f"{len(f.daily)} days"
        )
    if isinstance(state, Failed):
        return f"Failed: {state.message} (retry to try again)"
    raise TypeError(f"Unknown screen state: {state!r}")
