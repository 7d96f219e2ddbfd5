"""
Weather data module - fetches Open-Meteo forecasts and converts them into
the WeatherInput snapshot the engine consumes.

The engine never calls out to the network; callers resolve a snapshot here
first. Missing provider fields raise WeatherDataError instead of being guessed,
except solar radiation, which falls back to a seasonal monthly estimate and is
flagged on the snapshot.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import pandas as pd
import requests

from .config import WEATHER, WeatherConfig
from .errors import WeatherDataError
from .inputs import WeatherInput

log = logging.getLogger(__name__)

HOURLY_FIELDS = ("temperature_2m", "relative_humidity_2m", "precipitation")
DAILY_FIELDS = ("temperature_2m_max", "temperature_2m_min", "shortwave_radiation_sum")


def estimated_radiation(month: int, config: WeatherConfig = WEATHER) -> float:
    """Seasonal solar radiation (MJ/m²/day) for a calendar month 1-12."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be within 1-12, got {month}")
    return float(config.monthly_radiation_mj[month - 1])


def _missing(value) -> bool:
    return value is None or bool(pd.isna(value))


def to_weather_input(max_temperature_c: float, min_temperature_c: float, humidity_pct: float,
                     is_raining: bool, rain_forecast: bool,
                     radiation_mj: Optional[float] = None,
                     now: Optional[datetime] = None,
                     config: WeatherConfig = WEATHER) -> WeatherInput:
    """
    Build a WeatherInput from provider values.

    Args:
        radiation_mj: measured shortwave radiation sum; None applies the
                      monthly fallback for `now` and flags the snapshot
        now: local time at the field (defaults to the current time)
    """
    now = now or datetime.now()
    missing = [name for name, value in (("max_temperature_c", max_temperature_c),
                                        ("min_temperature_c", min_temperature_c),
                                        ("relative_humidity_pct", humidity_pct))
               if _missing(value)]
    if missing:
        raise WeatherDataError(f"Weather snapshot incomplete: missing {', '.join(missing)}", missing)

    estimated = _missing(radiation_mj)
    if estimated:
        radiation_mj = estimated_radiation(now.month, config)
        log.warning(f"Solar radiation unavailable; using seasonal estimate {radiation_mj} MJ/m²/day")

    return WeatherInput(
        max_temperature_c=float(max_temperature_c),
        min_temperature_c=float(min_temperature_c),
        solar_radiation_mj_m2_day=float(radiation_mj),
        relative_humidity_pct=float(humidity_pct),
        is_raining_now=bool(is_raining),
        rain_forecast_later=bool(rain_forecast),
        hour_of_day=now.hour,
        radiation_estimated=estimated,
    )


def simulated_weather_input(is_raining: bool = False, high_humidity: bool = False,
                            now: Optional[datetime] = None) -> WeatherInput:
    """Fixed warm-day snapshot for demos and tests without network access."""
    now = now or datetime.now()
    return WeatherInput(
        max_temperature_c=32.0,
        min_temperature_c=26.0,
        solar_radiation_mj_m2_day=20.0,
        relative_humidity_pct=85.0 if high_humidity else 65.0,
        is_raining_now=is_raining,
        rain_forecast_later=False,
        hour_of_day=now.hour,
    )


def fetch_open_meteo(lat: float, lon: float, config: WeatherConfig = WEATHER) -> Dict[str, Any]:
    """
    Fetch the raw Open-Meteo forecast payload for a location.

    Raises:
        WeatherDataError: on any HTTP or decoding failure
    """
    params = {
        "latitude": lat,
        "longitude": lon,
        "current_weather": "true",
        "hourly": ",".join(HOURLY_FIELDS),
        "daily": ",".join(DAILY_FIELDS),
        "timezone": "auto",
        "forecast_days": 2,
    }
    try:
        response = requests.get(config.open_meteo_url, params=params, timeout=config.timeout_s)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        log.error(f"Open-Meteo request failed for ({lat}, {lon}): {e}")
        raise WeatherDataError(f"Weather service unavailable: {e}") from e
    except ValueError as e:
        log.error(f"Open-Meteo returned invalid JSON for ({lat}, {lon}): {e}")
        raise WeatherDataError("Weather service returned an invalid payload") from e


def hourly_frame(payload: Dict[str, Any]) -> pd.DataFrame:
    """Hourly forecast as a DataFrame indexed by local timestamp."""
    hourly = payload.get("hourly") or {}
    missing = [f for f in ("time",) + HOURLY_FIELDS if f not in hourly]
    if missing:
        raise WeatherDataError(f"Hourly forecast missing {', '.join(missing)}", missing)

    df = pd.DataFrame({f: hourly[f] for f in ("time",) + HOURLY_FIELDS})
    df["time"] = pd.to_datetime(df["time"])
    return df.set_index("time").sort_index()


def daily_frame(payload: Dict[str, Any]) -> pd.DataFrame:
    """Daily forecast as a DataFrame indexed by local date."""
    daily = payload.get("daily") or {}
    if "time" not in daily:
        raise WeatherDataError("Daily forecast missing time", ("time",))

    df = pd.DataFrame({f: daily.get(f, [None] * len(daily["time"])) for f in ("time",) + DAILY_FIELDS})
    df["time"] = pd.to_datetime(df["time"]).dt.date
    return df.set_index("time")


def get_forecast_summary(hourly: pd.DataFrame, hours: int = 24) -> Dict[str, float]:
    """Generate summary statistics for forecast period."""
    df = hourly.head(hours)
    return {
        "total_precipitation_mm": float(df["precipitation"].sum()),
        "avg_temp_c": float(df["temperature_2m"].mean()),
        "max_temp_c": float(df["temperature_2m"].max()),
        "min_temp_c": float(df["temperature_2m"].min()),
        "avg_humidity_pct": float(df["relative_humidity_2m"].mean()),
        "hours_with_rain": int((df["precipitation"] > 0).sum()),
    }


def _reference_time(payload: Dict[str, Any], now: Optional[datetime]) -> datetime:
    if now is None:
        current = (payload.get("current_weather") or {}).get("time")
        now = pd.Timestamp(current).to_pydatetime() if current else datetime.now()
    # Provider timestamps are naive local times (timezone=auto)
    return now.replace(tzinfo=None, minute=0, second=0, microsecond=0)


def weather_input_from_open_meteo(payload: Dict[str, Any], now: Optional[datetime] = None,
                                  config: WeatherConfig = WEATHER) -> WeatherInput:
    """
    Convert an Open-Meteo payload into a WeatherInput for the hour `now`.

    Raining now: precipitation in the current hour above the configured
    threshold. Rain later: any precipitation in the following hours of the
    forecast horizon.
    """
    ref = _reference_time(payload, now)
    hourly = hourly_frame(payload)
    upcoming = hourly[hourly.index >= pd.Timestamp(ref)]
    if upcoming.empty:
        raise WeatherDataError(f"No hourly forecast at or after {ref.isoformat()}")

    current = upcoming.iloc[0]
    later = upcoming.iloc[1:1 + config.forecast_hours]
    precipitation_now = current["precipitation"]
    if pd.isna(precipitation_now):
        raise WeatherDataError("Current-hour precipitation missing", ("precipitation",))

    daily = daily_frame(payload)
    day = daily.loc[ref.date()] if ref.date() in daily.index else daily.iloc[0]

    return to_weather_input(
        max_temperature_c=None if pd.isna(day["temperature_2m_max"]) else float(day["temperature_2m_max"]),
        min_temperature_c=None if pd.isna(day["temperature_2m_min"]) else float(day["temperature_2m_min"]),
        humidity_pct=None if pd.isna(current["relative_humidity_2m"]) else float(current["relative_humidity_2m"]),
        is_raining=float(precipitation_now) > config.rain_now_threshold_mm,
        rain_forecast=bool((later["precipitation"].fillna(0) > 0).any()),
        radiation_mj=None if pd.isna(day["shortwave_radiation_sum"]) else float(day["shortwave_radiation_sum"]),
        now=ref,
        config=config,
    )


def fetch_weather_input(lat: float, lon: float, now: Optional[datetime] = None,
                        config: WeatherConfig = WEATHER) -> WeatherInput:
    """Fetch Open-Meteo and resolve the snapshot for the current hour."""
    return weather_input_from_open_meteo(fetch_open_meteo(lat, lon, config), now=now, config=config)
