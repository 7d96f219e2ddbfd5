"""Boundary validation for recommendation inputs. Raises on the first offending field."""
import math
from datetime import date
from numbers import Integral, Real

from .errors import ValidationError
from .inputs import CropInput, SoilInput, WeatherInput


def _require_name(field: str, value) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must be a non-empty string", value)


def _require_number(field: str, value) -> float:
    # bool is an int subclass; True is not a temperature
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(field, "must be a number", value)
    if not math.isfinite(value):
        raise ValidationError(field, "must be finite", value)
    return float(value)


def _require_flag(field: str, value) -> None:
    if not isinstance(value, bool):
        raise ValidationError(field, "must be a boolean", value)


def validate_crop(crop: CropInput) -> None:
    _require_name("crop.name", crop.name)
    if not isinstance(crop.planting_date, date):
        raise ValidationError("crop.planting_date", "must be a date", crop.planting_date)


def validate_soil(soil: SoilInput) -> None:
    _require_name("soil.name", soil.name)
    if _require_number("soil.water_retention_capacity", soil.water_retention_capacity) <= 0:
        raise ValidationError("soil.water_retention_capacity", "must be > 0", soil.water_retention_capacity)
    interval = soil.irrigation_interval_days
    if isinstance(interval, bool) or not isinstance(interval, Integral) or interval <= 0:
        raise ValidationError("soil.irrigation_interval_days", "must be a positive integer", interval)


def validate_area(area_m2) -> None:
    if _require_number("area_m2", area_m2) <= 0:
        raise ValidationError("area_m2", "must be > 0", area_m2)


def validate_weather(weather: WeatherInput) -> None:
    t_max = _require_number("weather.max_temperature_c", weather.max_temperature_c)
    t_min = _require_number("weather.min_temperature_c", weather.min_temperature_c)
    if t_min > t_max:
        raise ValidationError("weather.min_temperature_c", "must be <= max_temperature_c", t_min)

    if _require_number("weather.solar_radiation_mj_m2_day", weather.solar_radiation_mj_m2_day) < 0:
        raise ValidationError("weather.solar_radiation_mj_m2_day", "must be >= 0",
                              weather.solar_radiation_mj_m2_day)

    humidity = _require_number("weather.relative_humidity_pct", weather.relative_humidity_pct)
    if not 0 <= humidity <= 100:
        raise ValidationError("weather.relative_humidity_pct", "must be within 0-100", humidity)

    hour = weather.hour_of_day
    if isinstance(hour, bool) or not isinstance(hour, Integral) or not 0 <= hour <= 23:
        raise ValidationError("weather.hour_of_day", "must be an integer within 0-23", hour)

    _require_flag("weather.is_raining_now", weather.is_raining_now)
    _require_flag("weather.rain_forecast_later", weather.rain_forecast_later)


def validate_inputs(crop: CropInput, soil: SoilInput, weather: WeatherInput, area_m2) -> None:
    validate_crop(crop)
    validate_soil(soil)
    validate_area(area_m2)
    validate_weather(weather)
