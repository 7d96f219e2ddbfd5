"""
Evapotranspiration (ET) calculation module.
Reference ET₀ by the Hargreaves equation from temperature extremes and solar radiation.
"""

import numpy as np

from .errors import ValidationError
from .inputs import WeatherInput

HARGREAVES_COEFFICIENT = 0.0023
HARGREAVES_TEMP_OFFSET = 17.8


def compute_et0_hargreaves(temp_max_c: float, temp_min_c: float, radiation_mj: float) -> float:
    """
    Compute reference evapotranspiration (ET₀) using the Hargreaves equation.

        ET₀ = 0.0023 × (Tmean + 17.8) × √(Tmax − Tmin) × Ra

    Returns:
        ET₀ in mm/day, unrounded
    """
    if temp_max_c < temp_min_c:
        raise ValidationError("max_temperature_c", "must be >= min_temperature_c", temp_max_c)
    if radiation_mj < 0:
        raise ValidationError("solar_radiation_mj_m2_day", "must be >= 0", radiation_mj)

    temp_mean_c = (temp_max_c + temp_min_c) / 2
    et0 = (
        HARGREAVES_COEFFICIENT
        * (temp_mean_c + HARGREAVES_TEMP_OFFSET)
        * np.sqrt(temp_max_c - temp_min_c)
        * radiation_mj
    )
    # Below -17.8 °C mean the equation goes negative
    return max(0.0, float(et0))


def compute_etc(et0: float, kc: float) -> float:
    """Compute crop evapotranspiration (ETc) from reference ET₀ and crop coefficient."""
    return et0 * kc


class EvapotranspirationEstimator:
    """ET₀ for a weather snapshot, rounded to `digits` decimals."""

    def __init__(self, digits: int = 2):
        self.digits = digits

    def estimate(self, weather: WeatherInput) -> float:
        et0 = compute_et0_hargreaves(
            weather.max_temperature_c,
            weather.min_temperature_c,
            weather.solar_radiation_mj_m2_day,
        )
        return round(et0, self.digits)
