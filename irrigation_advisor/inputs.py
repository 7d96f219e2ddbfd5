"""
Value types passed into and out of the recommendation engine.

All records are frozen dataclasses: a snapshot is built by the caller for one
computation and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional


class GrowthStage(Enum):
    """Crop growth stages, in chronological order."""
    INITIAL = "initial"
    DEVELOPMENT = "development"
    FLOWERING = "flowering"
    MATURITY = "maturity"


class TimeOfDay(Enum):
    MORNING = "morning"
    EVENING = "evening"


@dataclass(frozen=True)
class CropInput:
    name: str
    planting_date: date


@dataclass(frozen=True)
class SoilInput:
    """Soil physical properties. `is_default` marks a table fallback."""
    name: str
    water_retention_capacity: float  # mm/m
    irrigation_interval_days: int
    is_default: bool = False


@dataclass(frozen=True)
class WeatherInput:
    """Weather snapshot valid for one recommendation."""
    max_temperature_c: float
    min_temperature_c: float
    solar_radiation_mj_m2_day: float
    relative_humidity_pct: float
    is_raining_now: bool
    rain_forecast_later: bool
    hour_of_day: int
    radiation_estimated: bool = False  # seasonal fallback used upstream


@dataclass(frozen=True)
class Recommendation:
    """
    Complete irrigation recommendation.

    `liter_per_square_meter` and `total_liters` are rounded for display;
    `kc`, `et0` and `etc` keep full precision.
    """
    crop_name: str
    soil_name: str
    liter_per_square_meter: float
    total_liters: float
    area_m2: float
    frequency_days: int
    time_of_day: TimeOfDay
    optimal_time_window: str
    constraint_message: Optional[str]
    explanatory_message: str
    stage: GrowthStage
    kc: float
    et0: float
    etc: float
    kc_fallback: bool = False
    soil_fallback: bool = False

    @property
    def frequency(self) -> str:
        return f"{self.frequency_days} days"

    @property
    def has_constraint(self) -> bool:
        return self.constraint_message is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "crop": self.crop_name,
            "soil": self.soil_name,
            "liter_per_square_meter": self.liter_per_square_meter,
            "total_liters": self.total_liters,
            "area_m2": self.area_m2,
            "frequency_days": self.frequency_days,
            "frequency": self.frequency,
            "time_of_day": self.time_of_day.value,
            "optimal_time_window": self.optimal_time_window,
            "constraint_message": self.constraint_message,
            "message": self.explanatory_message,
            "diagnostics": {
                "stage": self.stage.value,
                "kc": self.kc,
                "et0": self.et0,
                "etc": self.etc,
                "kc_fallback": self.kc_fallback,
                "soil_fallback": self.soil_fallback,
            },
        }
