"""
Irrigation recommendation engine.

Pipeline for one call:
1. Validate crop, soil, area and weather
2. Resolve growth stage from planting date
3. Look up Kc for (crop, stage)
4. Estimate ET₀ (Hargreaves) and ETc = ET₀ × Kc
5. Volume per m² = ETc × soil irrigation interval; total = volume × area
6. Pick morning/evening window and evaluate weather constraints
7. Assemble the Recommendation

Usage:
    from irrigation_advisor.engine import RecommendationEngine

    engine = RecommendationEngine()
    reco = engine.generate(crop, soil, weather, area_m2=50)
    print(reco.explanatory_message)
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional, Union

from . import advisory
from .config import ENGINE, EngineConfig
from .constraints import ConstraintPolicy
from .et import EvapotranspirationEstimator, compute_etc
from .growth import GrowthStageResolver
from .inputs import CropInput, Recommendation, SoilInput, TimeOfDay, WeatherInput
from .tables import CropCoefficientTable
from .validation import validate_inputs

log = logging.getLogger(__name__)


class RecommendationEngine:
    """
    Turns crop, soil, weather and surface area into an irrigation recommendation.

    Holds only read-only collaborators, so one instance can be shared across
    threads. `clock` supplies "now" for growth staging when the caller does not.
    """

    def __init__(self, kc_table: Optional[CropCoefficientTable] = None,
                 stage_resolver: Optional[GrowthStageResolver] = None,
                 estimator: Optional[EvapotranspirationEstimator] = None,
                 policy: Optional[ConstraintPolicy] = None,
                 config: EngineConfig = ENGINE,
                 clock: Callable[[], datetime] = datetime.now):
        self.config = config
        self.kc_table = kc_table or CropCoefficientTable(default_kc=config.default_kc)
        self.stage_resolver = stage_resolver or GrowthStageResolver(config.stage_thresholds)
        self.estimator = estimator or EvapotranspirationEstimator()
        self.policy = policy or ConstraintPolicy(config.humidity_limit_pct, config.heat_limit_c)
        self.clock = clock

    def time_of_day(self, hour: int) -> TimeOfDay:
        return TimeOfDay.MORNING if hour < self.config.morning_cutoff_hour else TimeOfDay.EVENING

    def time_window(self, time_of_day: TimeOfDay) -> str:
        if time_of_day is TimeOfDay.MORNING:
            return self.config.morning_window
        return self.config.evening_window

    def generate(self, crop: CropInput, soil: SoilInput, weather: WeatherInput, area_m2: float,
                 now: Optional[Union[date, datetime]] = None) -> Recommendation:
        validate_inputs(crop, soil, weather, area_m2)

        stage = self.stage_resolver.resolve(crop.planting_date, now if now is not None else self.clock())
        kc = self.kc_table.lookup(crop.name, stage)
        kc_fallback = not self.kc_table.is_known(crop.name, stage)

        et0 = self.estimator.estimate(weather)
        etc = compute_etc(et0, kc)
        volume = etc * soil.irrigation_interval_days
        total = volume * area_m2

        time_of_day = self.time_of_day(weather.hour_of_day)
        constraint = self.policy.evaluate(weather, time_of_day)

        if constraint is not None:
            message = constraint
        else:
            message = advisory.volume_message(
                volume, total, soil.irrigation_interval_days,
                crop.name, stage.value, soil.name,
            )

        log.info(f"{crop.name} ({stage.value}) on {soil.name}: ET0={et0:.2f} Kc={kc:.2f} "
                 f"volume={volume:.1f} L/m² total={total:.0f} L constraint={constraint is not None}")

        return Recommendation(
            crop_name=crop.name,
            soil_name=soil.name,
            liter_per_square_meter=round(volume, self.config.volume_digits),
            total_liters=round(total, self.config.total_digits),
            area_m2=float(area_m2),
            frequency_days=soil.irrigation_interval_days,
            time_of_day=time_of_day,
            optimal_time_window=self.time_window(time_of_day),
            constraint_message=constraint,
            explanatory_message=message,
            stage=stage,
            kc=kc,
            et0=et0,
            etc=etc,
            kc_fallback=kc_fallback,
            soil_fallback=soil.is_default,
        )


def generate_recommendation(crop: CropInput, soil: SoilInput, weather: WeatherInput, area_m2: float,
                            now: Optional[Union[date, datetime]] = None) -> Recommendation:
    """Recommendation with the default tables and thresholds."""
    return RecommendationEngine().generate(crop, soil, weather, area_m2, now=now)
