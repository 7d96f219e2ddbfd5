"""
Weather constraints that override the numeric recommendation.

Checked in a fixed order and the first match wins: humidity, then current
rain, then evening rain forecast, then heat.
"""

from typing import Optional

from . import advisory
from .config import ENGINE
from .inputs import TimeOfDay, WeatherInput


class ConstraintPolicy:

    def __init__(self, humidity_limit_pct: float = ENGINE.humidity_limit_pct,
                 heat_limit_c: float = ENGINE.heat_limit_c):
        self.humidity_limit_pct = humidity_limit_pct
        self.heat_limit_c = heat_limit_c

    def evaluate(self, weather: WeatherInput, time_of_day: TimeOfDay) -> Optional[str]:
        if weather.relative_humidity_pct > self.humidity_limit_pct:
            return advisory.HIGH_HUMIDITY

        if weather.is_raining_now:
            if time_of_day is TimeOfDay.MORNING:
                return advisory.RAIN_THIS_MORNING
            return advisory.RAIN_THIS_EVENING

        if weather.rain_forecast_later and time_of_day is TimeOfDay.EVENING:
            return advisory.RAIN_EXPECTED_EVENING

        if weather.max_temperature_c > self.heat_limit_c:
            return advisory.VERY_HIGH_TEMPERATURE

        return None


def evaluate_constraints(weather: WeatherInput, time_of_day: TimeOfDay) -> Optional[str]:
    return ConstraintPolicy().evaluate(weather, time_of_day)
