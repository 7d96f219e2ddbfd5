from irrigation_advisor import advisory
from irrigation_advisor.constraints import ConstraintPolicy, evaluate_constraints
from irrigation_advisor.inputs import TimeOfDay

from .conftest import make_weather

MORNING = TimeOfDay.MORNING
EVENING = TimeOfDay.EVENING


class TestPrecedence:

    def test_humidity_beats_rain(self):
        weather = make_weather(relative_humidity_pct=85, is_raining_now=True)
        assert evaluate_constraints(weather, MORNING) == advisory.HIGH_HUMIDITY

    def test_humidity_beats_heat(self):
        weather = make_weather(relative_humidity_pct=90, max_temperature_c=42)
        assert evaluate_constraints(weather, EVENING) == advisory.HIGH_HUMIDITY

    def test_rain_beats_heat(self):
        weather = make_weather(is_raining_now=True, max_temperature_c=42)
        assert evaluate_constraints(weather, EVENING) == advisory.RAIN_THIS_EVENING

    def test_rain_now_beats_forecast(self):
        weather = make_weather(is_raining_now=True, rain_forecast_later=True)
        assert evaluate_constraints(weather, EVENING) == advisory.RAIN_THIS_EVENING


class TestIndividualRules:

    def test_humidity_limit_is_exclusive(self):
        assert evaluate_constraints(make_weather(relative_humidity_pct=80), MORNING) is None

    def test_raining_morning(self):
        assert evaluate_constraints(make_weather(is_raining_now=True), MORNING) == advisory.RAIN_THIS_MORNING

    def test_forecast_only_matters_in_evening(self):
        weather = make_weather(rain_forecast_later=True)
        assert evaluate_constraints(weather, MORNING) is None
        assert evaluate_constraints(weather, EVENING) == advisory.RAIN_EXPECTED_EVENING

    def test_heat(self):
        assert evaluate_constraints(make_weather(max_temperature_c=38.5), MORNING) == advisory.VERY_HIGH_TEMPERATURE
        assert evaluate_constraints(make_weather(max_temperature_c=38), MORNING) is None

    def test_clear_day(self):
        assert evaluate_constraints(make_weather(), EVENING) is None

    def test_custom_limits(self):
        policy = ConstraintPolicy(humidity_limit_pct=60, heat_limit_c=30)
        assert policy.evaluate(make_weather(relative_humidity_pct=65), MORNING) == advisory.HIGH_HUMIDITY
        assert policy.evaluate(make_weather(), MORNING) == advisory.VERY_HIGH_TEMPERATURE
