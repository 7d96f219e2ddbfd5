from datetime import date, timedelta

import pytest

from irrigation_advisor.inputs import CropInput, SoilInput, WeatherInput

TODAY = date(2026, 10, 19)


def make_weather(**overrides) -> WeatherInput:
    values = dict(
        max_temperature_c=34.0,
        min_temperature_c=24.0,
        solar_radiation_mj_m2_day=20.0,
        relative_humidity_pct=50.0,
        is_raining_now=False,
        rain_forecast_later=False,
        hour_of_day=7,
    )
    values.update(overrides)
    return WeatherInput(**values)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def tomato():
    return CropInput("Tomato", TODAY - timedelta(days=30))


@pytest.fixture
def clay():
    return SoilInput("clay", 150.0, 4)


@pytest.fixture
def weather():
    return make_weather()
