from datetime import datetime, timedelta, timezone

import pytest

from irrigation_advisor import advisory
from irrigation_advisor.engine import RecommendationEngine, generate_recommendation
from irrigation_advisor.errors import ValidationError
from irrigation_advisor.inputs import CropInput, GrowthStage, SoilInput, TimeOfDay
from irrigation_advisor.tables import CropCoefficientTable, soil_input_for

from .conftest import TODAY, make_weather


@pytest.fixture
def engine():
    return RecommendationEngine(clock=lambda: datetime(2026, 10, 19, 9, 0))


class TestScenarios:

    def test_scenario_a_tomato_on_clay(self, engine, tomato, clay, weather):
        reco = engine.generate(tomato, clay, weather, 50)

        assert reco.stage is GrowthStage.DEVELOPMENT
        assert reco.kc == 0.8
        assert reco.et0 == 6.81
        assert reco.etc == pytest.approx(6.81 * 0.8)
        assert reco.liter_per_square_meter == 21.8
        assert reco.total_liters == 1090
        assert reco.frequency_days == 4
        assert reco.frequency == "4 days"
        assert reco.time_of_day is TimeOfDay.MORNING
        assert reco.optimal_time_window == "06:00–08:00"
        assert reco.constraint_message is None
        assert reco.explanatory_message == (
            "Apply 21.8 L/m² (1090 L total) every 4 days for Tomato (development) on clay soil."
        )

    def test_scenario_b_humidity_overrides_message(self, engine, tomato, clay):
        reco = engine.generate(tomato, clay, make_weather(relative_humidity_pct=85, max_temperature_c=40), 50)
        assert reco.constraint_message == advisory.HIGH_HUMIDITY
        assert reco.explanatory_message == advisory.HIGH_HUMIDITY
        assert reco.liter_per_square_meter > 0

    @pytest.mark.parametrize("area", [0, -10.5])
    def test_scenario_c_area_rejected(self, engine, tomato, clay, weather, area):
        with pytest.raises(ValidationError) as exc:
            engine.generate(tomato, clay, weather, area)
        assert exc.value.field == "area_m2"

    def test_scenario_d_no_thermal_swing(self, engine, tomato):
        loam = soil_input_for("loam")
        reco = engine.generate(tomato, loam, make_weather(max_temperature_c=30, min_temperature_c=30), 25)
        assert reco.et0 == 0
        assert reco.liter_per_square_meter == 0
        assert reco.total_liters == 0
        assert reco.explanatory_message.startswith("Apply 0.0 L/m² (0 L total) every 3 days")


class TestInvariants:

    def test_evening_window(self, engine, tomato, clay):
        reco = engine.generate(tomato, clay, make_weather(hour_of_day=12), 10)
        assert reco.time_of_day is TimeOfDay.EVENING
        assert reco.optimal_time_window == "17:00–19:00"

    def test_hour_eleven_is_morning(self, engine, tomato, clay):
        assert engine.generate(tomato, clay, make_weather(hour_of_day=11), 10).time_of_day is TimeOfDay.MORNING

    def test_volume_formula(self, engine, clay):
        crop = CropInput("corn", TODAY - timedelta(days=50))
        reco = engine.generate(crop, clay, make_weather(), 12)
        assert reco.stage is GrowthStage.FLOWERING
        assert reco.liter_per_square_meter == round(reco.et0 * reco.kc * 4, 1)
        assert reco.total_liters == round(reco.et0 * reco.kc * 4 * 12)

    def test_idempotent(self, engine, tomato, clay, weather):
        assert engine.generate(tomato, clay, weather, 50) == engine.generate(tomato, clay, weather, 50)

    def test_now_overrides_clock(self, engine, tomato, clay, weather):
        reco = engine.generate(tomato, clay, weather, 50, now=TODAY + timedelta(days=60))
        assert reco.stage is GrowthStage.MATURITY

    def test_naive_planting_with_aware_clock(self, clay, weather):
        engine = RecommendationEngine(clock=lambda: datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))
        crop = CropInput("Tomato", datetime(2026, 9, 19, 6, 0))
        assert engine.generate(crop, clay, weather, 50).stage is GrowthStage.DEVELOPMENT

    def test_monotonic_in_radiation(self, engine, tomato, clay):
        volumes = [
            engine.generate(tomato, clay, make_weather(solar_radiation_mj_m2_day=ra), 50).liter_per_square_meter
            for ra in (0, 5, 10, 15, 20, 25, 30)
        ]
        assert volumes == sorted(volumes)


class TestFallbacks:

    def test_unknown_crop(self, engine, clay, weather):
        reco = engine.generate(CropInput("Xyzzy", TODAY), clay, weather, 50)
        assert reco.kc == 0.8
        assert reco.kc_fallback
        assert not reco.soil_fallback

    def test_unknown_soil(self, engine, tomato, weather):
        soil = soil_input_for("peat bog")
        reco = engine.generate(tomato, soil, weather, 50)
        assert reco.frequency_days == 3
        assert reco.soil_fallback

    def test_injected_table(self, tomato, clay, weather):
        table = CropCoefficientTable().with_overrides({"tomato": {GrowthStage.DEVELOPMENT: 1.0}})
        engine = RecommendationEngine(kc_table=table, clock=lambda: datetime(2026, 10, 19))
        assert engine.generate(tomato, clay, weather, 50).kc == 1.0


class TestValidation:

    @pytest.mark.parametrize("crop, field", [
        (CropInput("", TODAY), "crop.name"),
        (CropInput("   ", TODAY), "crop.name"),
        (CropInput("tomato", None), "crop.planting_date"),
        (CropInput("tomato", "2026-10-01"), "crop.planting_date"),
    ])
    def test_crop(self, engine, clay, weather, crop, field):
        with pytest.raises(ValidationError) as exc:
            engine.generate(crop, clay, weather, 50)
        assert exc.value.field == field

    @pytest.mark.parametrize("soil, field", [
        (SoilInput("", 100.0, 3), "soil.name"),
        (SoilInput("clay", 0.0, 3), "soil.water_retention_capacity"),
        (SoilInput("clay", 150.0, 0), "soil.irrigation_interval_days"),
        (SoilInput("clay", 150.0, 2.5), "soil.irrigation_interval_days"),
    ])
    def test_soil(self, engine, tomato, weather, soil, field):
        with pytest.raises(ValidationError) as exc:
            engine.generate(tomato, soil, weather, 50)
        assert exc.value.field == field

    @pytest.mark.parametrize("overrides, field", [
        ({"min_temperature_c": 35.0}, "weather.min_temperature_c"),
        ({"max_temperature_c": float("nan")}, "weather.max_temperature_c"),
        ({"solar_radiation_mj_m2_day": -1.0}, "weather.solar_radiation_mj_m2_day"),
        ({"relative_humidity_pct": 101.0}, "weather.relative_humidity_pct"),
        ({"relative_humidity_pct": -0.5}, "weather.relative_humidity_pct"),
        ({"hour_of_day": 24}, "weather.hour_of_day"),
        ({"hour_of_day": -1}, "weather.hour_of_day"),
        ({"is_raining_now": "no"}, "weather.is_raining_now"),
    ])
    def test_weather(self, engine, tomato, clay, overrides, field):
        with pytest.raises(ValidationError) as exc:
            engine.generate(tomato, clay, make_weather(**overrides), 50)
        assert exc.value.field == field

    def test_first_offending_field_reported(self, engine, weather):
        with pytest.raises(ValidationError) as exc:
            engine.generate(CropInput("", TODAY), SoilInput("", 0, 0), weather, -1)
        assert exc.value.field == "crop.name"

    def test_message_names_field(self, engine, tomato, clay, weather):
        with pytest.raises(ValidationError, match="area_m2: must be > 0"):
            engine.generate(tomato, clay, weather, 0)


def test_generate_recommendation_default_engine(tomato, clay, weather):
    reco = generate_recommendation(tomato, clay, weather, 50, now=TODAY)
    assert reco.stage is GrowthStage.DEVELOPMENT
    assert reco.to_dict()["diagnostics"]["stage"] == "development"
