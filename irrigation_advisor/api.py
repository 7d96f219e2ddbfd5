"""FastAPI service for irrigation recommendations."""
import logging
from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from . import __version__
from .advisory import unavailable_message
from .config import API, LOG_FORMAT, LOG_LEVEL
from .engine import RecommendationEngine
from .errors import ValidationError, WeatherDataError
from .inputs import CropInput, GrowthStage, SoilInput, WeatherInput
from .tables import SoilProfileTable
from .weather import fetch_open_meteo, get_forecast_summary, hourly_frame, weather_input_from_open_meteo

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Irrigation Advisor API",
    description="Crop water demand and irrigation timing from weather, crop stage and soil",
    version=__version__,
)

engine = RecommendationEngine()
soil_table = SoilProfileTable()

# ─────────────────────────────────────────────────────────────────────────────
# MODELS
# ─────────────────────────────────────────────────────────────────────────────

class CropModel(BaseModel):
    name: str = Field(..., description="Crop name, e.g. tomato")
    planting_date: date


class SoilModel(BaseModel):
    name: str = Field(..., description="Soil type, e.g. clay")
    water_retention_capacity: Optional[float] = Field(None, description="mm/m; table value if omitted")
    irrigation_interval_days: Optional[int] = Field(None, description="Days; table value if omitted")


class WeatherModel(BaseModel):
    max_temperature_c: float
    min_temperature_c: float
    solar_radiation_mj_m2_day: float = Field(..., description="MJ/m²/day")
    relative_humidity_pct: float
    is_raining_now: bool = Field(..., description="Rain falling at the field now")
    rain_forecast_later: bool = Field(..., description="Rain expected later today")
    hour_of_day: int = Field(..., description="Local hour 0-23")


class RecommendRequest(BaseModel):
    crop: CropModel
    soil: SoilModel
    weather: WeatherModel
    area_m2: float = Field(..., description="Cultivated surface in m²")
    now: Optional[datetime] = Field(None, description="Reference time for growth stage")


class Diagnostics(BaseModel):
    stage: str
    kc: float
    et0: float
    etc: float
    kc_fallback: bool
    soil_fallback: bool


class RecommendationResponse(BaseModel):
    crop: str
    soil: str
    liter_per_square_meter: float
    total_liters: float
    area_m2: float
    frequency_days: int
    frequency: str
    time_of_day: str
    optimal_time_window: str
    constraint_message: Optional[str]
    message: str
    diagnostics: Diagnostics
    timestamp: str


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _soil_input(soil: SoilModel) -> SoilInput:
    if soil.water_retention_capacity is None or soil.irrigation_interval_days is None:
        base = soil_table.soil_input(soil.name)
        return SoilInput(
            name=soil.name,
            water_retention_capacity=(soil.water_retention_capacity
                                      if soil.water_retention_capacity is not None
                                      else base.water_retention_capacity),
            irrigation_interval_days=(soil.irrigation_interval_days
                                      if soil.irrigation_interval_days is not None
                                      else base.irrigation_interval_days),
            is_default=base.is_default,
        )
    return SoilInput(soil.name, soil.water_retention_capacity, soil.irrigation_interval_days)


def _recommend(crop: CropInput, soil: SoilInput, weather: WeatherInput, area_m2: float,
               now: Optional[datetime] = None) -> dict:
    try:
        reco = engine.generate(crop, soil, weather, area_m2, now=now)
    except ValidationError as e:
        log.info(f"Rejected recommendation request: {e}")
        raise HTTPException(422, unavailable_message(e))
    return {**reco.to_dict(), "timestamp": _timestamp()}


# ─────────────────────────────────────────────────────────────────────────────
# ENDPOINTS
# ─────────────────────────────────────────────────────────────────────────────

@app.get("/", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__, "timestamp": _timestamp()}


@app.get("/api/v1/crops")
async def list_crops():
    """List crops with their Kc per growth stage."""
    table = engine.kc_table
    return {
        "crops": table.crops(),
        "default_kc": table.default_kc,
        "kc": {
            crop: {stage.value: table.lookup(crop, stage) for stage in GrowthStage}
            for crop in table.crops()
        },
    }


@app.get("/api/v1/soils")
async def list_soils():
    """List soil types with retention capacity and irrigation interval."""
    return {
        "soils": {
            name: {
                "water_retention_capacity": p.retention_capacity,
                "irrigation_interval_days": p.interval_days,
            }
            for name, p in ((n, soil_table.lookup(n)) for n in soil_table.soils())
        },
        "default": {
            "water_retention_capacity": soil_table.default.retention_capacity,
            "irrigation_interval_days": soil_table.default.interval_days,
        },
    }


@app.get("/api/v1/weather")
def get_weather(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
):
    """Current weather snapshot and 24h summary for a location."""
    try:
        payload = fetch_open_meteo(lat, lon)
        snapshot = weather_input_from_open_meteo(payload)
        summary = get_forecast_summary(hourly_frame(payload), hours=24)
    except WeatherDataError as e:
        raise HTTPException(503, unavailable_message(e))

    return {
        "location": {"lat": lat, "lon": lon},
        "snapshot": asdict(snapshot),
        "forecast_24h": summary,
        "timestamp": _timestamp(),
    }


@app.post("/api/v1/recommend", response_model=RecommendationResponse)
async def recommend(request: RecommendRequest):
    """Recommendation from an explicit weather snapshot."""
    crop = CropInput(request.crop.name, request.crop.planting_date)
    weather = WeatherInput(**request.weather.model_dump())
    return _recommend(crop, _soil_input(request.soil), weather, request.area_m2, request.now)


@app.get("/api/v1/recommend/location", response_model=RecommendationResponse)
def recommend_for_location(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    crop: str = Query(...),
    planted: date = Query(..., description="Planting date YYYY-MM-DD"),
    soil: str = Query(...),
    area_m2: float = Query(...),
):
    """Recommendation with weather fetched from Open-Meteo for the location."""
    try:
        weather = weather_input_from_open_meteo(fetch_open_meteo(lat, lon))
    except WeatherDataError as e:
        raise HTTPException(503, unavailable_message(e))
    return _recommend(CropInput(crop, planted), soil_table.soil_input(soil), weather, area_m2)


# ─────────────────────────────────────────────────────────────────────────────
# RUN SERVER
# ─────────────────────────────────────────────────────────────────────────────

def run_server():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "irrigation_advisor.api:app",
        host=API.host,
        port=API.port,
        workers=API.workers,
    )


if __name__ == "__main__":
    run_server()
