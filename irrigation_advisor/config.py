"""Project configuration: engine thresholds, weather source and API settings."""
import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


# ─────────────────────────────────────────────────────────────────────────────
# ENGINE
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class EngineConfig:
    stage_thresholds: tuple = (20, 40, 70)  # inclusive upper bounds, days
    default_kc: float = 0.8
    humidity_limit_pct: float = 80.0
    heat_limit_c: float = 38.0
    morning_cutoff_hour: int = 12
    morning_window: str = "06:00–08:00"
    evening_window: str = "17:00–19:00"
    volume_digits: int = 1
    total_digits: int = 0

ENGINE = EngineConfig()

# ─────────────────────────────────────────────────────────────────────────────
# WEATHER SOURCE
# ─────────────────────────────────────────────────────────────────────────────
# Seasonal solar radiation in MJ/m²/day, January first (Benin climate zone).
# Used only when the provider does not report shortwave radiation.
MONTHLY_RADIATION_MJ = (22, 23, 22, 21, 20, 18, 17, 17, 18, 19, 20, 21)


@dataclass(frozen=True)
class WeatherConfig:
    open_meteo_url: str = field(
        default_factory=lambda: os.getenv("OPEN_METEO_URL", "https://api.open-meteo.com/v1/forecast")
    )
    timeout_s: float = field(default_factory=lambda: _env_float("IRRIGATION_WEATHER_TIMEOUT", 10.0))
    rain_now_threshold_mm: float = 0.5
    forecast_hours: int = 24
    monthly_radiation_mj: tuple = MONTHLY_RADIATION_MJ

WEATHER = WeatherConfig()

# ─────────────────────────────────────────────────────────────────────────────
# API CONFIG
# ─────────────────────────────────────────────────────────────────────────────
@dataclass
class APIConfig:
    host: str = field(default_factory=lambda: os.getenv("IRRIGATION_API_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("IRRIGATION_API_PORT", 8000))
    workers: int = field(default_factory=lambda: _env_int("IRRIGATION_API_WORKERS", 1))

API = APIConfig()

LOG_LEVEL = os.getenv("IRRIGATION_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
