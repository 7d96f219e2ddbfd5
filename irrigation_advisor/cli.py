"""CLI for the irrigation recommendation engine."""
import argparse
import json
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path

from .advisory import unavailable_message
from .config import LOG_FORMAT, LOG_LEVEL
from .engine import RecommendationEngine
from .errors import ValidationError, WeatherDataError
from .inputs import CropInput
from .tables import SoilProfileTable
from .weather import fetch_weather_input, simulated_weather_input, to_weather_input

log = logging.getLogger(__name__)


def _parse_args(argv):
    p = argparse.ArgumentParser(description="Irrigation recommendation")
    p.add_argument("--crop", required=True, help="Crop name, e.g. tomato")
    p.add_argument("--planted", required=True, type=date.fromisoformat, help="Planting date YYYY-MM-DD")
    p.add_argument("--soil", required=True, help="Soil type, e.g. clay")
    p.add_argument("--area", required=True, type=float, help="Surface in m²")

    src = p.add_argument_group("weather source (location, explicit values, or --simulate)")
    src.add_argument("--lat", type=float)
    src.add_argument("--lon", type=float)
    src.add_argument("--simulate", action="store_true", help="Use a fixed simulated weather day")
    src.add_argument("--tmax", type=float)
    src.add_argument("--tmin", type=float)
    src.add_argument("--radiation", type=float, help="MJ/m²/day; seasonal estimate if omitted")
    src.add_argument("--humidity", type=float)
    src.add_argument("--raining", action="store_true")
    src.add_argument("--rain-later", action="store_true")
    src.add_argument("--hour", type=int, help="Local hour 0-23; current hour if omitted")

    p.add_argument("--output", help="Write the recommendation as JSON to this path")
    return p, p.parse_args(argv)


def _weather(p, args):
    now = datetime.now()
    if args.hour is not None:
        if not 0 <= args.hour <= 23:
            p.error("--hour must be within 0-23")
        now = now.replace(hour=args.hour)

    if args.simulate:
        fixed = [f"--{n}" for n in ("tmax", "tmin", "radiation", "humidity") if getattr(args, n) is not None]
        if args.rain_later:
            fixed.append("--rain-later")
        if fixed:
            p.error(f"--simulate uses a fixed weather day; drop {', '.join(fixed)}")
        return simulated_weather_input(is_raining=args.raining, now=now)
    if args.lat is not None and args.lon is not None:
        return fetch_weather_input(args.lat, args.lon)
    if args.tmax is None or args.tmin is None or args.humidity is None:
        p.error("give --lat/--lon, --simulate, or --tmax/--tmin/--humidity")
    return to_weather_input(args.tmax, args.tmin, args.humidity, args.raining, args.rain_later,
                            radiation_mj=args.radiation, now=now)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    p, args = _parse_args(argv)

    try:
        weather = _weather(p, args)
        soil = SoilProfileTable().soil_input(args.soil)
        reco = RecommendationEngine().generate(CropInput(args.crop, args.planted), soil, weather, args.area)
    except (ValidationError, WeatherDataError) as e:
        print(unavailable_message(e), file=sys.stderr)
        return 1

    print(f"Stage: {reco.stage.value} | Kc: {reco.kc:.2f} | ET0: {reco.et0:.2f} mm/d | ETc: {reco.etc:.2f} mm/d")
    print(f"Volume: {reco.liter_per_square_meter:.1f} L/m² | Total: {reco.total_liters:.0f} L | Every {reco.frequency}")
    print(f"When: {reco.time_of_day.value} ({reco.optimal_time_window})")
    if weather.radiation_estimated:
        print("Note: solar radiation estimated from the monthly average.")
    if reco.kc_fallback or reco.soil_fallback:
        print("Note: unrecognised crop or soil; default coefficients used.")
    print(f"Advice: {reco.explanatory_message}")

    if args.output:
        out = Path(args.output).expanduser().resolve()
        out.write_text(json.dumps({
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
            **reco.to_dict(),
        }, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Saved: {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
