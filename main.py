#!/usr/bin/env python3
"""
main.py - Command line entry point for the garden growth core

Usage examples:
    python main.py plants
    python main.py growth --plant sunflower --planted_at 2025-07-04T16:40:10 --weather Clouds
    python main.py refresh --seed config/garden_seed.yaml --iterations 3
    python main.py weather --lat 40.7 --lon -74.0
    python main.py plot --plant cactus --out viz_output/cactus.png

This script expects to be run from the project root.
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Ensure project root is on PYTHONPATH
ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from config import load_config, get_plant_catalog
from garden.clock import parse_timestamp, utcnow
from garden.growth import (GrowthCalculator, growth_time_description, stage_name,
                           weather_multiplier, weather_preference_description)
from garden.models import PlantType
from garden.refresh import GrowthRefreshJob
from garden.store import GardenStore
from garden.timing import format_time_since_planted, format_time_to_maturity, get_time_elapsed_hours
from garden.weather import normalize_weather, weather_display_name
from garden.weather_client import WeatherProviderError, fetch_current_weather

DEFAULT_SEED = ROOT / "config" / "garden_seed.yaml"


def setup_logging(name, level=logging.INFO):
    log_dir = ROOT / "logs"
    log_dir.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{name}_{timestamp}.log"
    logging.basicConfig(
        level=level,
        format='%(asctime)s | %(levelname)s | %(message)s',
        handlers=[
            logging.FileHandler(log_file, mode='w'),
            logging.StreamHandler()
        ]
    )
    return log_file


def load_plant_types(args):
    return {pt.id: pt for pt in (PlantType.from_row(r) for r in get_plant_catalog(args.plants_file))}


def plant_label(store, instance):
    plant_type = store.plant_types.get(instance.plant_id)
    return plant_type.name if plant_type is not None else instance.plant_id


def _find_plant(args):
    plant_types = load_plant_types(args)
    if args.plant not in plant_types:
        print(f"[main] Unknown plant '{args.plant}'. Known: {', '.join(sorted(plant_types))}")
        return None
    return plant_types[args.plant]


def plants_cmd(args, cfg):
    for pt in load_plant_types(args).values():
        bonus = ', '.join(f"{k} x{v}" for k, v in pt.weather_bonus.items())
        print(f"{pt.id:<12} {pt.name:<12} {pt.growth_time_hours:>6.1f} h  cost {pt.planting_cost:>3}  "
              f"harvest {pt.harvest_points:>3}  [{bonus}]  {weather_preference_description(pt)}, "
              f"{growth_time_description(pt.growth_time_hours).lower()}")
    return 0


def growth_cmd(args, cfg):
    plant_type = _find_plant(args)
    if plant_type is None:
        return 1
    calc = GrowthCalculator(cfg.get('growth', {}))
    now = parse_timestamp(args.now) if args.now else utcnow()
    planted_at = parse_timestamp(args.planted_at)

    result = calc.growth_stage(planted_at, plant_type, args.weather, now)
    remaining = calc.time_to_maturity(planted_at, plant_type, args.weather, now)
    elapsed = get_time_elapsed_hours(planted_at, now)

    print(f"[main] {plant_type.name} planted {format_time_since_planted(elapsed)} ago")
    print(f"[main] Weather: {args.weather} -> {normalize_weather(args.weather)} "
          f"({weather_display_name(args.weather)}, x{weather_multiplier(plant_type, args.weather)})")
    print(f"[main] Stage {result.stage} ({stage_name(result.stage)}), {result.progress:.0f}% grown")
    print(f"[main] Time to maturity: {format_time_to_maturity(remaining)}")
    return 0


def refresh_cmd(args, cfg):
    log_file = setup_logging("refresh", logging.DEBUG if args.verbose else logging.INFO)
    logger = logging.getLogger(__name__)

    calc = GrowthCalculator(cfg.get('growth', {}))
    store_cfg = dict(cfg.get('garden', {}))
    store_cfg['default_weather'] = cfg.get('growth', {}).get('default_weather', 'clear')
    store = GardenStore.from_yaml(args.seed, get_plant_catalog(args.plants_file), cfg=store_cfg, calculator=calc)

    refresh_cfg = dict(cfg.get('refresh', {}))
    if args.interval is not None:
        refresh_cfg['interval_seconds'] = args.interval
    job = GrowthRefreshJob(store, calculator=calc, cfg=refresh_cfg)

    logger.info("=" * 80)
    logger.info("GROWTH REFRESH STARTED")
    logger.info(f"Seed: {args.seed}")
    logger.info(f"Interval: {job.interval_seconds}s, iterations: {args.iterations or 'forever'}")
    logger.info("=" * 80)
    try:
        report = job.run(iterations=args.iterations)
    except KeyboardInterrupt:
        logger.warning("Refresh interrupted")
        return 130

    for owner_id in sorted(store.profiles):
        garden = store.garden_for(owner_id)
        slots = ', '.join(f"{slot}: {plant_label(store, p)} stage {p.current_stage}"
                          f"{' (mature)' if p.is_mature else ''}" for slot, p in sorted(garden.items()))
        logger.info(f"  {owner_id} [{store.weather_for(owner_id)}] {slots or 'empty'}")

    print(f"[main] Refresh finished: {report.checked} checked, {report.updated} updated, {report.matured} matured")
    print(f"[main] Detailed log saved to: {log_file}")
    return 0


def weather_cmd(args, cfg):
    try:
        current = fetch_current_weather(args.lat, args.lon, api_key=args.api_key, cfg=cfg.get('weather', {}))
    except WeatherProviderError as e:
        print(f"[main] Weather lookup failed: {e}")
        return 1
    print(f"[main] {current.city or 'Unknown'}: {current.condition} ({current.description}), "
          f"{current.temperature}° -> {current.category}")
    return 0


def plot_cmd(args, cfg):
    plant_type = _find_plant(args)
    if plant_type is None:
        return 1
    from viz.plot_utils import plot_growth_curves
    plot_growth_curves(plant_type, out_path=args.out,
                       total_hours=cfg.get('growth', {}).get('total_hours_override'))
    return 0


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Fair Weather Friend - garden growth tools")
    p.add_argument("--config", type=str, default=None, help="path to YAML config (default: config/defaults.yaml)")
    p.add_argument("--plants_file", type=str, default=None, help="path to plant catalog (default: config/plants.yaml)")
    sub = p.add_subparsers(dest="cmd")

    sub.add_parser("plants", help="List plant types")

    g = sub.add_parser("growth", help="Compute growth stage and time to maturity for one plant")
    g.add_argument("--plant", type=str, required=True, help="plant type id")
    g.add_argument("--planted_at", type=str, required=True, help="ISO-8601 planting time (naive = UTC)")
    g.add_argument("--weather", type=str, default="Clear", help="raw weather condition, e.g. Clouds")
    g.add_argument("--now", type=str, default=None, help="ISO-8601 time to evaluate at (default: now)")

    r = sub.add_parser("refresh", help="Run the periodic growth refresh over a seeded garden")
    r.add_argument("--seed", type=str, default=str(DEFAULT_SEED), help="garden seed YAML")
    r.add_argument("--iterations", type=int, default=1, help="number of passes (0 = forever)")
    r.add_argument("--interval", type=float, default=None, help="seconds between passes")
    r.add_argument("--verbose", action='store_true', help="log every updated plant")

    w = sub.add_parser("weather", help="Fetch current weather for a location")
    w.add_argument("--lat", type=float, required=True)
    w.add_argument("--lon", type=float, required=True)
    w.add_argument("--api_key", type=str, default=None, help="OpenWeather key (default: env var)")

    pl = sub.add_parser("plot", help="Plot growth curves for a plant under each weather")
    pl.add_argument("--plant", type=str, required=True)
    pl.add_argument("--out", type=str, default=None, help="output image (default: show)")

    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if not args.cmd:
        print("No command given. Use -h to see options.")
        return 0
    cfg = load_config(args.config)
    if args.cmd == "plants":
        return plants_cmd(args, cfg)
    elif args.cmd == "growth":
        return growth_cmd(args, cfg)
    elif args.cmd == "refresh":
        if args.iterations == 0:
            args.iterations = None
        return refresh_cmd(args, cfg)
    elif args.cmd == "weather":
        return weather_cmd(args, cfg)
    elif args.cmd == "plot":
        return plot_cmd(args, cfg)
    else:
        print("Unknown command:", args.cmd)
        return 1


if __name__ == "__main__":
    sys.exit(main())
