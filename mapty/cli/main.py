"""Terminal CLI entrypoint for Mapty."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from mapty.core.settings import DEFAULT_MAP_ZOOM, AppSettings
from mapty.workout.codec import CorruptPersistedState
from mapty.workout.model import CyclingWorkout, RunningWorkout
from mapty.workout.storage import LocalStorage, read_workouts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout map")
    parser.add_argument("--host", default="127.0.0.1", help="Host bind for the web UI")
    parser.add_argument("--port", type=int, default=8090, help="Port for the web UI")
    parser.add_argument(
        "--storage-dir",
        type=Path,
        default=None,
        help="Directory holding saved workouts (default: ~/.mapty/local-storage)",
    )
    parser.add_argument(
        "--lat",
        type=float,
        default=None,
        help="Fixed start latitude instead of asking the browser",
    )
    parser.add_argument(
        "--lng",
        type=float,
        default=None,
        help="Fixed start longitude instead of asking the browser",
    )
    parser.add_argument(
        "--zoom",
        type=int,
        default=DEFAULT_MAP_ZOOM,
        help="Map zoom used when centering on a location",
    )
    parser.add_argument("--list", action="store_true", help="Print saved workouts and exit")
    parser.add_argument("--reset", action="store_true", help="Delete saved workouts and exit")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> AppSettings:
    start_location = None
    if args.lat is not None and args.lng is not None:
        start_location = (args.lat, args.lng)
    base = AppSettings()
    return AppSettings(
        storage_dir=args.storage_dir or base.storage_dir,
        map_zoom=args.zoom,
        host=args.host,
        port=args.port,
        start_location=start_location,
    )


def run_list(settings: AppSettings) -> int:
    storage = LocalStorage(settings.storage_dir)
    try:
        workouts = read_workouts(storage, settings.storage_key)
    except CorruptPersistedState as exc:
        print(f"Saved workouts are corrupt: {exc}")
        return 1

    if not workouts:
        print("No saved workouts")
        return 0

    for workout in workouts:
        if isinstance(workout, RunningWorkout):
            metric = f"pace={workout.pace} min/km cadence={workout.cadence:g} spm"
        elif isinstance(workout, CyclingWorkout):
            metric = f"speed={workout.speed} km/min elev={workout.elevation_gain:g} m"
        else:
            metric = "-"
        lat, lng = workout.coordinates
        print(
            f"{workout.id}  {workout.title:<24} {workout.distance:g} km "
            f"{workout.duration:g} min  {metric}  @ {lat:.4f},{lng:.4f}"
        )
    return 0


def run_reset(settings: AppSettings) -> int:
    LocalStorage(settings.storage_dir).remove_item(settings.storage_key)
    print("Saved workouts removed")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")

    settings = settings_from_args(args)

    if args.list:
        return run_list(settings)
    if args.reset:
        return run_reset(settings)

    from mapty.ui.web_app import run_web_ui

    return run_web_ui(settings)


if __name__ == "__main__":
    raise SystemExit(main())
