"""
Pints CLI entrypoint.

This CLI is intended for quick local checks without a browser: it feeds a single
location fix (and optionally a heading) into a compass, waits for the search and
prints what the compass page would show.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any

from pints.compass.app import CompassApp
from pints.compass.render import LatestDisplayRenderer
from pints.compass.sources import SensorStream
from pints.config.settings import get_settings
from pints.core.logging import configure_logging
from pints.domain.models import DerivedDisplay, GeoPoint
from pints.ingestion.overpass_client import OverpassClient


def _print_display(display: DerivedDisplay) -> None:
    if display.status is not None:
        print(f"[{display.status.level}] {display.status.message}")
    target = display.target
    if target is None:
        return
    print(f"{target.name}  {target.distance_text}  bearing={target.bearing_deg:.1f}  turn={display.rotation_deg:+.1f}")
    print(f"  directions: {target.directions_url}")
    print("Nearby:")
    for i, item in enumerate(display.candidates, start=1):
        mark = "*" if item.selected else " "
        print(f"{mark}{i:>2}. {item.name} ({item.distance_text})  id={item.id}")


async def _run_nearest(args: argparse.Namespace) -> DerivedDisplay | None:
    settings = get_settings()
    renderer = LatestDisplayRenderer()
    compass = CompassApp(settings, OverpassClient(settings), renderer)
    locations: SensorStream[GeoPoint] = SensorStream("location")
    orientations: SensorStream[float | None] = SensorStream("orientation")
    compass.start(locations, orientations)
    try:
        locations.publish(GeoPoint(lat=float(args.lat), lon=float(args.lon)))
        await compass.wait_for_refresh()
        if args.alpha is not None:
            orientations.publish(float(args.alpha))
        if args.select:
            compass.select(args.select)
    finally:
        compass.close()
    return renderer.latest


def _cmd_nearest(args: argparse.Namespace) -> int:
    """Handle the `nearest` subcommand."""
    display = asyncio.run(_run_nearest(args))
    if display is None:
        return 1

    if args.json:
        print(json.dumps(display.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        _print_display(display)
    if display.status is not None and display.status.level != "info":
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the Pints CLI."""
    parser = argparse.ArgumentParser(prog="pints")
    parser.add_argument("--log-level", default=None, help="Override the configured log level (e.g. DEBUG).")
    sub = parser.add_subparsers(dest="command", required=True)

    near = sub.add_parser("nearest", help="Find the nearest pub from a coordinate and show the compass frame.")
    near.add_argument("--lat", required=True, type=float)
    near.add_argument("--lon", required=True, type=float)
    near.add_argument(
        "--alpha",
        type=float,
        default=None,
        help="Device-orientation alpha in degrees (heading = 360 - alpha). Omit for north-up.",
    )
    near.add_argument("--select", type=str, default=None, help="Candidate id (e.g. node/123) to point at instead.")
    near.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    near.set_defaults(func=_cmd_nearest)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m pints.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
