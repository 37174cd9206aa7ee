"""Manual live check for a station catalog.

Run from the repository root with:
  PYTHONPATH=src PROVIDER_ID=synthetic python scripts/station_live_check.py --seed 1

  PYTHONPATH=src PROVIDER_ID=openchargemap OPEN_CHARGE_MAP_API_KEY=... \
  python scripts/station_live_check.py --lat 37.7749 --long -122.4194 --distance 5

Optional environment variables:
  BASE_URL
  OPEN_CHARGE_MAP_API_KEY

Debug helpers:
  --debug enables debug logging for the library.
  --traceback prints full tracebacks on errors.
  --detail also fetches the first station by id.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
import traceback

from pyevchargefinder import Client, StationFinder
from pyevchargefinder.models import ChargingStation, FilterSettings, StationQuery
from pyevchargefinder.util import parse_csv

_LOGGER = logging.getLogger(__name__)
_ANSI_STYLES = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "cyan": "\x1b[36m",
}
_COLOR_ENABLED = False


def _require_value(name: str, value: str | None) -> str:
    if not value:
        print(f"Missing required value: {name}", file=sys.stderr)
        raise SystemExit(2)
    return value


def _style(text: str, color: str | None = None, *, bold: bool = False) -> str:
    if not _COLOR_ENABLED or not color:
        return text
    color_code = _ANSI_STYLES.get(color)
    if not color_code:
        return text
    prefix = _ANSI_STYLES["bold"] if bold else ""
    return f"{prefix}{color_code}{text}{_ANSI_STYLES['reset']}"


def _format_action(label: str, value: str, *, color: str | None = None) -> str:
    return f"{_style(label, color, bold=True)}: {value}"


def _print_exception(label: str, exc: Exception, *, trace: bool) -> None:
    styled_label = _style(label, "red", bold=True)
    print(f"{styled_label}: {exc.__class__.__name__}: {exc}", file=sys.stderr)
    if trace:
        traceback.print_exc()


def _format_station(station: ChargingStation) -> str:
    distance = "?" if station.distance is None else f"{station.distance:.2f} mi"
    connectors = ",".join(sorted(station.connector_types))
    return (
        f"{station.id} | {station.name} | {distance} | {station.power_kw} kW | "
        f"{station.status} | {station.network} | {connectors}"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--lat", type=float, default=37.7749)
    parser.add_argument("--long", type=float, default=-122.4194)
    parser.add_argument("--distance", type=float, default=15)
    parser.add_argument("--connectors", help="Comma separated connector types.")
    parser.add_argument("--statuses", default="Available,Busy")
    parser.add_argument("--min-power", type=int)
    parser.add_argument("--networks", help="Comma separated networks.")
    parser.add_argument(
        "--sort", default="distance", choices=("distance", "power", "availability")
    )
    parser.add_argument("--seed", type=int, help="Seed for the synthetic catalog.")
    parser.add_argument("--detail", action="store_true")
    parser.add_argument("--color", action="store_true")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--traceback", action="store_true")
    return parser


async def main() -> int:
    global _COLOR_ENABLED
    args = _build_parser().parse_args()
    _COLOR_ENABLED = args.color and sys.stdout.isatty()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    provider_id = _require_value("PROVIDER_ID", os.getenv("PROVIDER_ID"))
    options: dict[str, object] = {}
    if provider_id == "openchargemap":
        options["api_key"] = _require_value(
            "OPEN_CHARGE_MAP_API_KEY", os.getenv("OPEN_CHARGE_MAP_API_KEY")
        )
    if args.seed is not None:
        options["seed"] = args.seed

    query = StationQuery(
        latitude=args.lat,
        longitude=args.long,
        filters=FilterSettings(
            connector_types=parse_csv(args.connectors) or (),
            distance=args.distance,
            availability_statuses=parse_csv(args.statuses) or (),
            min_power_output=args.min_power,
            networks=parse_csv(args.networks) or (),
        ),
        sort_by=args.sort,
    )
    try:
        async with Client(base_url=os.getenv("BASE_URL") or None) as client:
            provider = await client.get_provider(provider_id, **options)
            finder = StationFinder(provider)
            stations = await finder.search(query)
            detail = None
            if args.detail and stations:
                detail = await finder.get_station(stations[0].id)
    except Exception as exc:
        _print_exception("Error", exc, trace=args.traceback)
        return 1

    print(
        _format_action(
            "Provider",
            f"{provider.provider_name} ({provider.provider_id}) | "
            f"stable_ids={provider.stable_ids}",
            color="cyan",
        )
    )
    print(_format_action("Stations", str(len(stations)), color="cyan"))
    for station in stations:
        print(f"- {_format_station(station)}")
    if detail is not None:
        print(_format_action("Detail", _format_station(detail), color="green"))
    _LOGGER.debug("Live check finished for %s", provider_id)
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
