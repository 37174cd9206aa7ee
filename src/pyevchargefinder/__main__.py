"""Run the station finder HTTP service.

  python -m pyevchargefinder --port 8080
  OPEN_CHARGE_MAP_API_KEY=... python -m pyevchargefinder --provider openchargemap
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from aiohttp import web

from .config import FinderConfig
from .exceptions import ConfigError
from .server import build_app

_LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pyevchargefinder", description=__doc__.splitlines()[0])
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--provider", help="Station catalog id (default from EVFINDER_PROVIDER).")
    parser.add_argument("--owner-id", type=int, help="Owner of stored vehicles and favorites.")
    parser.add_argument("--seed", type=int, help="Seed for the synthetic catalog.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = FinderConfig.from_env()
    except ConfigError as exc:
        _LOGGER.error("Invalid configuration: %s", exc)
        return 2
    overrides = {
        "provider": args.provider,
        "owner_id": args.owner_id,
        "seed": args.seed,
    }
    config = dataclasses.replace(
        config,
        **{key: value for key, value in overrides.items() if value is not None},
    )
    web.run_app(build_app(config), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
