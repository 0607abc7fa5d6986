#!/usr/bin/env python3
"""Query point elevations and profiles from a local tile directory.

Usage:
    python scripts/query_elevation.py point 46.5 7.25
    python scripts/query_elevation.py profile request.json
    echo '{"step": 1000, "path": [[[46.0, 7.0], [46.1, 7.1]]]}' | \
        python scripts/query_elevation.py profile -
    python scripts/query_elevation.py tiles

Configuration comes from DEM_* environment variables (see
src/application/config.py); ``--data-dir`` overrides DEM_DATA_DIR.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from application import ElevationService, ServiceConfig
from domain.terrain.errors import InvalidRequestError, TerrainError
from infrastructure.terrain import HgtTileRepository

logger = logging.getLogger("query_elevation")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", type=Path, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    point = sub.add_parser("point", help="Elevation at one coordinate")
    point.add_argument("latitude")
    point.add_argument("longitude")

    profile = sub.add_parser("profile", help="Elevation profile from a JSON body")
    profile.add_argument("request", help="JSON file, or - for stdin")

    sub.add_parser("tiles", help="List tiles available in the data directory")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ServiceConfig.from_env()
    if args.data_dir is not None:
        config = config.model_copy(update={"data_dir": args.data_dir})
    service = ElevationService.from_config(config)

    try:
        if args.command == "point":
            print(service.point_elevation(args.latitude, args.longitude))
        elif args.command == "profile":
            if args.request == "-":
                body = sys.stdin.read()
            else:
                body = Path(args.request).read_text(encoding="utf-8")
            print(json.dumps(service.profile(body)))
        else:
            repository = HgtTileRepository(
                config.data_dir, config.square_size, config.tile_extension
            )
            for tile_id in repository.available_tiles():
                print(tile_id)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except InvalidRequestError as e:
        print(json.dumps({"errors": e.errors}, default=str), file=sys.stderr)
        return 2
    except TerrainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
