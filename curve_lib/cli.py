"""Command-line preview of the curve algorithms.

Reads geometry from a JSON file, runs it through outline, dash and clip
steps, and renders the result to a PNG.

Input files hold plain JSON arrays: a list of curves (``[[[x, y], ...],
...]``) or, with ``--distances``, a polygon (list of rings) or a list of
polygons.

Usage:
    curve-lib-preview curves.json out.png --dash 4 6
    curve-lib-preview lake.json out.png --distances -5 -5 -5 --clip labels.json
    curve-lib-preview lake.json out.png --distances -2 -2 --seed 7 --save-json paths.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional, Sequence

from .api.services import PathService
from .config import DEFAULT_PREVIEW_SIZE, configure_logging

logger = logging.getLogger(__name__)


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='curve-lib-preview',
        description='Render outline, dash and clip results of curve_lib to PNG'
    )
    parser.add_argument('input', type=str,
                        help='JSON file with curves, or a region when --distances is given')
    parser.add_argument('output', type=str,
                        help='PNG file to write')
    parser.add_argument('--distances', type=float, nargs='+', default=None,
                        help='Offset distances in meters; outlines the input region')
    parser.add_argument('--no-input-ring', action='store_true',
                        help='Leave the region boundary out of the outline')
    parser.add_argument('--clip', type=str, default=None, metavar='OBSTACLES.json',
                        help='JSON file with polygons to cut the curves around')
    parser.add_argument('--dash', type=float, nargs=2, default=None, metavar=('DASH', 'GAP'),
                        help='Dash the curves: DASH is the blank spacing, GAP the drawn length (meters)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for ring rotation')
    parser.add_argument('--size', type=int, default=DEFAULT_PREVIEW_SIZE,
                        help=f'Image size in pixels (default: {DEFAULT_PREVIEW_SIZE})')
    parser.add_argument('--save-json', type=str, default=None,
                        help='Also write the resulting curves to this JSON file')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Log level (default: INFO)')
    return parser


def _load_json(path: str) -> Any:
    with open(path) as f:
        return json.load(f)


def run(args: argparse.Namespace) -> list:
    """Execute the steps selected by ``args`` and write the outputs.

    Returns:
        The resulting curves.
    """
    service = PathService(seed=args.seed)
    data = _load_json(args.input)

    region = None
    if args.distances is not None:
        region = data
        curves = service.outline(region, args.distances, include_input=not args.no_input_ring)
        logger.info("Outlined region into %d paths", len(curves))
    else:
        curves = data

    if args.dash is not None:
        dash_length, gap_length = args.dash
        curves = service.dash(curves, dash_length, gap_length)
        logger.info("Dashing produced %d dashes", len(curves))

    # Clipping runs last so no dash reaches into an obstacle
    obstacles = None
    if args.clip:
        obstacles = _load_json(args.clip)
        curves = service.clip(curves, obstacles)
        logger.info("Clipping left %d curves", len(curves))

    image = service.preview(curves, region=region, obstacles=obstacles, size=args.size)
    image.save(args.output)
    logger.info("Wrote %s", args.output)

    if args.save_json:
        with open(args.save_json, 'w') as f:
            json.dump(curves, f)
        logger.info("Wrote %s", args.save_json)

    return curves


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of ``curve-lib-preview``.

    Returns:
        Process exit code: 0 on success, 1 when the input cannot be read or
        an argument is rejected.
    """
    parser = _create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        run(args)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Cannot read input: %s", e)
        return 1
    except ValueError as e:
        logger.error("Invalid arguments: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
