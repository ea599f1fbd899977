#!/usr/bin/env python
"""
Command-line interface for turtlemaps

Usage:
    python cli.py render "Durham, NC, USA" --output durham.svg
    python cli.py render "35.996, -78.901" --zoom 16 --format png --output durham.png
    python cli.py render "Durham, NC, USA" --local-json durham-nc-usa.json --cache-dir data
    python cli.py batch --input places.csv --output ./maps/
    python cli.py query "Taipei, Taiwan"
    python cli.py layers
"""

import os
import sys
import csv
import copy
import json
import argparse

from loguru import logger

from turtlemaps.config import get_config, validate_config
from turtlemaps.errors import TurtleMapsError
from turtlemaps.geometry import slugify
from turtlemaps.layers import DEFAULT_LAYERS
from turtlemaps.pipeline import StreetMap


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def _configure(args):
    """Copy the global config, apply command-line overrides and validate"""
    config = copy.deepcopy(get_config())
    if getattr(args, "width", None):
        config.render.width = args.width
    if getattr(args, "height", None):
        config.render.height = args.height
    if getattr(args, "format", None):
        config.render.format = args.format
    if getattr(args, "cache_dir", None):
        config.cache_dir = args.cache_dir
    validate_config(config)
    return config


def cmd_render(args):
    """Render a map for a single place"""
    setup_logging(args.verbose)

    try:
        config = _configure(args)
        street_map = StreetMap(config=config)
        result = street_map.jump(args.place, zoom=args.zoom, local_json=args.local_json)

        output_path = args.output or f"{slugify(args.place) or 'map'}.{config.render.format}"
        result.save(output_path)

        if args.save:
            saved = street_map.save_data()
            if saved is None:
                logger.warning("Map data not saved: no --cache-dir configured")

        logger.info(f"✓ Rendered: {output_path}")
        logger.info(f"  Centroid: {result.centroid}")
        logger.info(f"  Bbox: {result.bbox.to_latitude_first()}")
        logger.info(f"  Orphans: {len(result.dispatch.orphans)}, failed: {len(result.report.failed)}")

        if args.summary:
            summary = {
                "place": result.place,
                "centroid": list(result.centroid),
                "bbox": result.bbox.to_latitude_first(),
                "dispatch": result.dispatch.summary(),
                "render": result.report.summary(),
            }
            print(json.dumps(summary, indent=2))

        return 0

    except (TurtleMapsError, ValueError, OSError) as e:
        logger.error(f"Failed to render map: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def cmd_batch(args):
    """Render maps for multiple places from CSV"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    # Read places from CSV
    places = []
    with open(args.input, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            try:
                query = row["query"].strip()
                if not query:
                    raise ValueError("empty query")
                zoom = int(row["zoom"]) if row.get("zoom") else None
                places.append({"name": row.get("name") or query, "query": query, "zoom": zoom})
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping invalid row: {e}")

    if not places:
        logger.error("No valid places found in CSV")
        return 1

    logger.info(f"Processing {len(places)} places...")
    os.makedirs(args.output, exist_ok=True)

    try:
        config = _configure(args)
    except ValueError as e:
        logger.error(str(e))
        return 1

    street_map = StreetMap(config=config)
    success = 0
    failed = 0

    for i, place in enumerate(places, 1):
        logger.info(f"[{i}/{len(places)}] {place['name']}: {place['query']}")
        output_path = os.path.join(args.output, f"{slugify(place['name'])}.{config.render.format}")
        try:
            result = street_map.jump(place["query"], zoom=place["zoom"])
            result.save(output_path)
            success += 1
        except (TurtleMapsError, OSError) as e:
            logger.error(f"  Failed: {e}")
            failed += 1

    logger.info(f"Batch complete: {success} succeeded, {failed} failed")
    return 0 if failed == 0 else 1


def cmd_query(args):
    """Print the Overpass QL query for a place without fetching map data"""
    setup_logging(args.verbose)

    try:
        config = _configure(args)
        street_map = StreetMap(config=config)
        zoom = args.zoom if args.zoom is not None else config.default_zoom
        place = street_map.nominatim.resolve_coordinates(args.place, zoom)
        print(street_map.build_query(place.bbox))
        return 0
    except (TurtleMapsError, ValueError) as e:
        logger.error(f"Failed to build query: {e}")
        return 1


def cmd_layers(args):
    """List layers in classification order"""
    setup_logging(args.verbose)

    for i, layer in enumerate(DEFAULT_LAYERS, 1):
        print(f"{i:2d}. {layer.name}")
        print(f"    {layer.query_fragment()}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="turtlemaps: stylized maps from OpenStreetMap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Render a place:
    python cli.py render "Durham, NC, USA" --output durham.svg

  Render literal coordinates as PNG:
    python cli.py render "-13.162, -72.544" --format png --output machu-picchu.png

  Batch render from CSV (columns: name,query,zoom):
    python cli.py batch --input places.csv --output ./maps/
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_output_options(p):
        p.add_argument("--format", "-f", choices=["svg", "png"], help="Output format")
        p.add_argument("--width", type=int, help="Output width")
        p.add_argument("--height", type=int, help="Output height")
        p.add_argument("--cache-dir", help="Directory of cached map data")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a map for a place")
    render_parser.add_argument("place", help='Place name or "lat, lon"')
    render_parser.add_argument("--zoom", "-z", type=int, help="Zoom level 0-20")
    render_parser.add_argument("--output", "-o", help="Output file")
    render_parser.add_argument("--local-json", help="Replay cached map data instead of querying")
    render_parser.add_argument("--save", action="store_true", help="Save fetched map data to --cache-dir")
    render_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    add_output_options(render_parser)
    render_parser.set_defaults(func=cmd_render)

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Batch render from CSV file")
    batch_parser.add_argument("--input", "-i", required=True, help="Input CSV file (columns: name,query,zoom)")
    batch_parser.add_argument("--output", "-o", default="output", help="Output directory")
    add_output_options(batch_parser)
    batch_parser.set_defaults(func=cmd_batch)

    # Query command
    query_parser = subparsers.add_parser("query", help="Print the Overpass query for a place")
    query_parser.add_argument("place", help='Place name or "lat, lon"')
    query_parser.add_argument("--zoom", "-z", type=int, help="Zoom level 0-20")
    query_parser.set_defaults(func=cmd_query)

    # Layers command
    layers_parser = subparsers.add_parser("layers", help="List layers and their tag rules")
    layers_parser.set_defaults(func=cmd_layers)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
