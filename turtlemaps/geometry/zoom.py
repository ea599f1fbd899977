"""
Zoom level to bounding box, and literal "lat, lon" input

Zoom levels: https://wiki.openstreetmap.org/wiki/Zoom_levels
"""

import math
import re
import unicodedata
from typing import Tuple

from ..errors import ValidationError
from .bbox import BoundingBox

EARTH_RADIUS_M = 6378137
TILE_SIZE_PX = 256
METERS_PER_DEGREE_LAT = 111320
MIN_ZOOM = 0
MAX_ZOOM = 20

_LAT_LON_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def zoom_to_bbox(lat: float, lon: float, zoom: int) -> BoundingBox:
    """
    Bounding box of one 256px tile's worth of ground centred on (lat, lon)

    The slippy-map ground resolution is converted to degrees with a flat
    111320 m/deg approximation (scaled by cos(lat) for longitude). Edges are
    rounded to 4 decimal places.
    """
    if isinstance(zoom, bool) or not isinstance(zoom, int):
        raise ValidationError(f"Zoom must be a whole number, got {zoom!r}")
    if not MIN_ZOOM <= zoom <= MAX_ZOOM:
        raise ValidationError(f"Zoom must be between {MIN_ZOOM} and {MAX_ZOOM}, got {zoom}")
    validate_lat_lon(lat, lon)
    # cos(90 deg) is not exactly zero in floating point
    if abs(lat) == 90:
        raise ValidationError(f"Cannot build a bbox at the pole (lat={lat})")

    earth_circumference = 2 * math.pi * EARTH_RADIUS_M
    meters_per_pixel = earth_circumference / (TILE_SIZE_PX * 2 ** zoom)
    meters_per_degree_lon = abs(math.cos(math.radians(lat)) * METERS_PER_DEGREE_LAT)

    half_width = (TILE_SIZE_PX / 2) * meters_per_pixel / meters_per_degree_lon
    half_height = (TILE_SIZE_PX / 2) * meters_per_pixel / METERS_PER_DEGREE_LAT

    return BoundingBox.from_min_max(
        south=round(lat - half_height, 4),
        west=round(lon - half_width, 4),
        north=round(lat + half_height, 4),
        east=round(lon + half_width, 4),
    )


def validate_lat_lon(lat: float, lon: float) -> None:
    if not -90 <= lat <= 90:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180 <= lon <= 180:
        raise ValidationError("Longitude must be between -180 and 180")


def is_lat_lon(text: str) -> bool:
    """Does the text look like "35.996, -78.901"?"""
    return _LAT_LON_RE.match(text) is not None


def parse_lat_lon(text: str) -> Tuple[float, float]:
    match = _LAT_LON_RE.match(text)
    if not match:
        raise ValidationError(f"Not a 'lat, lon' pair: {text!r}")
    lat, lon = float(match.group(1)), float(match.group(2))
    validate_lat_lon(lat, lon)
    return lat, lon


def slugify(text: str) -> str:
    """File-name slug: 'Paris, Idaho, USA' -> 'paris-idaho-usa'"""
    text = unicodedata.normalize("NFKD", str(text))
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = text.strip().lower()
    text = re.sub(r"[^a-z0-9 -]", "", text)
    text = re.sub(r"\s+", "-", text)
    return re.sub(r"-+", "-", text)
