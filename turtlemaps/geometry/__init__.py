"""
Geometry pipeline

- BoundingBox: geographic rectangle with an original snapshot for re-cropping
- CoordinateProjector: bbox space to output space
- GeometryExtractor: rings from ways and relations
- ClosedRingDetector: fill eligibility
- PathBuilder: path data for the rendering surfaces
- zoom_to_bbox: centre + zoom level to bbox
"""

from .bbox import BoundingBox
from .projection import CoordinateProjector, linear_map, constrain, project_geo_point
from .extractor import GeometryExtractor, ElementGeometry
from .closedness import ClosedRingDetector
from .paths import (
    DEFAULT_MAX_OPEN_DISTANCE, PathBuilder, ProjectedPath,
    build_path, build_compound_path, is_open
)
from .zoom import zoom_to_bbox, is_lat_lon, parse_lat_lon, slugify

__all__ = [
    "BoundingBox",
    "CoordinateProjector",
    "linear_map",
    "constrain",
    "project_geo_point",
    "GeometryExtractor",
    "ElementGeometry",
    "ClosedRingDetector",
    "DEFAULT_MAX_OPEN_DISTANCE",
    "PathBuilder",
    "ProjectedPath",
    "build_path",
    "build_compound_path",
    "is_open",
    "zoom_to_bbox",
    "is_lat_lon",
    "parse_lat_lon",
    "slugify",
]
