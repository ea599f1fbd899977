"""
Bounding box

Coordinates and bounding boxes are confusing because they are formatted
differently by different organizations. For example, OSM Overpass and
Nominatim define bbox differently:

    Overpass bbox clause:  south, west, north, east
    Nominatim GeoJSON:     west, south, east, north

Internally a box is always four named fields. Every external ordering gets its
own named constructor so that bare 4-tuples never cross a module boundary.

More info: https://wiki.openstreetmap.org/wiki/Bounding_box
"""

import math
from typing import List, Optional, Sequence, Tuple

from ..errors import NotReadyError, ValidationError
from ..models import Bounds


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class BoundingBox:
    """
    Geographic rectangle plus a snapshot of the values it was parsed from

    The snapshot (`*0` fields) is never touched by cropping, so re-cropping
    for a new aspect ratio always starts from the untouched source box.
    """

    def __init__(self):
        # Current values
        self.south: Optional[float] = None
        self.west: Optional[float] = None
        self.north: Optional[float] = None
        self.east: Optional[float] = None

        # Original values
        self.south0: Optional[float] = None
        self.west0: Optional[float] = None
        self.north0: Optional[float] = None
        self.east0: Optional[float] = None
        self.width0: Optional[float] = None
        self.height0: Optional[float] = None

    # ============================================================
    # Constructors
    # ============================================================

    @classmethod
    def from_min_max(cls, south: float, west: float, north: float, east: float) -> "BoundingBox":
        """Build a box from named edges and snapshot them as the original"""
        for name, value in (("south", south), ("west", west), ("north", north), ("east", east)):
            if not _is_number(value):
                raise ValidationError(f"bbox {name} must be a finite number, got {value!r}")
        if south >= north:
            raise ValidationError(f"bbox south ({south}) must be less than north ({north})")
        if west >= east:
            raise ValidationError(f"bbox west ({west}) must be less than east ({east})")

        bbox = cls()
        bbox.south, bbox.west, bbox.north, bbox.east = south, west, north, east
        bbox.overwrite_original()
        return bbox

    @classmethod
    def from_latitude_first(cls, values: Sequence[float]) -> "BoundingBox":
        """
        Parse `[south, west, north, east]`

        This is the order of the Overpass bbox clause, of cached map files and
        of `zoom_to_bbox`. Example for Durham, NC: [35.9857, -78.9154, 36.0076, -78.8882]
        """
        if len(values) != 4:
            raise ValidationError(f"Expected 4 bbox values, got {len(values)}")
        south, west, north, east = values
        return cls.from_min_max(south, west, north, east)

    @classmethod
    def from_osm_bounds(cls, bounds: Bounds) -> "BoundingBox":
        """Parse an element's `bounds` object from an Overpass response"""
        return cls.from_min_max(bounds.minlat, bounds.minlon, bounds.maxlat, bounds.maxlon)

    @classmethod
    def from_nominatim_bbox(cls, values: Sequence[float]) -> "BoundingBox":
        """Parse a GeoJSON feature bbox: `[west, south, east, north]`"""
        if len(values) != 4:
            raise ValidationError(f"Expected 4 bbox values, got {len(values)}")
        west, south, east, north = values
        return cls.from_min_max(south, west, north, east)

    def to_latitude_first(self, original: bool = False) -> List[float]:
        """`[south, west, north, east]`, the order used by cached map files"""
        self._require_valid()
        if original:
            return [self.south0, self.west0, self.north0, self.east0]
        return [self.south, self.west, self.north, self.east]

    # ============================================================
    # State
    # ============================================================

    def overwrite_original(self) -> None:
        """Overwrite the original snapshot with the current values"""
        self.south0, self.west0, self.north0, self.east0 = self.south, self.west, self.north, self.east
        self.width0 = self.width
        self.height0 = self.height

    def reset(self) -> None:
        """Undo any cropping by restoring the original snapshot"""
        self._require_valid()
        self.south, self.west, self.north, self.east = self.south0, self.west0, self.north0, self.east0

    def is_valid(self) -> bool:
        return all(_is_number(v) for v in (
            self.south, self.west, self.north, self.east,
            self.south0, self.west0, self.north0, self.east0,
            self.width0, self.height0,
        ))

    def _require_valid(self) -> None:
        if not self.is_valid():
            raise NotReadyError("bbox not ready")

    @property
    def width(self) -> float:
        if self.west is None or self.east is None:
            raise NotReadyError("Not initialized")
        return abs(self.east - self.west)

    @property
    def height(self) -> float:
        if self.north is None or self.south is None:
            raise NotReadyError("Not initialized")
        return abs(self.north - self.south)

    @property
    def center(self) -> Tuple[float, float]:
        """(lat, lon) of the current box"""
        self._require_valid()
        return (self.south + self.north) / 2, (self.west + self.east) / 2

    # ============================================================
    # Operations
    # ============================================================

    def crop_to_aspect(self, target_width: float, target_height: float) -> None:
        """
        Crop or re-crop the original box to match an output aspect ratio

        The wider dimension is shrunk around the original centre; the other
        dimension is left at its original span.
        """
        self._require_valid()
        if target_width <= 0 or target_height <= 0:
            raise ValidationError(
                f"Output size must be positive, got {target_width}x{target_height}"
            )

        # Map bbox width to output width in order to test height
        test_height = self.width0 * target_height / target_width

        if test_height < target_height:
            # Box is wider than the target: crop west and east
            new_width = self.height0 * target_width / target_height
            center = (self.west0 + self.east0) / 2
            self.west = center - new_width / 2
            self.east = center + new_width / 2
            self.south, self.north = self.south0, self.north0
        else:
            # Crop south and north
            new_height = self.width0 * target_height / target_width
            center = (self.south0 + self.north0) / 2
            self.south = center - new_height / 2
            self.north = center + new_height / 2
            self.west, self.east = self.west0, self.east0

    def overpass_bbox_string(self) -> str:
        """
        Per the Overpass Language Guide, "bounding box clauses always start
        with the lowest latitude (southernmost) followed by lowest longitude
        (westernmost), then highest latitude (northernmost) then highest
        longitude (easternmost)."
        """
        self._require_valid()
        return ",".join(str(v) for v in (self.south, self.west, self.north, self.east))

    def __repr__(self) -> str:
        return (
            f"BoundingBox(south={self.south}, west={self.west}, "
            f"north={self.north}, east={self.east})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return (self.south, self.west, self.north, self.east) == (
            other.south, other.west, other.north, other.east
        )
