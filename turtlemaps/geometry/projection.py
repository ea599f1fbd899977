"""
Coordinate projection from geographic bbox space to output space

A single linear min-max remap per axis. Latitude is inverted: north
(increasing latitude) renders toward the top of the output (decreasing y).
"""

from typing import Iterable, List, Optional, Tuple

from ..errors import NotReadyError, ValidationError
from ..models import GeoPoint
from .bbox import BoundingBox

Point = Tuple[float, float]


def constrain(value: float, low: float, high: float) -> float:
    """Clamp `value` to `[low, high]`"""
    if low >= high:
        raise ValidationError("Min should be less than max")
    if value <= low:
        return low
    if value >= high:
        return high
    return value


def linear_map(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float,
    clamp: bool = False
) -> float:
    """
    Re-map `value` from `[in_min, in_max]` to `[out_min, out_max]`

    Based on the p5.js `map()` implementation. With `clamp`, the result is
    constrained to the output range whichever direction it runs.
    """
    if in_min == in_max:
        raise ValidationError(f"Input range is empty ({in_min} == {in_max})")

    result = (value - in_min) / (in_max - in_min) * (out_max - out_min) + out_min
    if not clamp or out_min == out_max:
        return result
    return constrain(result, min(out_min, out_max), max(out_min, out_max))


class CoordinateProjector:
    """Maps GeoPoints inside a bbox onto a `width` x `height` surface"""

    def __init__(
        self,
        bbox: BoundingBox,
        out_width: float,
        out_height: float,
        precision: Optional[int] = None
    ):
        if not bbox.is_valid():
            raise NotReadyError("bbox not ready")
        self.bbox = bbox
        self.out_width = out_width
        self.out_height = out_height
        self.precision = precision

    def project(self, pt: GeoPoint) -> Point:
        # The bbox may have been reset or re-cropped since construction
        if not self.bbox.is_valid():
            raise NotReadyError("bbox not ready")

        b = self.bbox
        x = linear_map(pt.lon, b.west, b.east, 0, self.out_width)
        y = linear_map(pt.lat, b.north, b.south, 0, self.out_height)
        if self.precision is not None:
            x, y = round(x, self.precision), round(y, self.precision)
        return x, y

    def project_ring(self, points: Iterable[GeoPoint]) -> List[Point]:
        return [self.project(pt) for pt in points]


def project_geo_point(pt: GeoPoint, bbox: BoundingBox, out_width: float, out_height: float) -> Point:
    return CoordinateProjector(bbox, out_width, out_height).project(pt)
