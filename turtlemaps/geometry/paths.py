"""
Path building

Converts projected rings into SVG-style path data ("M x,y L x,y ...").
Relations with cutouts become a single compound path: outer rings first, then
each inner ring in reversed point order, painted with the even-odd fill rule.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..errors import ValidationError
from ..models import OSMRelation, OSMWay
from .closedness import ClosedRingDetector
from .extractor import GeometryExtractor
from .projection import CoordinateProjector, Point

# Output units. Start/end points further apart than this make a ring "open"
DEFAULT_MAX_OPEN_DISTANCE = 0.05

Ring = List[Point]


@dataclass
class ProjectedPath:
    """One drawable path, ready for a rendering surface"""
    rings: List[Ring]
    d: str
    fillable: bool
    fill_rule: Optional[str] = None  # "evenodd" for compound paths
    inner_count: int = 0

    @property
    def is_compound(self) -> bool:
        return self.inner_count > 0


def _fmt(value: float) -> str:
    # 12.0 -> "12", 12.5 -> "12.5"
    return f"{value:g}" if float(value).is_integer() else repr(float(value))


def build_path(ring: Sequence[Point]) -> str:
    """
    Form a command string from a list of `(x, y)` points

    The first command is always "M" (move to), the rest "L" (line to).
    Relative coordinates are not supported. Command strings may be joined by
    a space to form shapes with inner boundaries.
    """
    if len(ring) < 2:
        raise ValidationError("At least 2 points are required")

    commands = [f"M {_fmt(ring[0][0])},{_fmt(ring[0][1])}"]
    for x, y in ring[1:]:
        commands.append(f"L {_fmt(x)},{_fmt(y)}")
    return " ".join(commands)


def build_compound_path(
    outer_rings: Sequence[Sequence[Point]],
    inner_rings: Sequence[Sequence[Point]],
    fillable: bool = True
) -> ProjectedPath:
    """
    Outer rings followed by inner rings as contours

    Inner rings are emitted in reverse order: holes must wind opposite to the
    outer boundary.
    """
    outer = [list(r) for r in outer_rings]
    inner = [list(reversed(r)) for r in inner_rings]
    commands = [build_path(r) for r in outer + inner]
    return ProjectedPath(
        rings=outer + inner,
        d=" ".join(commands),
        fillable=fillable,
        fill_rule="evenodd",
        inner_count=len(inner),
    )


def is_open(ring: Sequence[Point], max_open_distance: float = DEFAULT_MAX_OPEN_DISTANCE) -> bool:
    """True if the first and last points are further apart than `max_open_distance`"""
    if not ring:
        raise ValidationError("Cannot test an empty ring")
    (x1, y1), (x2, y2) = ring[0], ring[-1]
    return math.hypot(x1 - x2, y1 - y2) > max_open_distance


class PathBuilder:
    """Builds ProjectedPaths for ways and relations"""

    def __init__(
        self,
        projector: CoordinateProjector,
        max_open_distance: float = DEFAULT_MAX_OPEN_DISTANCE
    ):
        self.projector = projector
        self.max_open_distance = max_open_distance
        self.extractor = GeometryExtractor()
        self.detector = ClosedRingDetector()

    def simple_path(self, ring: Sequence[Point], closed: bool) -> ProjectedPath:
        ring = list(ring)
        d = build_path(ring)
        return ProjectedPath(
            rings=[ring],
            d=d,
            fillable=closed and not is_open(ring, self.max_open_distance),
        )

    def paths_for(self, element) -> List[ProjectedPath]:
        """
        Drawable paths for one element

        - Way: one path.
        - Relation with cutouts: one compound path.
        - Relation without cutouts: one independent path per member ring.

        Raises ExtractionError subclasses for nodes and degenerate rings.
        """
        geometry = self.extractor.extract(element)
        closed = self.detector.is_closed(element)
        project = self.projector.project_ring

        if isinstance(element, OSMWay):
            return [self.simple_path(project(geometry.rings[0]), closed)]

        if isinstance(element, OSMRelation) and geometry.has_cutouts:
            outer = [project(r) for r in geometry.outer]
            inner = [project(r) for r in geometry.inner]
            if not outer:
                raise ValidationError(f"Relation {element.id} has cutouts but no outer ring")
            fillable = closed and not is_open(outer[0], self.max_open_distance)
            return [build_compound_path(outer, inner, fillable=fillable)]

        if not geometry.rings:
            raise ValidationError(f"Relation {element.id} has no way members with geometry")
        return [self.simple_path(project(r), closed) for r in geometry.rings]
