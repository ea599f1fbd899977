"""
Closed ring detection (decides fill eligibility)
"""

from typing import Set, Tuple

from ..models import OSMNode, OSMRelation, OSMWay


class ClosedRingDetector:

    @staticmethod
    def is_closed(element) -> bool:
        """
        Should this element be treated as a closed, fillable shape?

        Ways: first and last point are exactly equal.

        Relations: any point repeats across the non-inner, non-node members.
        This is a loose heuristic, not a topology check. A coincidental shared
        vertex reads as closed, and a ring closing on a point that is not
        bit-identical reads as open.
        """
        if isinstance(element, OSMWay):
            if not element.geometry:
                return False
            return element.geometry[0] == element.geometry[-1]

        if isinstance(element, OSMRelation):
            seen: Set[Tuple[float, float]] = set()
            for member in element.members:
                if member.role == "inner" or member.type == "node":
                    continue
                for pt in member.geometry or []:
                    key = (pt.lat, pt.lon)
                    if key in seen:
                        return True
                    seen.add(key)
            return False

        if isinstance(element, OSMNode):
            return False
        raise TypeError(f"Unknown element kind: {type(element).__name__}")
