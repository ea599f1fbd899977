"""
Geometry extraction

Turns Overpass elements into ordered rings of GeoPoints. A way yields one
ring; a relation yields one ring per way member that carries geometry.

Known limitation: rings follow member order exactly. A boundary split across
several way members is not stitched into one contiguous ring.
"""

from dataclasses import dataclass, field
from typing import List

from ..errors import UnsupportedElementError
from ..models import GeoPoint, OSMNode, OSMRelation, OSMWay

GeoRing = List[GeoPoint]


@dataclass
class ElementGeometry:
    """Rings of one element, grouped for rendering"""
    rings: List[GeoRing]
    has_cutouts: bool = False
    outer: List[GeoRing] = field(default_factory=list)
    inner: List[GeoRing] = field(default_factory=list)


class GeometryExtractor:
    """Extracts point rings from ways and relations"""

    @staticmethod
    def ring_for_way(way: OSMWay) -> GeoRing:
        return list(way.geometry)

    @staticmethod
    def rings_for_relation(relation: OSMRelation) -> List[GeoRing]:
        """One ring per way member with geometry; nodes and empty members are skipped"""
        return [
            list(member.geometry)
            for member in relation.members
            if member.type == "way" and member.geometry
        ]

    @staticmethod
    def _rings_with_role(relation: OSMRelation, role: str) -> List[GeoRing]:
        return [
            list(member.geometry)
            for member in relation.members
            if member.type == "way" and member.geometry and member.role == role
        ]

    @classmethod
    def outer_rings(cls, relation: OSMRelation) -> List[GeoRing]:
        return cls._rings_with_role(relation, "outer")

    @classmethod
    def inner_rings(cls, relation: OSMRelation) -> List[GeoRing]:
        return cls._rings_with_role(relation, "inner")

    @staticmethod
    def has_cutouts(relation: OSMRelation) -> bool:
        """Is at least one member's role "inner"?"""
        return any(member.role == "inner" for member in relation.members)

    @classmethod
    def extract(cls, element) -> ElementGeometry:
        if isinstance(element, OSMWay):
            return ElementGeometry(rings=[cls.ring_for_way(element)])
        if isinstance(element, OSMRelation):
            if cls.has_cutouts(element):
                return ElementGeometry(
                    rings=cls.rings_for_relation(element),
                    has_cutouts=True,
                    outer=cls.outer_rings(element),
                    inner=cls.inner_rings(element),
                )
            return ElementGeometry(rings=cls.rings_for_relation(element))
        if isinstance(element, OSMNode):
            raise UnsupportedElementError(f"Can only draw ways and relations, got node {element.id}")
        raise UnsupportedElementError(f"Unknown element kind: {type(element).__name__}")
