"""
Tests for ring extraction, closedness and path building
"""

import pytest

from turtlemaps.errors import UnsupportedElementError, ValidationError
from turtlemaps.geometry import (
    BoundingBox, ClosedRingDetector, CoordinateProjector, GeometryExtractor,
    PathBuilder, build_compound_path, build_path, is_open
)
from turtlemaps.models import OSMNode, OSMRelation, OSMWay


def way(points, **kwargs):
    return OSMWay(
        id=kwargs.pop("id", 1),
        geometry=[{"lat": lat, "lon": lon} for lat, lon in points],
        **kwargs
    )


def member(points, role="", ref=1):
    return {
        "type": "way", "ref": ref, "role": role,
        "geometry": [{"lat": lat, "lon": lon} for lat, lon in points],
    }


SQUARE = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0)]


# ============================================================
# Extraction
# ============================================================

class TestGeometryExtractor:

    def test_way_gives_one_ring(self):
        geometry = GeometryExtractor.extract(way(SQUARE))
        assert len(geometry.rings) == 1
        assert len(geometry.rings[0]) == 5
        assert not geometry.has_cutouts

    def test_relation_skips_nodes_and_empty_members(self):
        relation = OSMRelation(id=2, members=[
            member(SQUARE, role="outer"),
            {"type": "node", "ref": 9, "role": "label", "lat": 0.5, "lon": 0.5},
            {"type": "way", "ref": 10, "role": "outer"},
            member([(2.0, 2.0), (2.0, 3.0)], role="outer", ref=11),
        ])
        assert len(GeometryExtractor.rings_for_relation(relation)) == 2

    def test_has_cutouts(self, lake_relation):
        relation = OSMRelation.model_validate(lake_relation)
        geometry = GeometryExtractor.extract(relation)

        assert geometry.has_cutouts
        assert len(geometry.outer) == 1
        assert len(geometry.inner) == 1

    def test_inner_anywhere_counts_as_cutout(self):
        relation = OSMRelation(id=3, members=[
            member(SQUARE, role="inner"),
            member(SQUARE, role="outer"),
        ])
        assert GeometryExtractor.has_cutouts(relation)

    def test_node_unsupported(self):
        with pytest.raises(UnsupportedElementError):
            GeometryExtractor.extract(OSMNode(id=4, lat=1.0, lon=2.0))

    def test_unknown_kind_unsupported(self):
        with pytest.raises(UnsupportedElementError):
            GeometryExtractor.extract({"type": "way"})


# ============================================================
# Closedness
# ============================================================

class TestClosedRingDetector:

    def test_closed_way(self):
        assert ClosedRingDetector.is_closed(way(SQUARE))

    def test_open_way(self):
        assert not ClosedRingDetector.is_closed(way(SQUARE[:-1]))

    def test_empty_way(self):
        assert not ClosedRingDetector.is_closed(way([]))

    def test_relation_repeat_in_outer(self, lake_relation):
        assert ClosedRingDetector.is_closed(OSMRelation.model_validate(lake_relation))

    def test_relation_repeat_only_in_inner_is_open(self):
        relation = OSMRelation(id=5, members=[
            member([(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)], role="outer"),
            member(SQUARE, role="inner"),
        ])
        assert not ClosedRingDetector.is_closed(relation)

    def test_relation_shared_vertex_across_members(self):
        relation = OSMRelation(id=6, members=[
            member([(0.0, 0.0), (0.0, 1.0)]),
            member([(0.0, 1.0), (1.0, 1.0)]),
        ])
        assert ClosedRingDetector.is_closed(relation)

    def test_node_is_never_closed(self):
        assert not ClosedRingDetector.is_closed(OSMNode(id=7, lat=0.0, lon=0.0))

    def test_unknown_kind(self):
        with pytest.raises(TypeError):
            ClosedRingDetector.is_closed("way")


# ============================================================
# Path strings
# ============================================================

def test_build_path():
    assert build_path([(0, 0), (10, 0), (10, 10)]) == "M 0,0 L 10,0 L 10,10"


def test_build_path_keeps_fractions():
    assert build_path([(0.5, 1.0), (2.25, 3)]) == "M 0.5,1 L 2.25,3"


@pytest.mark.parametrize("ring", [[], [(1, 1)]])
def test_build_path_needs_two_points(ring):
    with pytest.raises(ValidationError, match="At least 2 points are required"):
        build_path(ring)


def test_build_compound_path_reverses_inner():
    outer = [(0, 0), (10, 0), (10, 10), (0, 0)]
    inner = [(2, 2), (4, 2), (4, 4), (2, 2)]
    path = build_compound_path([outer], [inner])

    assert path.d == "M 0,0 L 10,0 L 10,10 L 0,0 M 2,2 L 4,4 L 4,2 L 2,2"
    assert path.fill_rule == "evenodd"
    assert path.is_compound
    assert path.inner_count == 1


def test_is_open():
    assert not is_open([(0, 0), (5, 5), (0.03, 0.03)])
    assert is_open([(0, 0), (5, 5), (0.1, 0)])
    assert is_open([(0, 0), (5, 5), (0.1, 0)], max_open_distance=0.05)
    assert not is_open([(0, 0), (5, 5), (0.1, 0)], max_open_distance=1)


def test_is_open_empty_ring():
    with pytest.raises(ValidationError):
        is_open([])


# ============================================================
# PathBuilder
# ============================================================

class TestPathBuilder:

    @pytest.fixture
    def builder(self):
        bbox = BoundingBox.from_min_max(0.0, 0.0, 1.0, 1.0)
        return PathBuilder(CoordinateProjector(bbox, 100, 100))

    def test_closed_way_is_fillable(self, builder):
        paths = builder.paths_for(way(SQUARE))
        assert len(paths) == 1
        assert paths[0].fillable
        assert paths[0].d.startswith("M 0,100 L 100,100")

    def test_open_way_is_stroke_only(self, builder):
        paths = builder.paths_for(way(SQUARE[:-1]))
        assert not paths[0].fillable

    def test_degenerate_way(self, builder):
        with pytest.raises(ValidationError):
            builder.paths_for(way([(0.5, 0.5)]))

    def test_relation_with_cutout_is_one_compound_path(self, builder):
        relation = OSMRelation(id=8, members=[
            member(SQUARE, role="outer"),
            member([(0.25, 0.25), (0.25, 0.5), (0.5, 0.5), (0.25, 0.25)], role="inner"),
        ])
        paths = builder.paths_for(relation)

        assert len(paths) == 1
        assert paths[0].is_compound
        assert paths[0].fillable
        assert paths[0].d.count("M ") == 2

    def test_relation_without_cutouts_is_one_path_per_ring(self, builder):
        relation = OSMRelation(id=9, members=[
            member(SQUARE, role="outer"),
            member([(0.2, 0.2), (0.2, 0.4), (0.4, 0.4), (0.2, 0.2)], role="outer"),
        ])
        paths = builder.paths_for(relation)

        assert len(paths) == 2
        assert not any(p.is_compound for p in paths)
        assert all(p.fillable for p in paths)

    def test_cutouts_without_outer(self, builder):
        relation = OSMRelation(id=10, members=[member(SQUARE, role="inner")])
        with pytest.raises(ValidationError):
            builder.paths_for(relation)

    def test_relation_with_no_rings(self, builder):
        relation = OSMRelation(id=11, members=[
            {"type": "node", "ref": 1, "lat": 0.5, "lon": 0.5},
        ])
        with pytest.raises(ValidationError):
            builder.paths_for(relation)

    def test_node(self, builder):
        with pytest.raises(UnsupportedElementError):
            builder.paths_for(OSMNode(id=12, lat=0.5, lon=0.5))
