"""
Tests for linear_map, constrain and CoordinateProjector
"""

import pytest

from turtlemaps.errors import NotReadyError, ValidationError
from turtlemaps.geometry import (
    BoundingBox, CoordinateProjector, constrain, linear_map, project_geo_point
)
from turtlemaps.models import GeoPoint


def test_constrain():
    assert constrain(5, 0, 10) == 5
    assert constrain(-1, 0, 10) == 0
    assert constrain(11, 0, 10) == 10


def test_constrain_rejects_empty_range():
    with pytest.raises(ValidationError, match="Min should be less than max"):
        constrain(1, 10, 0)


def test_linear_map_basic_and_inverted_output():
    assert linear_map(5, 0, 10, 0, 100) == 50
    assert linear_map(2.5, 0, 10, 100, 0) == 75


def test_linear_map_extrapolates_without_clamp():
    assert linear_map(20, 0, 10, 0, 100) == 200


def test_linear_map_clamp_either_direction():
    assert linear_map(20, 0, 10, 0, 100, clamp=True) == 100
    assert linear_map(20, 0, 10, 100, 0, clamp=True) == 0
    assert linear_map(-5, 0, 10, 100, 0, clamp=True) == 100


def test_linear_map_empty_input_range():
    with pytest.raises(ValidationError):
        linear_map(1, 3, 3, 0, 100)


class TestCoordinateProjector:

    @pytest.fixture
    def projector(self):
        bbox = BoundingBox.from_min_max(10.0, 20.0, 12.0, 24.0)
        return CoordinateProjector(bbox, 800, 400)

    def test_corners(self, projector):
        # North-west is the top-left, south-east the bottom-right
        assert projector.project(GeoPoint(lat=12.0, lon=20.0)) == (0, 0)
        assert projector.project(GeoPoint(lat=10.0, lon=24.0)) == (800, 400)

    def test_latitude_inverted(self, projector):
        _, y_north = projector.project(GeoPoint(lat=11.5, lon=22.0))
        _, y_south = projector.project(GeoPoint(lat=10.5, lon=22.0))
        assert y_north < y_south

    def test_center(self, projector):
        assert projector.project(GeoPoint(lat=11.0, lon=22.0)) == (400, 200)

    def test_outside_points_are_not_clamped(self, projector):
        x, y = projector.project(GeoPoint(lat=13.0, lon=26.0))
        assert x == pytest.approx(1200)
        assert y == pytest.approx(-200)

    def test_precision_rounds(self):
        bbox = BoundingBox.from_min_max(0.0, 0.0, 3.0, 3.0)
        projector = CoordinateProjector(bbox, 1, 1, precision=3)
        assert projector.project(GeoPoint(lat=2.0, lon=1.0)) == (0.333, 0.333)

    def test_project_ring(self, projector):
        ring = [GeoPoint(lat=12.0, lon=20.0), GeoPoint(lat=11.0, lon=22.0)]
        assert projector.project_ring(ring) == [(0, 0), (400, 200)]

    def test_requires_valid_bbox(self):
        with pytest.raises(NotReadyError):
            CoordinateProjector(BoundingBox(), 100, 100)

    def test_bbox_invalidated_after_construction(self, projector):
        projector.bbox.west = None
        with pytest.raises(NotReadyError):
            projector.project(GeoPoint(lat=11.0, lon=22.0))


def test_project_geo_point():
    bbox = BoundingBox.from_min_max(0.0, 0.0, 1.0, 1.0)
    assert project_geo_point(GeoPoint(lat=0.0, lon=1.0), bbox, 10, 10) == (10, 10)
