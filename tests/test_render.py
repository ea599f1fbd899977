"""
Tests for the SVG and canvas surfaces
"""

import pytest

from turtlemaps.geometry import BoundingBox, CoordinateProjector
from turtlemaps.layers import LayerDispatcher, stroke_weight_for
from turtlemaps.models import OSMNode, OSMWay
from turtlemaps.render import CanvasRenderer, SvgRenderer, parse_color

BACKGROUND = "rgb(241, 244, 203)"


@pytest.fixture
def projector():
    # Covers both fixture elements; 0.004 x 0.006 degrees onto 200 x 200
    bbox = BoundingBox.from_min_max(35.0, -79.0, 35.006, -78.996)
    return CoordinateProjector(bbox, 200, 200)


@pytest.fixture
def dispatch(overpass_response):
    return LayerDispatcher().dispatch(overpass_response.elements)


def test_parse_color():
    assert parse_color("rgba(255, 255, 255, 1)") == (255, 255, 255, 255)
    assert parse_color("rgba(10, 20, 30, 0.5)") == (10, 20, 30, 128)
    assert parse_color("rgb(65, 54, 51)") == (65, 54, 51, 255)
    assert parse_color("#ff0000") == (255, 0, 0, 255)
    assert parse_color(None) is None


class TestSvgRenderer:

    def test_render(self, dispatch, projector):
        renderer = SvgRenderer(200, 200, background=BACKGROUND)
        report = renderer.render(dispatch, projector)
        svg = renderer.to_string()

        assert report.drawn == 2
        assert report.paths == 2
        assert report.compound_paths == 1
        assert report.failed == []
        assert 'id="buildings-residential"' in svg
        assert 'id="water"' in svg
        assert 'fill-rule="evenodd"' in svg
        assert svg.count("<path") == 2

    def test_layers_painted_in_reverse(self, dispatch, projector):
        renderer = SvgRenderer(200, 200)
        report = renderer.render(dispatch, projector)
        svg = renderer.to_string()

        assert report.layer_order[0] == "No Trespassing"
        assert report.layer_order[-1] == "Buildings - Residential"
        # Later in the document means painted on top
        assert svg.index('id="water"') < svg.index('id="buildings-residential"')

    def test_open_way_is_not_filled(self, projector):
        road = OSMWay(id=5, tags={"highway": "primary"}, geometry=[
            {"lat": 35.001, "lon": -79.0}, {"lat": 35.004, "lon": -78.997},
        ])
        renderer = SvgRenderer(200, 200)
        renderer.render(LayerDispatcher().dispatch([road]), projector)
        svg = renderer.to_string()

        assert 'd="M 0,166.66' in svg
        assert 'fill="none"' in svg

    def test_failed_elements_are_reported(self, house_way, projector):
        broken = OSMWay(id=7, tags={"building": "yes"}, geometry=[{"lat": 35.0, "lon": -79.0}])
        node = OSMNode(id=8, tags={"building": "yes"}, lat=35.0, lon=-79.0)
        house = OSMWay.model_validate(house_way)

        renderer = SvgRenderer(200, 200)
        report = renderer.render(LayerDispatcher().dispatch([broken, node, house]), projector)

        assert report.drawn == 1
        assert [(f.element_type, f.element_id) for f in report.failed] == [("way", 7), ("node", 8)]
        assert all(f.layer == "Buildings - All" for f in report.failed)

    def test_drawing_failure_is_reported(self, dispatch, projector):
        class NoCutouts(SvgRenderer):
            def draw_path(self, layer, path, stroke_weight):
                if path.is_compound:
                    raise ValueError("compound paths unsupported")
                super().draw_path(layer, path, stroke_weight)

        renderer = NoCutouts(200, 200)
        report = renderer.render(dispatch, projector)

        assert [(f.element_type, f.element_id) for f in report.failed] == [("relation", 202)]
        assert report.failed[0].reason == "compound paths unsupported"
        assert report.drawn == 1
        assert report.paths == 1
        assert report.compound_paths == 0
        assert renderer.to_string().count("<path") == 1

    def test_stroke_weight_per_element(self, projector):
        service = OSMWay(id=9, tags={"highway": "service"}, geometry=[
            {"lat": 35.001, "lon": -79.0}, {"lat": 35.004, "lon": -78.997},
        ])
        footway = OSMWay(id=10, tags={"highway": "footway"}, geometry=[
            {"lat": 35.002, "lon": -79.0}, {"lat": 35.005, "lon": -78.997},
        ])
        renderer = SvgRenderer(200, 200, stroke_weight_fn=stroke_weight_for)
        renderer.render(LayerDispatcher().dispatch([service, footway]), projector)
        svg = renderer.to_string()

        # Both in "Paths" (0.5); only the service road overrides it
        assert 'stroke-width="0.5"' in svg
        assert svg.count('stroke-width="1.3"') == 1

    def test_layer_stroke_weight_without_fn(self, projector):
        service = OSMWay(id=9, tags={"highway": "service"}, geometry=[
            {"lat": 35.001, "lon": -79.0}, {"lat": 35.004, "lon": -78.997},
        ])
        renderer = SvgRenderer(200, 200)
        renderer.render(LayerDispatcher().dispatch([service]), projector)
        assert 'stroke-width="1.3"' not in renderer.to_string()

    def test_save(self, dispatch, projector, tmp_path):
        renderer = SvgRenderer(200, 200, background=BACKGROUND)
        renderer.render(dispatch, projector)
        output = renderer.save(str(tmp_path / "maps" / "durham.svg"))

        content = (tmp_path / "maps" / "durham.svg").read_text(encoding="utf-8")
        assert output.endswith("durham.svg")
        assert "<svg" in content


class TestCanvasRenderer:

    def test_render(self, dispatch, projector):
        renderer = CanvasRenderer(200, 200, background=BACKGROUND)
        report = renderer.render(dispatch, projector)

        assert renderer.image.size == (200, 200)
        assert report.compound_paths == 1

        # Lake body is filled, the island is not, the house is on top
        assert renderer.image.getpixel((20, 20)) == parse_color("rgba(138, 181, 204, 1)")
        assert renderer.image.getpixel((130, 90)) == parse_color(BACKGROUND)
        assert renderer.image.getpixel((25, 185)) == parse_color("rgba(238, 86, 66, 1)")

    def test_save(self, dispatch, projector, tmp_path):
        renderer = CanvasRenderer(200, 200, background=BACKGROUND)
        renderer.render(dispatch, projector)
        renderer.save(str(tmp_path / "durham.png"))

        assert (tmp_path / "durham.png").stat().st_size > 0
