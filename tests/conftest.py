"""
Shared fixtures: synthetic Overpass / Nominatim payloads
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from turtlemaps.config import MapConfig  # noqa: E402
from turtlemaps.models import OverpassResponse  # noqa: E402


def pt(lat, lon):
    return {"lat": lat, "lon": lon}


@pytest.fixture
def house_way():
    return {
        "type": "way",
        "id": 101,
        "bounds": {"minlat": 35.0, "minlon": -79.0, "maxlat": 35.001, "maxlon": -78.999},
        "tags": {"building": "house"},
        "geometry": [
            pt(35.0, -79.0), pt(35.0, -78.999), pt(35.001, -78.999), pt(35.001, -79.0), pt(35.0, -79.0),
        ],
    }


@pytest.fixture
def lake_relation():
    """natural=water multipolygon: one outer ring, one island"""
    return {
        "type": "relation",
        "id": 202,
        "bounds": {"minlat": 35.002, "minlon": -79.0, "maxlat": 35.006, "maxlon": -78.996},
        "tags": {"natural": "water", "type": "multipolygon"},
        "members": [
            {
                "type": "way", "ref": 1, "role": "outer",
                "geometry": [pt(35.002, -79.0), pt(35.002, -78.996), pt(35.006, -78.996),
                             pt(35.006, -79.0), pt(35.002, -79.0)],
            },
            {
                "type": "way", "ref": 2, "role": "inner",
                "geometry": [pt(35.003, -78.999), pt(35.003, -78.997), pt(35.005, -78.997),
                             pt(35.003, -78.999)],
            },
        ],
    }


@pytest.fixture
def overpass_payload(house_way, lake_relation):
    return {
        "version": 0.6,
        "generator": "Overpass API 0.7.62",
        "osm3s": {
            "timestamp_osm_base": "2025-01-01T00:00:00Z",
            "copyright": "The data included in this document is from www.openstreetmap.org.",
        },
        "elements": [house_way, lake_relation],
    }


@pytest.fixture
def overpass_response(overpass_payload):
    return OverpassResponse.model_validate(overpass_payload)


@pytest.fixture
def nominatim_payload():
    return {
        "type": "FeatureCollection",
        "license": "Data © OpenStreetMap contributors, ODbL 1.0.",
        "features": [
            {
                "type": "Feature",
                "properties": {"display_name": "Durham, NC, USA"},
                "bbox": [-79.0076, 35.8668, -78.7556, 36.1370],
                "geometry": {"type": "Point", "coordinates": [-78.901, 35.996]},
            }
        ],
    }


@pytest.fixture
def test_config():
    """Config with no throttling delay"""
    config = MapConfig()
    config.api.min_request_interval_s = 0.01
    config.api.retry_delay = 0.0
    config.render.width = 200
    config.render.height = 200
    return config
