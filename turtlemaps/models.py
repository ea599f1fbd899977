"""
Pydantic models for the JSON documents turtlemaps reads and writes

- Overpass `out geom` responses (elements are a tagged union on `type`)
- Locally cached responses (same shape plus `bbox` and `centroid`)
- Nominatim GeoJSON search responses
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# Overpass Types
# ============================================================

class GeoPoint(BaseModel):
    """Geographic coordinate in degrees (WGS84)"""
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class Bounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    minlat: float
    minlon: float
    maxlat: float
    maxlon: float


class RelationMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["node", "way", "relation"]
    ref: int
    role: str = ""  # "outer", "inner" or unset
    geometry: Optional[List[GeoPoint]] = None  # way members only
    lat: Optional[float] = None  # node members only
    lon: Optional[float] = None


class _ElementBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    bounds: Optional[Bounds] = None
    tags: Dict[str, str] = Field(default_factory=dict)


class OSMNode(_ElementBase):
    type: Literal["node"] = "node"
    lat: float
    lon: float


class OSMWay(_ElementBase):
    type: Literal["way"] = "way"
    geometry: List[GeoPoint] = Field(default_factory=list)
    nodes: Optional[List[int]] = None


class OSMRelation(_ElementBase):
    type: Literal["relation"] = "relation"
    members: List[RelationMember] = Field(default_factory=list)


OSMElement = Annotated[Union[OSMNode, OSMWay, OSMRelation], Field(discriminator="type")]


class Osm3s(BaseModel):
    timestamp_osm_base: Optional[str] = None
    copyright: Optional[str] = None


class OverpassResponse(BaseModel):
    version: Optional[float] = None
    generator: Optional[str] = None
    osm3s: Optional[Osm3s] = None
    elements: List[OSMElement] = Field(default_factory=list)


class CachedOverpassResponse(OverpassResponse):
    """A saved response that can be replayed without querying Overpass"""
    bbox: List[float] = Field(min_length=4, max_length=4)  # [south, west, north, east]
    centroid: List[float] = Field(min_length=2, max_length=2)  # [lat, lon]


# ============================================================
# Nominatim Types
# ============================================================

class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(min_length=2)  # [longitude, latitude]


class NominatimFeature(BaseModel):
    type: str = "Feature"
    properties: Dict[str, Any] = Field(default_factory=dict)
    bbox: Optional[List[float]] = None  # [west, south, east, north]
    geometry: Optional[Dict[str, Any]] = None


class NominatimResponse(BaseModel):
    type: str = "FeatureCollection"
    license: Optional[str] = None
    features: Optional[List[NominatimFeature]] = None
