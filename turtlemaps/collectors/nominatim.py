"""
Nominatim geocoding client

API providers: https://wiki.openstreetmap.org/wiki/Nominatim#Alternatives_.2F_Third-party_providers
Check the provider's usage policy before using their service!
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import requests
from loguru import logger

from ..config import APIConfig, get_config
from ..errors import DataShapeError, GeocodingError, ValidationError
from ..geometry.bbox import BoundingBox
from ..geometry.zoom import is_lat_lon, parse_lat_lon, zoom_to_bbox
from ..models import NominatimResponse, PointGeometry
from .parser import ResponseParser
from .throttle import RequestThrottle


@dataclass
class ResolvedPlace:
    bbox: BoundingBox
    centroid: Tuple[float, float]  # (lat, lon)


class NominatimClient:
    """A simple interface for the Nominatim search API"""

    def __init__(
        self,
        throttle: Optional[RequestThrottle] = None,
        api_config: Optional[APIConfig] = None,
        session: Optional[requests.Session] = None
    ):
        self.api = api_config or get_config().api
        self.base_url = self.api.nominatim_url
        self.timeout = self.api.geocode_timeout_s
        self.throttle = throttle or RequestThrottle(
            self.api.min_request_interval_s, self.api.max_queue
        )
        self.session = session or requests.Session()
        self.parser = ResponseParser()

    def _get(self, query: str) -> requests.Response:
        response = self.session.get(
            self.base_url,
            # geojson is required to obtain the centroid
            params={"q": query, "format": "geojson"},
            headers={"User-Agent": self.api.user_agent, "Referer": self.api.referer},
            timeout=self.timeout
        )
        response.raise_for_status()
        return response

    def free_form(self, query: str) -> NominatimResponse:
        """Free-form search, eg "Durham, NC, USA" """
        try:
            response = self.throttle.submit(self._get, query)
        except requests.exceptions.RequestException as e:
            logger.error(f"Nominatim request failed for {query!r}: {e}")
            raise GeocodingError(f"Nominatim request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DataShapeError(f"Nominatim response is not JSON: {e}") from e
        return self.parser.parse_nominatim(data)

    @staticmethod
    def get_centroid(response: NominatimResponse) -> Tuple[float, float]:
        """
        Coordinates of the first result as (lat, lon)

        GeoJSON stores points as [lon, lat]; the order is swapped here.
        """
        if not response.features:
            logger.error(f"Features not found. Response: {response.model_dump()}")
            raise DataShapeError("Nominatim response has no features")

        geometry = response.features[0].geometry
        if not geometry or geometry.get("type") != "Point":
            raise DataShapeError(f"API response was unexpected: geometry {geometry!r}")
        try:
            point = PointGeometry.model_validate(geometry)
        except ValueError as e:
            raise DataShapeError(f"API response was unexpected: {e}") from e

        lon, lat = point.coordinates[0], point.coordinates[1]
        return lat, lon

    def resolve_coordinates(self, query: str, zoom: int) -> ResolvedPlace:
        """
        Resolve a place name or a literal "lat, lon" string to a bbox and centroid

        Literal coordinates bypass geocoding entirely. An out-of-range
        coordinate or zoom level raises GeocodingError.
        """
        try:
            if is_lat_lon(query):
                centroid = parse_lat_lon(query)
                logger.info(f"Using literal coordinates {centroid}")
            else:
                centroid = self.get_centroid(self.free_form(query))
                logger.info(f"Geocoded {query!r} to {centroid}")

            bbox = zoom_to_bbox(centroid[0], centroid[1], zoom)
        except ValidationError as e:
            logger.error(f"Cannot resolve {query!r}: {e}")
            raise GeocodingError(f"Cannot resolve {query!r}: {e}") from e
        return ResolvedPlace(bbox=bbox, centroid=centroid)
