"""
Response parser

Validates raw JSON from Overpass, Nominatim and the local cache into models.
Shape problems surface as DataShapeError.
"""

from typing import Any, Dict

import pydantic

from ..errors import DataShapeError
from ..models import CachedOverpassResponse, NominatimResponse, OverpassResponse


class ResponseParser:
    """Parses API payloads into pydantic models"""

    @staticmethod
    def parse_overpass(data: Dict[str, Any]) -> OverpassResponse:
        """
        Parse an Overpass `out geom` response

        Args:
            data: JSON response from Overpass API

        Returns:
            OverpassResponse with ways, relations and nodes as typed elements
        """
        if not isinstance(data, dict) or "elements" not in data:
            raise DataShapeError("Overpass response has no 'elements'")
        try:
            return OverpassResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise DataShapeError(f"Malformed Overpass response: {e}") from e

    @staticmethod
    def parse_cached(data: Dict[str, Any]) -> CachedOverpassResponse:
        """Parse a saved response; it must carry `bbox` and `centroid`"""
        if not isinstance(data, dict):
            raise DataShapeError("Cached map data is not a JSON object")
        if "bbox" not in data:
            raise DataShapeError("no bbox was found")
        if "centroid" not in data:
            raise DataShapeError("no centroid was found")
        try:
            return CachedOverpassResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise DataShapeError(f"Malformed cached map data: {e}") from e

    @staticmethod
    def parse_nominatim(data: Dict[str, Any]) -> NominatimResponse:
        try:
            return NominatimResponse.model_validate(data)
        except pydantic.ValidationError as e:
            raise DataShapeError(f"Malformed Nominatim response: {e}") from e
