"""
Data collectors

- RequestThrottle: minimum spacing between requests to a shared endpoint
- OverpassAPIClient: map data from the Overpass API
- NominatimClient: place name to centroid and bbox
- LocalMapCache: replay of previously fetched areas
"""

from .throttle import RequestThrottle
from .parser import ResponseParser
from .overpass import OverpassAPIClient
from .nominatim import NominatimClient, ResolvedPlace
from .cache import LocalMapCache

__all__ = [
    "RequestThrottle",
    "ResponseParser",
    "OverpassAPIClient",
    "NominatimClient",
    "ResolvedPlace",
    "LocalMapCache",
]
