"""
Local map data cache

Saved Overpass responses (plus `bbox` and `centroid`) that can be replayed
without querying Overpass again. Files are named after the slugified place,
eg "Paris, Idaho, USA" -> paris-idaho-usa.json.
"""

import json
import os
from typing import Optional, Sequence

from loguru import logger

from ..errors import DataShapeError
from ..geometry.bbox import BoundingBox
from ..geometry.zoom import slugify
from ..models import CachedOverpassResponse, OverpassResponse
from .parser import ResponseParser


class LocalMapCache:
    """Handles caching of map data to disk"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = cache_dir
        self.parser = ResponseParser()

    def path_for(self, name: str) -> str:
        """Cache file path for a place name, or a file name used as-is"""
        filename = name if name.endswith(".json") else f"{slugify(name)}.json"
        if os.path.isabs(filename) or not self.cache_dir:
            return filename
        return os.path.join(self.cache_dir, filename)

    def load(self, name: str) -> Optional[CachedOverpassResponse]:
        """Load cached map data if it exists"""
        cache_path = self.path_for(name)
        if not os.path.exists(cache_path):
            logger.debug(f"No cached map data at {cache_path}")
            return None

        try:
            with open(cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataShapeError(f"Failed to read cached map data {cache_path}: {e}") from e

        cached = self.parser.parse_cached(data)
        logger.info(f"Loaded {len(cached.elements)} elements from cache: {cache_path}")
        return cached

    def save(
        self,
        name: str,
        response: OverpassResponse,
        bbox: BoundingBox,
        centroid: Sequence[float]
    ) -> Optional[str]:
        """Save map data with its bbox and centroid; returns the path written"""
        if not self.cache_dir:
            return None
        cache_path = self.path_for(name)
        data = response.model_dump(mode="json", exclude_none=True)
        data["bbox"] = bbox.to_latitude_first(original=True)
        data["centroid"] = list(centroid)
        try:
            os.makedirs(os.path.dirname(cache_path) or ".", exist_ok=True)
            with open(cache_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved map data to cache: {cache_path}")
            logger.info(f'"{name}": "{os.path.basename(cache_path)}",')
        except OSError as e:
            logger.warning(f"Failed to save cache {cache_path}: {e}")
            return None
        return cache_path
