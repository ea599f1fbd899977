"""
StreetMap orchestrator

"Jump to a place" flow:

  1. Resolve the place: literal "lat, lon" or Nominatim geocoding,
     or replay a locally cached response
  2. Build one Overpass QL query from the layer list and bbox
  3. Fetch map data (throttled)
  4. Crop the bbox to the output aspect ratio
  5. Dispatch elements to layers (first match wins)
  6. Project, build paths and paint (SVG or raster canvas)

Jumps are serialised: a second jump issued while one is in flight waits for
it to finish.
"""

import threading
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from loguru import logger

from .collectors import LocalMapCache, NominatimClient, OverpassAPIClient, RequestThrottle
from .config import MapConfig, get_config
from .errors import DataShapeError, NotReadyError, ValidationError
from .geometry.bbox import BoundingBox
from .geometry.projection import CoordinateProjector
from .layers import (
    DEFAULT_LAYERS, DispatchResult, LayerDefinition, LayerDispatcher,
    build_overpass_query, stroke_weight_for
)
from .models import OverpassResponse
from .render import RENDERERS, BaseRenderer, RenderReport


@dataclass
class MapResult:
    place: str
    bbox: BoundingBox
    centroid: Tuple[float, float]
    dispatch: DispatchResult
    report: RenderReport
    renderer: BaseRenderer

    def save(self, output_path: str) -> str:
        return self.renderer.save(output_path)


class StreetMap:
    """
    Fetches, classifies and draws map layers for a place

    Usage:
        street_map = StreetMap()
        result = street_map.jump("Durham, NC, USA")
        result.save("durham.svg")
    """

    def __init__(
        self,
        config: Optional[MapConfig] = None,
        layers: Optional[Sequence[LayerDefinition]] = None,
        nominatim: Optional[NominatimClient] = None,
        overpass: Optional[OverpassAPIClient] = None,
        cache: Optional[LocalMapCache] = None,
        output_format: Optional[str] = None
    ):
        self.config = config or get_config()
        api = self.config.api

        # One throttle shared by both clients unless they bring their own
        throttle = RequestThrottle(api.min_request_interval_s, api.max_queue)
        self.nominatim = nominatim or NominatimClient(throttle=throttle, api_config=api)
        self.overpass = overpass or OverpassAPIClient(throttle=throttle, api_config=api)
        self.cache = cache or LocalMapCache(self.config.cache_dir)

        self.dispatcher = LayerDispatcher(layers if layers is not None else DEFAULT_LAYERS)
        # Road-class stroke weights apply to the default layers only
        self.stroke_weight_fn = stroke_weight_for if layers is None else None
        self.output_format = output_format or self.config.render.format
        if self.output_format not in RENDERERS:
            raise ValueError(f"Unknown output format: {self.output_format!r}")

        self._jump_lock = threading.Lock()

        # State of the last jump
        self.place: Optional[str] = None
        self.bbox: Optional[BoundingBox] = None
        self.centroid: Optional[Tuple[float, float]] = None
        self.data: Optional[OverpassResponse] = None

    def build_query(self, bbox: BoundingBox) -> str:
        return build_overpass_query(
            self.dispatcher.definitions, bbox, self.config.api.overpass_query_timeout_s
        )

    def jump(
        self,
        query: str,
        zoom: Optional[int] = None,
        local_json: Optional[str] = None
    ) -> MapResult:
        """
        Jump to a place and draw it

        Args:
            query: Place name ("Taipei, Taiwan") or literal "lat, lon"
            zoom: Zoom level 0-20 (default from config); ignored for local_json
            local_json: Name or path of cached map data to replay instead of
                querying Nominatim and Overpass

        Returns:
            MapResult with the dispatch summary, render report and surface

        Raises:
            GeocodingError: the place, zoom or literal coordinates could not
                be resolved to a bbox
            FetchError: the map data request failed
            DataShapeError: a response or cached file has an unexpected shape
            FileNotFoundError: local_json does not exist

        These abort the jump and reach the caller. Per-element problems do
        not: they are collected in `MapResult.report.failed`.
        """
        with self._jump_lock:
            logger.info(f"Jumping to {query!r}")
            if local_json:
                bbox, centroid, data = self._load_local(local_json)
            else:
                bbox, centroid, data = self._fetch(query, zoom if zoom is not None else self.config.default_zoom)

            self.place, self.bbox, self.centroid, self.data = query, bbox, centroid, data
            return self._draw(query, bbox, centroid, data)

    def _load_local(self, local_json: str) -> Tuple[BoundingBox, Tuple[float, float], OverpassResponse]:
        cached = self.cache.load(local_json)
        if cached is None:
            raise FileNotFoundError(f"No cached map data for {local_json!r} at {self.cache.path_for(local_json)}")
        try:
            bbox = BoundingBox.from_latitude_first(cached.bbox)
        except ValidationError as e:
            raise DataShapeError(f"Cached map data has an invalid bbox: {e}") from e
        centroid = (cached.centroid[0], cached.centroid[1])
        return bbox, centroid, cached

    def _fetch(self, query: str, zoom: int) -> Tuple[BoundingBox, Tuple[float, float], OverpassResponse]:
        place = self.nominatim.resolve_coordinates(query, zoom)
        overpass_query = self.build_query(place.bbox)
        logger.debug(f"Overpass query: {overpass_query}")
        data = self.overpass.query(overpass_query)
        logger.info(f"Successful fetch of map data: {len(data.elements)} elements")
        return place.bbox, place.centroid, data

    def _draw(
        self,
        place: str,
        bbox: BoundingBox,
        centroid: Tuple[float, float],
        data: OverpassResponse
    ) -> MapResult:
        render_config = self.config.render
        bbox.crop_to_aspect(render_config.width, render_config.height)

        dispatch = self.dispatcher.dispatch(data.elements)

        projector = CoordinateProjector(
            bbox, render_config.width, render_config.height, precision=render_config.precision
        )
        renderer = RENDERERS[self.output_format](
            render_config.width,
            render_config.height,
            background=render_config.background,
            max_open_distance=render_config.max_open_distance,
            stroke_weight_fn=self.stroke_weight_fn,
        )
        report = renderer.render(dispatch, projector)

        return MapResult(
            place=place,
            bbox=bbox,
            centroid=centroid,
            dispatch=dispatch,
            report=report,
            renderer=renderer,
        )

    def save_data(self) -> Optional[str]:
        """Save the last fetched area so it can be replayed with `local_json`"""
        if self.data is None or self.bbox is None or self.centroid is None:
            raise NotReadyError("Nothing to save: no place has been loaded")
        return self.cache.save(self.place, self.data, self.bbox, self.centroid)
