"""
turtlemaps: stylized maps from OpenStreetMap

Fetches vector data from the Overpass API for a place, classifies each
feature into a drawing layer by tag rules, and renders the layers as SVG or
as a raster canvas.
"""

from .pipeline import MapResult, StreetMap

__version__ = "0.1.0"

__all__ = [
    "MapResult",
    "StreetMap",
]
