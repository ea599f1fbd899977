"""
Layer classification

- LayerDefinition: immutable name, style and tag rules
- Layer: a definition plus the elements dispatched to it
- LayerDispatcher: first-match-wins classification
- build_overpass_query: one Overpass QL query for a layer list and bbox
"""

from .layer import ANY, Layer, LayerDefinition
from .defaults import COLORS, STROKE_WEIGHTS, DEFAULT_LAYERS, stroke_weight_for
from .dispatcher import DispatchResult, LayerDispatcher
from .query import build_overpass_query, encode_query_body

__all__ = [
    "ANY",
    "Layer",
    "LayerDefinition",
    "COLORS",
    "STROKE_WEIGHTS",
    "DEFAULT_LAYERS",
    "stroke_weight_for",
    "DispatchResult",
    "LayerDispatcher",
    "build_overpass_query",
    "encode_query_body",
]
