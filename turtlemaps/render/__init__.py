"""
Rendering surfaces

- SvgRenderer: vector output (svgwrite)
- CanvasRenderer: raster output (Pillow)
"""

from .base import BaseRenderer, FailedElement, RenderReport
from .svg_renderer import SvgRenderer
from .canvas_renderer import CanvasRenderer, parse_color

RENDERERS = {
    "svg": SvgRenderer,
    "png": CanvasRenderer,
}

__all__ = [
    "BaseRenderer",
    "FailedElement",
    "RenderReport",
    "SvgRenderer",
    "CanvasRenderer",
    "parse_color",
    "RENDERERS",
]
