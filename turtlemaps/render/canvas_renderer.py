"""
Raster canvas surface (Pillow)

Draws the same paths as the SVG surface onto an RGBA image. Shapes with
cutouts are filled through an even-odd mask: each ring toggles the pixels it
covers, so holes come out unfilled.
"""

import os
import re
from typing import List, Optional, Tuple

from loguru import logger
from PIL import Image, ImageChops, ImageColor, ImageDraw

from ..geometry.paths import ProjectedPath
from ..layers.layer import LayerDefinition
from .base import BaseRenderer

RGBA = Tuple[int, int, int, int]

_RGBA_RE = re.compile(
    r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([0-9]*\.?[0-9]+)\s*\)$"
)


def parse_color(css: Optional[str]) -> Optional[RGBA]:
    """
    CSS color to an RGBA tuple

    CSS rgba() alpha is 0..1; Pillow reads a bare "1" as 1/255, so rgba() is
    parsed here and everything else is left to ImageColor.
    """
    if css is None:
        return None
    match = _RGBA_RE.match(css.strip())
    if match:
        r, g, b = (int(match.group(i)) for i in (1, 2, 3))
        alpha = max(0.0, min(1.0, float(match.group(4))))
        return r, g, b, int(round(alpha * 255))
    return ImageColor.getcolor(css, "RGBA")


class CanvasRenderer(BaseRenderer):
    """Renders layers to a PNG-ready Pillow image"""

    # Pixels per unit of layer stroke weight
    stroke_scale: float = 1.0

    def begin(self) -> None:
        background = parse_color(self.background) or (0, 0, 0, 0)
        self.image = Image.new("RGBA", (self.width, self.height), background)
        self.draw = ImageDraw.Draw(self.image, "RGBA")

    def _stroke_width(self, stroke_weight: float) -> int:
        return max(1, int(round(stroke_weight * self.stroke_scale)))

    def _fill_even_odd(self, rings: List[List[Tuple[float, float]]], color: RGBA) -> None:
        size = (self.width, self.height)
        mask = Image.new("1", size, 0)
        for ring in rings:
            ring_mask = Image.new("1", size, 0)
            ImageDraw.Draw(ring_mask).polygon(ring, fill=1)
            mask = ImageChops.logical_xor(mask, ring_mask)
        overlay = Image.new("RGBA", size, color)
        self.image.paste(overlay, (0, 0), mask)

    def draw_path(self, layer: LayerDefinition, path: ProjectedPath, stroke_weight: float) -> None:
        fill = parse_color(layer.fill_color)
        stroke = parse_color(layer.stroke_color)

        if path.fillable and fill is not None:
            if path.is_compound:
                self._fill_even_odd(path.rings, fill)
            else:
                for ring in path.rings:
                    if len(ring) >= 3:
                        self.draw.polygon(ring, fill=fill)

        if stroke is not None:
            width = self._stroke_width(stroke_weight)
            for ring in path.rings:
                self.draw.line(ring, fill=stroke, width=width, joint="curve")

    def save(self, output_path: str) -> str:
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        self.image.save(output_path)
        logger.info(f"Saved canvas map to {output_path}")
        return output_path
