"""
SVG surface

One <g> per layer carries the layer style; each element becomes one or more
<path>s. Paths that are not fillable get fill="none"; compound paths (shapes
with cutouts) use the even-odd fill rule.
"""

import os

import svgwrite
from loguru import logger

from ..geometry.paths import ProjectedPath
from ..geometry.zoom import slugify
from ..layers.layer import LayerDefinition
from .base import BaseRenderer


class SvgRenderer(BaseRenderer):

    def begin(self) -> None:
        # debug=False: svgwrite's validator rejects CSS rgba() colors
        self.drawing = svgwrite.Drawing(
            size=(self.width, self.height),
            viewBox=f"0 0 {self.width} {self.height}",
            debug=False,
        )
        if self.background:
            self.drawing.add(self.drawing.rect(
                insert=(0, 0),
                size=(self.width, self.height),
                fill=self.background,
            ))
        self._group = None

    def begin_layer(self, layer: LayerDefinition) -> None:
        self._group = self.drawing.g(
            id=slugify(layer.name),
            fill=layer.fill_color or "none",
            stroke=layer.stroke_color or "none",
            stroke_width=layer.stroke_weight if layer.stroke_color else 0,
        )

    def draw_path(self, layer: LayerDefinition, path: ProjectedPath, stroke_weight: float) -> None:
        attrs = {}
        if layer.stroke_color and stroke_weight != layer.stroke_weight:
            attrs["stroke_width"] = stroke_weight
        if not path.fillable:
            attrs["fill"] = "none"
        if path.fill_rule:
            attrs["fill_rule"] = path.fill_rule
        self._group.add(self.drawing.path(d=path.d, **attrs))

    def end_layer(self, layer: LayerDefinition) -> None:
        self.drawing.add(self._group)
        self._group = None

    def to_string(self) -> str:
        return self.drawing.tostring()

    def save(self, output_path: str) -> str:
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        self.drawing.saveas(output_path, pretty=True)
        logger.info(f"Saved SVG map to {output_path}")
        return output_path
