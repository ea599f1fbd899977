"""
Shared rendering loop

Layers are painted in reverse classification order so that earlier, more
specific layers end up on top. A failure on one element is recorded in the
report and the remaining elements are still drawn.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional

from loguru import logger

from ..errors import TurtleMapsError
from ..geometry.paths import DEFAULT_MAX_OPEN_DISTANCE, PathBuilder, ProjectedPath
from ..geometry.projection import CoordinateProjector
from ..layers.dispatcher import DispatchResult
from ..layers.layer import LayerDefinition

StrokeWeightFn = Callable[[Mapping[str, str]], float]


@dataclass
class FailedElement:
    element_type: str
    element_id: int
    layer: str
    reason: str


@dataclass
class RenderReport:
    drawn: int = 0
    paths: int = 0
    compound_paths: int = 0
    failed: List[FailedElement] = field(default_factory=list)
    layer_order: List[str] = field(default_factory=list)

    def summary(self) -> dict:
        return {
            "drawn": self.drawn,
            "paths": self.paths,
            "compound_paths": self.compound_paths,
            "failed": len(self.failed),
        }


class BaseRenderer:
    """Walks dispatched layers and hands paths to a drawing surface"""

    def __init__(
        self,
        width: int,
        height: int,
        background: Optional[str] = None,
        max_open_distance: float = DEFAULT_MAX_OPEN_DISTANCE,
        stroke_weight_fn: Optional[StrokeWeightFn] = None
    ):
        self.width = width
        self.height = height
        self.background = background
        self.max_open_distance = max_open_distance
        # Per-element stroke weight from tags; None = the layer's weight
        self.stroke_weight_fn = stroke_weight_fn

    # Surface hooks
    def begin(self) -> None:
        raise NotImplementedError

    def begin_layer(self, layer: LayerDefinition) -> None:
        pass

    def draw_path(self, layer: LayerDefinition, path: ProjectedPath, stroke_weight: float) -> None:
        raise NotImplementedError

    def end_layer(self, layer: LayerDefinition) -> None:
        pass

    def save(self, output_path: str) -> str:
        raise NotImplementedError

    def stroke_weight(self, layer: LayerDefinition, element) -> float:
        if self.stroke_weight_fn is None:
            return layer.stroke_weight
        return self.stroke_weight_fn(element.tags)

    def render(self, dispatch: DispatchResult, projector: CoordinateProjector) -> RenderReport:
        self.begin()
        builder = PathBuilder(projector, self.max_open_distance)
        report = RenderReport()

        for layer in dispatch.render_order():
            definition = layer.definition
            report.layer_order.append(definition.name)
            self.begin_layer(definition)
            for element in layer.elements:
                try:
                    paths = builder.paths_for(element)
                    weight = self.stroke_weight(definition, element)
                    for path in paths:
                        self.draw_path(definition, path, weight)
                except (TurtleMapsError, ValueError, TypeError) as e:
                    report.failed.append(FailedElement(
                        element_type=element.type,
                        element_id=element.id,
                        layer=definition.name,
                        reason=str(e),
                    ))
                    continue
                report.paths += len(paths)
                report.compound_paths += sum(1 for path in paths if path.is_compound)
                report.drawn += 1
            self.end_layer(definition)

        if report.failed:
            logger.error(f"Some elements failed to draw: {len(report.failed)}")
            for failure in report.failed:
                logger.debug(f"  {failure.element_type} {failure.element_id} ({failure.layer}): {failure.reason}")
        logger.info(f"Drew {report.drawn} elements as {report.paths} paths")
        return report
