"""
Layer dispatch

Each element goes to the first layer (in definition order) whose rules match.
Overlapping categories such as "Buildings - Residential" and "Buildings - All"
are therefore listed more-specific-first. Elements that match nothing are kept
as orphans and reported.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

from loguru import logger

from .defaults import DEFAULT_LAYERS
from .layer import Layer, LayerDefinition


@dataclass
class DispatchResult:
    layers: List[Layer]
    orphans: List[Any] = field(default_factory=list)
    matched_count: int = 0

    def render_order(self) -> List[Layer]:
        """Layers in paint order: later definitions first, so earlier ones end up on top"""
        return list(reversed(self.layers))

    def summary(self) -> dict:
        return {
            "matched": self.matched_count,
            "orphans": len(self.orphans),
            "layers": {layer.name: len(layer.elements) for layer in self.layers},
        }


class LayerDispatcher:
    """Classifies elements into an ordered list of layers"""

    def __init__(self, definitions: Optional[Sequence[LayerDefinition]] = None):
        self.definitions = tuple(definitions if definitions is not None else DEFAULT_LAYERS)
        if not self.definitions:
            raise ValueError("At least one layer definition is required")
        self.layers = [Layer(d) for d in self.definitions]

    def layer(self, name: str) -> Layer:
        for layer in self.layers:
            if layer.name == name:
                return layer
        raise KeyError(f"No layer named {name!r}")

    def dispatch(self, elements: Iterable[Any]) -> DispatchResult:
        """
        Dispatch elements to layers (first match wins)

        Accumulators are cleared first, so a dispatcher can be reused across
        places.
        """
        for layer in self.layers:
            layer.clear()

        result = DispatchResult(layers=self.layers)
        for element in elements:
            for layer in self.layers:
                if layer.matches(element.tags):
                    layer.add_element(element)
                    result.matched_count += 1
                    break
            else:
                result.orphans.append(element)

        if result.orphans:
            logger.warning(f"Layers could not be found for {len(result.orphans)} elements")
            for orphan in result.orphans:
                logger.debug(f"Orphan {orphan.type} {orphan.id}: {orphan.tags}")
        logger.info(f"Dispatched {result.matched_count} elements to layers")
        return result
