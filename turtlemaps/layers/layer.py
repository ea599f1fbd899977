"""
Layers: named drawing buckets with tag-matching rules and a visual style
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

# Rule value for "match this key whatever its value"
ANY = None

TagRules = Mapping[str, Optional[Tuple[str, ...]]]


@dataclass(frozen=True)
class LayerDefinition:
    """
    Immutable layer configuration

    `tags` maps an OSM key to the accepted values, or to `ANY` (None) for
    every value, eg `{"building": None, "amenity": ("parking",)}`.
    """
    name: str
    tags: TagRules
    fill_color: Optional[str] = None
    stroke_color: Optional[str] = None
    stroke_weight: float = 0.3

    def __post_init__(self):
        rules = {}
        for key, values in dict(self.tags).items():
            if values is None:
                rules[key] = None
                continue
            if isinstance(values, str) or not all(isinstance(v, str) for v in values):
                raise TypeError(f"Layer {self.name!r}: tag {key!r} must be None or a sequence of strings")
            if len(values) == 0:
                raise ValueError(f"Layer {self.name!r}: tag {key!r} has no values; use None to match any")
            rules[key] = tuple(values)
        object.__setattr__(self, "tags", MappingProxyType(rules))

    def matches(self, tags: Mapping[str, str]) -> bool:
        """
        Does this layer match the element's tags?

        True on the first element tag whose key is ruled and whose value is
        accepted (OR across keys).
        """
        for key, value in tags.items():
            if key in self.tags:
                accepted = self.tags[key]
                if accepted is None or value in accepted:
                    return True
        return False

    def query_fragment(self) -> str:
        """Overpass QL selectors for the ways and relations this layer wants"""
        fragment = ""
        for key, values in self.tags.items():
            if values is None:
                fragment += f'wr["{key}"];'
            elif len(values) > 1:
                fragment += f'wr["{key}"~"{"|".join(values)}"];'
            else:
                fragment += f'wr["{key}"="{values[0]}"];'
        return fragment


@dataclass
class Layer:
    """A LayerDefinition plus the elements dispatched to it"""
    definition: LayerDefinition
    elements: List[Any] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.definition.name

    def matches(self, tags: Mapping[str, str]) -> bool:
        return self.definition.matches(tags)

    def add_element(self, element) -> None:
        self.elements.append(element)

    def clear(self) -> None:
        self.elements = []
