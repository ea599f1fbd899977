"""
Default palette and layer list

Parse order: as listed (first definitions are matched first).
Draw order: reversed (first definitions are painted last, on top).
"""

from typing import Mapping, Tuple

from .layer import ANY, LayerDefinition

COLORS = {
    "bg": "rgb(241, 244, 203)",
    "light": "rgba(255, 255, 255, 1)",
    "dark": "rgb(65, 54, 51)",
    "bright": "rgba(238, 86, 66, 1)",
    "green": "rgba(153, 197, 114, 1)",
    "blue": "rgba(138, 181, 204, 1)",
    "ick": "rgba(115, 28, 122, 1)",
    "hilite": "rgba(255, 217, 0, 1)",
}

STROKE_WEIGHTS = {
    "faint": 0.3,
    "light": 0.5,
    "medium": 1.3,
    "heavy": 2.5,
    "super": 4.0,
}


def stroke_weight_for(tags: Mapping[str, str]) -> float:
    """
    Stroke weight of one element, by road class or building

    Used with the default layers, where one layer can hold several road
    classes (eg "Paths" holds both service roads and footways).
    """
    highway = tags.get("highway")
    if highway in ("motorway", "motorway_link", "trunk", "primary", "primary_link"):
        return STROKE_WEIGHTS["super"]
    if highway in ("secondary", "tertiary", "tertiary_link"):
        return STROKE_WEIGHTS["heavy"]
    if highway in ("residential", "service"):
        return STROKE_WEIGHTS["medium"]
    if highway in ("footway", "driveway"):
        return STROKE_WEIGHTS["light"]
    if "building" in tags:
        return STROKE_WEIGHTS["light"]
    return STROKE_WEIGHTS["faint"]


DEFAULT_LAYERS: Tuple[LayerDefinition, ...] = (
    LayerDefinition(
        name="Buildings - Residential",
        fill_color=COLORS["bright"],
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["light"],
        tags={
            "building": ("house", "residential", "detached", "apartments",
                         "semidetached_house", "bungalow", "dormitory"),
        },
    ),
    LayerDefinition(
        name="Buildings - All",
        fill_color=COLORS["dark"],
        stroke_color=COLORS["bright"],
        stroke_weight=STROKE_WEIGHTS["light"],
        tags={"building": ANY},
    ),
    LayerDefinition(
        name="Paths",
        fill_color=COLORS["bg"],
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["light"],
        tags={"highway": ("footway", "service", "driveway", "path", "pedestrian")},
    ),
    LayerDefinition(
        name="Primary Roads",
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["super"],
        tags={"highway": ("motorway", "motorway_link", "trunk", "trunk_link",
                          "primary", "primary_link")},
    ),
    LayerDefinition(
        name="Secondary Roads",
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["heavy"],
        tags={"highway": ("secondary", "secondary_link", "tertiary", "tertiary_link")},
    ),
    LayerDefinition(
        name="Tertiary Roads",
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["medium"],
        tags={"highway": ("residential",)},
    ),
    LayerDefinition(
        name="Water",
        fill_color=COLORS["blue"],
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["faint"],
        tags={"waterway": ANY, "natural": ("water",)},
    ),
    LayerDefinition(
        name="Green Space",
        fill_color=COLORS["green"],
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["faint"],
        tags={"leisure": ("park", "garden"), "landuse": ("grass",)},
    ),
    LayerDefinition(
        name="Public Space",
        fill_color=COLORS["green"],
        stroke_color=COLORS["dark"],
        stroke_weight=STROKE_WEIGHTS["faint"],
        tags={"leisure": ("village_green", "track", "dog_park"), "amenity": ("school",)},
    ),
    LayerDefinition(
        name="Parking",
        fill_color=COLORS["ick"],
        stroke_color=COLORS["bg"],
        stroke_weight=STROKE_WEIGHTS["faint"],
        tags={
            "parking": ANY,
            "parking_space": ANY,
            "amenity": ("parking",),
            "building": ("parking", "parking_garage", "parking_shelter", "car_park",
                         "parkingbuilding", "parking_deck"),
        },
    ),
    LayerDefinition(
        name="No Trespassing",
        fill_color=COLORS["bright"],
        stroke_weight=STROKE_WEIGHTS["faint"],
        tags={"access": ("private",)},
    ),
)
