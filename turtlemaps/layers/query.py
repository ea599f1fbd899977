"""
Overpass QL query construction
"""

from typing import Sequence
from urllib.parse import urlencode

from .layer import LayerDefinition
from ..geometry.bbox import BoundingBox


def build_overpass_query(
    definitions: Sequence[LayerDefinition],
    bbox: BoundingBox,
    timeout: int
) -> str:
    """
    One query for every layer:

        [bbox:s,w,n,e][out:json][timeout:T];(<fragments>);out geom;
    """
    fragments = "".join(d.query_fragment() for d in definitions)
    return (
        f"[bbox:{bbox.overpass_bbox_string()}][out:json][timeout:{timeout}];"
        f"({fragments});"
        f"out geom;"
    )


def encode_query_body(query: str) -> str:
    """Form-encoded POST body: `data=<query>`"""
    return urlencode({"data": query})
