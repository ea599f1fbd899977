"""
Error types

Per-element errors (ExtractionError and subclasses) are caught by the
renderers, collected, and reported. Everything under JumpError aborts the
current "jump to place" operation and reaches the caller. A ValidationError
raised while resolving a place (bad zoom, out-of-range literal coordinates) is
re-raised as GeocodingError so it is never mistaken for a per-element failure.
"""


class TurtleMapsError(Exception):
    """Base class for all turtlemaps errors"""


class DataShapeError(TurtleMapsError, ValueError):
    """A response is missing expected fields or has an unexpected shape"""


class NotReadyError(TurtleMapsError, RuntimeError):
    """An operation needing a valid bounding box ran before one was set"""


class ExtractionError(TurtleMapsError):
    """A single element could not be turned into drawable geometry"""


class ValidationError(ExtractionError, ValueError):
    """Out-of-range coordinate, degenerate ring, non-finite bbox, bad zoom"""


class UnsupportedElementError(ExtractionError, TypeError):
    """An element kind other than way/relation reached rendering"""


class JumpError(TurtleMapsError, RuntimeError):
    """Fatal failure of a "jump to place" operation"""


class GeocodingError(JumpError):
    """The place name could not be resolved to coordinates"""


class FetchError(JumpError):
    """The map data request failed"""


class ThrottleQueueFullError(FetchError):
    """Too many requests are already waiting for the throttle"""
