"""Track catalog model and loader."""

from .abstraction import (
    TrackPiece,
    Connector,
    ConnectorType,
    TrackCategory,
    Dimensions,
    BoundingBox,
    Geometry,
    LinePath,
    ArcPath,
    CompositePath,
    SVGPath,
    VisualProperties,
    Metadata,
)
from .loader import (
    CatalogLoader,
    CatalogError,
    TrackCatalog,
    CatalogEntry,
    CatalogCategory,
)

__all__ = [
    # Core abstractions
    "TrackPiece",
    "Connector",
    "ConnectorType",
    "TrackCategory",
    "Dimensions",
    "BoundingBox",
    "Geometry",
    "LinePath",
    "ArcPath",
    "CompositePath",
    "SVGPath",
    "VisualProperties",
    "Metadata",
    # Loading
    "CatalogLoader",
    "CatalogError",
    "TrackCatalog",
    "CatalogEntry",
    "CatalogCategory",
]
