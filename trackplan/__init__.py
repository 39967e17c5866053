"""
TrackPlan - Model Train Track Layout Designer

Assemble track layouts from a catalog of pieces. Pieces snap together when
a male and a female connector of matching height come close while facing
each other.
"""

__version__ = "0.1.0"
__author__ = "TrackPlan Team"

from .catalog.abstraction import TrackPiece, Connector, ConnectorType
from .catalog.loader import CatalogLoader, CatalogError
from .layout.model import Layout, PlacedPiece
from .layout.settings import SnapSettings, DEFAULT_SNAP_SETTINGS
from .layout.snapping import SnapCandidate, find_snap_candidate
from .api.session import LayoutSession

__all__ = [
    "TrackPiece",
    "Connector",
    "ConnectorType",
    "CatalogLoader",
    "CatalogError",
    "Layout",
    "PlacedPiece",
    "SnapSettings",
    "DEFAULT_SNAP_SETTINGS",
    "SnapCandidate",
    "find_snap_candidate",
    "LayoutSession",
]
