"""Layout model and the connector snapping engine."""

from .geometry import rotate_point, distance, normalize_angle
from .model import PlacedPiece, Layout
from .settings import SnapSettings, DEFAULT_SNAP_SETTINGS, load_snap_settings
from .snapping import (
    SnapCandidate,
    absolute_connector_position,
    absolute_connector_angle,
    connectors_compatible,
    compatibility_lists_allow,
    angles_opposite,
    quantize_rotation,
    calculate_snap_rotation,
    calculate_snap_position,
    find_snap_candidates,
    find_snap_candidate,
)
from .collision import check_collision, find_collisions
from .spatial_index import ConnectorIndex, IndexedConnector

__all__ = [
    # Geometry
    "rotate_point",
    "distance",
    "normalize_angle",
    # Model
    "PlacedPiece",
    "Layout",
    # Settings
    "SnapSettings",
    "DEFAULT_SNAP_SETTINGS",
    "load_snap_settings",
    # Snapping
    "SnapCandidate",
    "absolute_connector_position",
    "absolute_connector_angle",
    "connectors_compatible",
    "compatibility_lists_allow",
    "angles_opposite",
    "quantize_rotation",
    "calculate_snap_rotation",
    "calculate_snap_position",
    "find_snap_candidates",
    "find_snap_candidate",
    # Collision
    "check_collision",
    "find_collisions",
    # Spatial index
    "ConnectorIndex",
    "IndexedConnector",
]
