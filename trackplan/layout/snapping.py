"""
Snap Detection

Connector compatibility and snap resolution for track placement.

While a piece is previewed at the pointer, ``find_snap_candidate`` looks for a
connector on an already-placed piece that the previewed piece could mate
with: opposite gender, matching height, close enough, and facing roughly the
opposite way. The winning candidate carries the exact position and the
90-degree-quantized rotation that puts the two connectors nose to nose.

All functions are pure: they only read the placed pieces they are given, so
they can be re-run on every pointer move without caching.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from ..catalog.abstraction import Connector, TrackPiece
from .geometry import Point, distance, normalize_angle, rotate_point
from .model import PlacedPiece
from .settings import DEFAULT_SNAP_SETTINGS, SnapSettings
from .spatial_index import ConnectorIndex

logger = logging.getLogger(__name__)

# Allowed mismatch between connector heights (mm)
HEIGHT_TOLERANCE = 1.0

# Pieces only ever snap into axis-aligned orientations
ROTATION_STEP = 90.0

DEFAULT_ANGLE_TOLERANCE = 15.0


@dataclass
class SnapCandidate:
    """A proposed placement that mates one connector pair."""
    placed_piece: PlacedPiece
    placed_connection: Connector
    new_piece_connection: Connector
    snap_position: Point
    snap_rotation: float  # multiple of 90 in [0, 360)
    distance: float  # pre-snap connector distance, the ranking key

    def __repr__(self) -> str:
        return (
            f"SnapCandidate({self.new_piece_connection.id} -> "
            f"{self.placed_piece.id}:{self.placed_connection.id}, "
            f"pos=({self.snap_position[0]:.1f}, {self.snap_position[1]:.1f}), "
            f"rot={self.snap_rotation:.0f}, dist={self.distance:.2f})"
        )


def absolute_connector_position(placed: PlacedPiece, connector: Connector) -> Point:
    """Absolute position of a connector on a placed piece."""
    rx, ry = rotate_point(connector.position, placed.rotation)
    return (placed.x + rx, placed.y + ry)


def absolute_connector_angle(placed: PlacedPiece, connector: Connector) -> float:
    """Absolute facing angle of a connector on a placed piece, in [0, 360)."""
    return normalize_angle(connector.angle + placed.rotation)


def connectors_compatible(a: Connector, b: Connector) -> bool:
    """
    Check whether two connectors can physically mate.

    They must be of opposite type (male to female) and at the same height
    within ``HEIGHT_TOLERANCE``. Facing is placement-dependent and checked
    separately by ``angles_opposite``.
    """
    if a.type == b.type:
        return False
    return abs(a.height - b.height) <= HEIGHT_TOLERANCE


def _allows(conn: Connector, peer: Connector, peer_piece: Optional[TrackPiece]) -> bool:
    if not conn.compatible:
        return True
    names = {peer.id}
    if peer_piece is not None:
        names.update(peer_piece.identifiers)
    return any(name in names for name in conn.compatible)


def compatibility_lists_allow(a: Connector, piece_a: Optional[TrackPiece],
                              b: Connector, piece_b: Optional[TrackPiece]) -> bool:
    """
    Stricter check honouring per-connector ``compatible`` lists.

    An empty list allows any peer. A non-empty list must name the peer
    connector's id, or the peer piece's id, type or category. Both sides have
    to allow the pair.
    """
    return _allows(a, b, piece_b) and _allows(b, a, piece_a)


def angles_opposite(angle1: float, angle2: float,
                    tolerance: float = DEFAULT_ANGLE_TOLERANCE) -> bool:
    """Check that two facing angles are antiparallel within tolerance."""
    a1 = normalize_angle(angle1)
    a2 = normalize_angle(angle2)

    diff = abs(a1 - a2)
    if diff > 180:
        diff = 360 - diff

    return abs(diff - 180) < tolerance


def quantize_rotation(degrees: float, step: float = ROTATION_STEP) -> float:
    """
    Round a rotation to the nearest multiple of ``step``, reduced to [0, 360).

    Halfway values follow Python's ``round`` (half to even on the quotient),
    so 45 becomes 0 and 135 becomes 180.
    """
    return normalize_angle(round(degrees / step) * step)


def calculate_snap_rotation(placed_connection: Connector, placed_rotation: float,
                            new_connection: Connector) -> float:
    """
    Rotation for the moving piece so its connector faces the placed one.

    The result is quantized to 90 degrees; it is not checked against the
    exact antiparallel angle.
    """
    placed_angle = normalize_angle(placed_connection.angle + placed_rotation)
    required_angle = placed_angle + 180
    return quantize_rotation(required_angle - new_connection.angle)


def calculate_snap_position(placed_piece: PlacedPiece, placed_connection: Connector,
                            new_connection: Connector, snap_rotation: float) -> Point:
    """
    Origin for the moving piece so its connector lands on the placed one.

    Solves ``origin + rotate(new_connection, snap_rotation) == target``.
    """
    tx, ty = absolute_connector_position(placed_piece, placed_connection)
    rx, ry = rotate_point(new_connection.position, snap_rotation)
    return (tx - rx, ty - ry)


def find_snap_candidates(
    new_piece: TrackPiece,
    new_position: Point,
    new_rotation: float,
    placed_pieces: Sequence[PlacedPiece],
    settings: SnapSettings = DEFAULT_SNAP_SETTINGS,
    index: Optional[ConnectorIndex] = None,
) -> List[SnapCandidate]:
    """
    Every valid snap for the previewed piece, in enumeration order.

    Enumeration order is: connectors of the new piece, then placed pieces in
    list order, then connectors of each placed piece.

    Args:
        new_piece: Catalog piece being previewed
        new_position: Unsnapped preview position (pointer)
        new_rotation: Unsnapped preview rotation (degrees)
        placed_pieces: Pieces already on the layout
        settings: Snap configuration
        index: Optional spatial index over ``placed_pieces`` connectors

    Returns:
        List of SnapCandidate (possibly empty)
    """
    if not settings.enabled or not placed_pieces:
        return []

    preview = PlacedPiece(id="", piece=new_piece, x=new_position[0],
                          y=new_position[1], rotation=new_rotation)
    candidates: List[SnapCandidate] = []

    for new_conn in new_piece.connections:
        new_pos = absolute_connector_position(preview, new_conn)
        new_angle = absolute_connector_angle(preview, new_conn)

        if index is not None:
            pairs = [(e.placed, e.connector)
                     for e in index.query(new_pos, settings.threshold)]
        else:
            pairs = [(placed, conn)
                     for placed in placed_pieces
                     for conn in placed.piece.connections]

        for placed, placed_conn in pairs:
            if not connectors_compatible(new_conn, placed_conn):
                continue
            if settings.strict_compatibility and not compatibility_lists_allow(
                    new_conn, new_piece, placed_conn, placed.piece):
                continue

            placed_pos = absolute_connector_position(placed, placed_conn)
            dist = distance(new_pos, placed_pos)
            if dist > settings.threshold:
                continue

            placed_angle = absolute_connector_angle(placed, placed_conn)
            if not angles_opposite(new_angle, placed_angle, settings.angle_tolerance):
                continue

            snap_rotation = calculate_snap_rotation(placed_conn, placed.rotation, new_conn)
            snap_position = calculate_snap_position(placed, placed_conn, new_conn,
                                                    snap_rotation)
            candidates.append(SnapCandidate(
                placed_piece=placed,
                placed_connection=placed_conn,
                new_piece_connection=new_conn,
                snap_position=snap_position,
                snap_rotation=snap_rotation,
                distance=dist,
            ))

    return candidates


def find_snap_candidate(
    new_piece: TrackPiece,
    new_position: Point,
    new_rotation: float,
    placed_pieces: Sequence[PlacedPiece],
    settings: SnapSettings = DEFAULT_SNAP_SETTINGS,
    index: Optional[ConnectorIndex] = None,
) -> Optional[SnapCandidate]:
    """
    Best snap for the previewed piece, or None.

    The closest candidate by pre-snap distance wins; equal distances resolve
    to the first one found in enumeration order.
    """
    candidates = find_snap_candidates(new_piece, new_position, new_rotation,
                                      placed_pieces, settings, index)
    if not candidates:
        return None

    # min() keeps the first of equal keys
    best = min(candidates, key=lambda c: c.distance)
    logger.debug("%d snap candidates for %s, best %s",
                 len(candidates), new_piece.id, best)
    return best
