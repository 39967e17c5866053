"""
TrackPlan Core API: Atomic Actions

Atomic layout edits that the session (or any other front end) performs on a
``Layout``. Each action reports what happened through an ``ActionResult``
instead of raising, so callers can surface the message directly.

Usage:
    from trackplan.api.actions import LayoutActions
    actions = LayoutActions(layout)
    actions.place(straight, 100, 100)
    actions.attach(curve, "straight-short-1", "end")
"""

from dataclasses import dataclass, field
from typing import List, Optional
import logging

from ..catalog.abstraction import TrackPiece
from ..layout.collision import find_collisions
from ..layout.model import Layout
from ..layout.snapping import (
    SnapCandidate,
    angles_opposite,
    absolute_connector_angle,
    calculate_snap_position,
    calculate_snap_rotation,
    connectors_compatible,
)

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of an atomic action."""
    success: bool
    message: str
    modified_ids: List[str]
    collisions: List[str] = field(default_factory=list)  # advisory only


class LayoutActions:
    """Placement edits on a layout."""

    def __init__(self, layout: Layout):
        self.layout = layout

    def place(self, piece: TrackPiece, x: float, y: float,
              rotation: float = 0.0) -> ActionResult:
        """Place a piece at an absolute pose. Overlaps are flagged, not refused."""
        collisions = find_collisions(piece, (x, y), self.layout.pieces)
        placed = self.layout.place(piece, x, y, rotation)

        message = f"Placed {placed.id} at ({x:.1f}, {y:.1f}) rot {placed.rotation:.0f}°"
        if collisions:
            logger.warning("%s overlaps %s", placed.id, ", ".join(collisions))
            message += f" (overlaps {', '.join(collisions)})"
        else:
            logger.info(message)
        return ActionResult(True, message, [placed.id], collisions)

    def place_snapped(self, piece: TrackPiece, candidate: SnapCandidate) -> ActionResult:
        """Commit a snap candidate as a new placement."""
        x, y = candidate.snap_position
        return self.place(piece, x, y, candidate.snap_rotation)

    def attach(self, piece: TrackPiece, target_id: str, target_connector_id: str,
               connector_id: Optional[str] = None) -> ActionResult:
        """
        Mate a new piece to a named connector of a placed piece.

        Without ``connector_id`` the first compatible connector of the new
        piece is used.
        """
        target = self.layout.get(target_id)
        if target is None:
            return ActionResult(False, f"Piece {target_id} not found", [])

        target_conn = target.piece.get_connector(target_connector_id)
        if target_conn is None:
            return ActionResult(
                False, f"Piece {target_id} has no connector {target_connector_id}", [])

        if connector_id is not None:
            conn = piece.get_connector(connector_id)
            if conn is None:
                return ActionResult(False, f"{piece.id} has no connector {connector_id}", [])
            options = [conn]
        else:
            options = piece.connections

        for conn in options:
            if not connectors_compatible(conn, target_conn):
                continue
            rotation = calculate_snap_rotation(target_conn, target.rotation, conn)
            # Quantization can miss for connectors not on a 90 degree grid
            facing = (conn.angle + rotation) % 360
            if not angles_opposite(facing, absolute_connector_angle(target, target_conn)):
                continue
            x, y = calculate_snap_position(target, target_conn, conn, rotation)
            return self.place(piece, x, y, rotation)

        return ActionResult(
            False,
            f"No connector on {piece.id} can mate with {target_id}:{target_connector_id}",
            [],
        )

    def remove(self, placed_id: str) -> ActionResult:
        """Remove a placed piece."""
        removed = self.layout.remove(placed_id)
        if removed is None:
            return ActionResult(False, f"Piece {placed_id} not found", [])
        logger.info("Removed %s", placed_id)
        return ActionResult(True, f"Removed {placed_id}", [placed_id])
