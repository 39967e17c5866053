"""
TrackPlan Session State Management

Drives the snapping engine the way the layout canvas does: pick a catalog
piece, rotate the preview, move the pointer (recomputes the snap candidate),
click to commit. Keeps an undo/redo history of the placed-piece list.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import logging
import math

from ..catalog.abstraction import TrackPiece
from ..layout.geometry import Point, normalize_angle
from ..layout.model import Layout, PlacedPiece
from ..layout.settings import DEFAULT_SNAP_SETTINGS, SnapSettings
from ..layout.snapping import SnapCandidate, find_snap_candidate
from ..layout.spatial_index import ConnectorIndex
from .actions import ActionResult, LayoutActions

logger = logging.getLogger(__name__)

# Preview rotation step for the rotate gesture (degrees)
ROTATE_STEP = 90.0

# Above this many placed pieces the snap search goes through a spatial index
INDEX_MIN_PIECES = 32


@dataclass
class LayoutSnapshot:
    """Placed pieces at one point in history, for undo/redo."""
    pieces: Tuple[PlacedPiece, ...]
    counter: int
    description: str = ""


class LayoutSession:
    """
    Manages one layout editing session.

    Provides:
    - Piece selection and preview rotation
    - Snap candidate tracking on pointer moves
    - Click to place / click to select
    - Undo/redo stack
    """

    MAX_UNDO_STACK = 50

    def __init__(self, settings: SnapSettings = DEFAULT_SNAP_SETTINGS,
                 layout: Optional[Layout] = None):
        self.settings = settings
        self.layout = layout if layout is not None else Layout()
        self.actions = LayoutActions(self.layout)

        self.selected_piece: Optional[TrackPiece] = None
        self.preview_rotation: float = 0.0
        self.pointer: Optional[Point] = None
        self.candidate: Optional[SnapCandidate] = None

        self._index: Optional[ConnectorIndex] = None
        self._undo_stack: List[LayoutSnapshot] = []
        self._redo_stack: List[LayoutSnapshot] = []
        self._save_snapshot("Initial")

    # -- selection and preview -------------------------------------------

    def select_piece(self, piece: Optional[TrackPiece]):
        """Choose the catalog piece to place (None to stop placing)."""
        self.selected_piece = piece
        self.candidate = None
        if piece is not None:
            self.layout.select(None)

    def clear_selection(self):
        self.select_piece(None)
        self.layout.select(None)

    def rotate_preview(self) -> float:
        """Advance the preview rotation by one step and refresh the snap."""
        self.preview_rotation = normalize_angle(self.preview_rotation + ROTATE_STEP)
        self._refresh_candidate()
        return self.preview_rotation

    @property
    def preview_pose(self) -> Optional[Tuple[Point, float]]:
        """Where the preview is drawn: the snap pose if any, else the pointer."""
        if self.selected_piece is None or self.pointer is None:
            return None
        if self.candidate is not None:
            return (self.candidate.snap_position, self.candidate.snap_rotation)
        return (self.pointer, self.preview_rotation)

    # -- pointer events ----------------------------------------------------

    def pointer_move(self, x: float, y: float) -> Optional[SnapCandidate]:
        """Record the pointer and recompute the snap candidate."""
        self.pointer = (x, y)
        self._refresh_candidate()
        return self.candidate

    def pointer_leave(self):
        self.pointer = None
        self.candidate = None

    def click(self, x: float, y: float) -> ActionResult:
        """
        Place the selected piece, or select a placed piece.

        With a catalog piece selected, the current snap candidate (if any)
        decides the pose; otherwise the piece goes at the pointer with the
        preview rotation.
        """
        if self.selected_piece is None:
            hit = self.layout.find_piece_at(x, y)
            self.layout.select(hit.id if hit else None)
            if hit is None:
                return ActionResult(True, "Selection cleared", [])
            return ActionResult(True, f"Selected {hit.id}", [hit.id])

        if self.pointer != (x, y):
            self.pointer_move(x, y)

        if self.candidate is not None:
            result = self.actions.place_snapped(self.selected_piece, self.candidate)
        else:
            result = self.actions.place(self.selected_piece, x, y, self.preview_rotation)

        self._after_edit(result, "Place")
        self.candidate = None
        return result

    def delete_selected(self) -> ActionResult:
        """Remove the currently selected placed piece."""
        selected_id = self.layout.selected_id
        if selected_id is None:
            return ActionResult(False, "Nothing selected", [])
        result = self.actions.remove(selected_id)
        self._after_edit(result, "Delete")
        return result

    def attach(self, target_id: str, target_connector_id: str,
               connector_id: Optional[str] = None) -> ActionResult:
        """Mate the selected piece to a named connector of a placed piece."""
        if self.selected_piece is None:
            return ActionResult(False, "No piece selected", [])
        result = self.actions.attach(self.selected_piece, target_id,
                                     target_connector_id, connector_id)
        self._after_edit(result, "Attach")
        return result

    # -- undo/redo ---------------------------------------------------------

    def undo(self) -> bool:
        """
        Undo last change.

        Returns:
            True if undo was performed, False if nothing to undo
        """
        if len(self._undo_stack) <= 1:  # Keep at least the initial state
            return False

        self._redo_stack.append(self._undo_stack.pop())
        self._restore_snapshot(self._undo_stack[-1])
        return True

    def redo(self) -> bool:
        """
        Redo last undone change.

        Returns:
            True if redo was performed, False if nothing to redo
        """
        if not self._redo_stack:
            return False

        snapshot = self._redo_stack.pop()
        self._undo_stack.append(snapshot)
        self._restore_snapshot(snapshot)
        return True

    def _after_edit(self, result: ActionResult, description: str):
        if result.success:
            self._save_snapshot(f"{description} {', '.join(result.modified_ids)}")
            self._invalidate()

    def _take_snapshot(self, description: str = "") -> LayoutSnapshot:
        return LayoutSnapshot(pieces=tuple(self.layout.pieces),
                              counter=self.layout.counter,
                              description=description)

    def _save_snapshot(self, description: str = ""):
        """Save current state to undo stack."""
        self._undo_stack.append(self._take_snapshot(description))

        # Clear redo stack on new action
        self._redo_stack.clear()

        while len(self._undo_stack) > self.MAX_UNDO_STACK:
            self._undo_stack.pop(0)

    def _restore_snapshot(self, snapshot: LayoutSnapshot):
        # PlacedPiece instances are shared between snapshots
        self.layout.pieces[:] = list(snapshot.pieces)
        # Counter never rewinds, so ids stay unique after undo
        self.layout.counter = max(self.layout.counter, snapshot.counter)
        if self.layout.selected_id and self.layout.get(self.layout.selected_id) is None:
            self.layout.selected_id = None
        self._invalidate()
        logger.debug("Restored layout: %s", snapshot.description)

    # -- internals ---------------------------------------------------------

    def _invalidate(self):
        self._index = None
        self._refresh_candidate()

    def _get_index(self) -> Optional[ConnectorIndex]:
        threshold = self.settings.threshold
        if len(self.layout) < INDEX_MIN_PIECES or not 0 < threshold < math.inf:
            return None
        if self._index is None:
            self._index = ConnectorIndex.build(self.layout.pieces,
                                               cell_size=threshold)
        return self._index

    def _refresh_candidate(self):
        if self.selected_piece is None or self.pointer is None:
            self.candidate = None
            return
        self.candidate = find_snap_candidate(
            self.selected_piece,
            self.pointer,
            self.preview_rotation,
            self.layout.pieces,
            self.settings,
            index=self._get_index(),
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get session statistics."""
        return {
            "pieces": len(self.layout),
            "selected_piece": self.selected_piece.id if self.selected_piece else None,
            "selected_placed": self.layout.selected_id,
            "preview_rotation": self.preview_rotation,
            "snapping": self.candidate is not None,
            "undo_available": len(self._undo_stack) > 1,
            "redo_available": len(self._redo_stack) > 0,
        }
