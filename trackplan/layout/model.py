"""
Layout Model

Placed track pieces and the ordered collection that holds them. The order
of ``Layout.pieces`` is the enumeration order of the snap search, so it
decides ties between equally distant snap candidates.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
import logging

from ..catalog.abstraction import TrackPiece
from .geometry import distance, normalize_angle

logger = logging.getLogger(__name__)

# Click radius for picking a placed piece (same unit as positions)
DEFAULT_PICK_DISTANCE = 100.0


@dataclass
class PlacedPiece:
    """A track piece instance on the layout surface."""
    id: str  # Unique instance id
    piece: TrackPiece
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0  # degrees, reduced to [0, 360)

    def __post_init__(self):
        self.rotation = normalize_angle(self.rotation)

    @property
    def piece_id(self) -> str:
        return self.piece.id

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return (f"PlacedPiece({self.id!r}, piece={self.piece.id!r}, "
                f"pos=({self.x:.1f}, {self.y:.1f}), rot={self.rotation:.0f})")


@dataclass
class Layout:
    """
    Ordered collection of placed pieces plus selection bookkeeping.

    Pieces are never moved in place: replacing a placement means removing the
    old instance and placing a new one.
    """
    pieces: List[PlacedPiece] = field(default_factory=list)
    selected_id: Optional[str] = None
    counter: int = 0

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[PlacedPiece]:
        return iter(self.pieces)

    def next_id(self, piece: TrackPiece) -> str:
        """Allocate a unique instance id for a new placement."""
        existing = {p.id for p in self.pieces}
        while True:
            self.counter += 1
            candidate = f"{piece.id}-{self.counter}"
            if candidate not in existing:
                return candidate

    def place(self, piece: TrackPiece, x: float, y: float,
              rotation: float = 0.0) -> PlacedPiece:
        """Append a new placement and return it."""
        placed = PlacedPiece(id=self.next_id(piece), piece=piece, x=x, y=y,
                             rotation=rotation)
        self.pieces.append(placed)
        logger.debug("Placed %s", placed)
        return placed

    def get(self, placed_id: str) -> Optional[PlacedPiece]:
        for placed in self.pieces:
            if placed.id == placed_id:
                return placed
        return None

    def remove(self, placed_id: str) -> Optional[PlacedPiece]:
        """Remove a placement; clears the selection if it pointed there."""
        placed = self.get(placed_id)
        if placed is None:
            return None
        self.pieces.remove(placed)
        if self.selected_id == placed_id:
            self.selected_id = None
        return placed

    def clear(self):
        self.pieces.clear()
        self.selected_id = None

    def find_piece_at(self, x: float, y: float,
                      max_distance: float = DEFAULT_PICK_DISTANCE) -> Optional[PlacedPiece]:
        """Nearest placed piece whose origin is strictly within max_distance."""
        best: Optional[PlacedPiece] = None
        best_dist = max_distance
        for placed in self.pieces:
            dist = distance(placed.position, (x, y))
            if dist < best_dist:
                best_dist = dist
                best = placed
        return best

    def select(self, placed_id: Optional[str]) -> bool:
        """Select a placed piece (or clear with None)."""
        if placed_id is not None and self.get(placed_id) is None:
            return False
        self.selected_id = placed_id
        return True

    @property
    def selected(self) -> Optional[PlacedPiece]:
        return self.get(self.selected_id) if self.selected_id else None

    def get_stats(self) -> Dict:
        """Get layout statistics."""
        counts: Dict[str, int] = {}
        for placed in self.pieces:
            counts[placed.piece_id] = counts.get(placed.piece_id, 0) + 1
        return {
            "pieces": len(self.pieces),
            "by_piece": counts,
            "selected": self.selected_id,
        }
