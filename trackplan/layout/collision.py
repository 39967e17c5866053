"""Coarse overlap check for new placements.

Compares piece origins against the average of the two footprint widths.
It ignores orientation and the real track outline, so it misses overlaps
between rotated or long, thin pieces. Callers use it to flag a placement,
never to refuse one.
"""

from typing import List, Sequence
import logging

from ..catalog.abstraction import TrackPiece
from .geometry import Point, distance
from .model import PlacedPiece

logger = logging.getLogger(__name__)


def pieces_overlap(new_piece: TrackPiece, new_position: Point,
                   placed: PlacedPiece) -> bool:
    """True when two origins are closer than half the summed footprint widths."""
    new_width, _ = new_piece.get_footprint()
    placed_width, _ = placed.piece.get_footprint()
    min_dist = (new_width + placed_width) / 2
    return distance(new_position, placed.position) < min_dist


def find_collisions(new_piece: TrackPiece, new_position: Point,
                    placed_pieces: Sequence[PlacedPiece]) -> List[str]:
    """Ids of every placed piece the new placement would overlap."""
    return [
        placed.id for placed in placed_pieces
        if pieces_overlap(new_piece, new_position, placed)
    ]


def check_collision(new_piece: TrackPiece, new_position: Point,
                    placed_pieces: Sequence[PlacedPiece]) -> bool:
    """Check if a placement would overlap any placed piece."""
    for placed in placed_pieces:
        if pieces_overlap(new_piece, new_position, placed):
            logger.debug("%s at (%.1f, %.1f) overlaps %s", new_piece.id,
                         new_position[0], new_position[1], placed.id)
            return True
    return False
