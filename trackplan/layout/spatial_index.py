"""Spatial hash index over placed connectors.

The snap search compares every connector of the previewed piece against
every placed connector on each pointer move. Hashing placed connector
positions into square cells lets the search look only at cells within the
snap threshold once a layout grows past a few dozen pieces.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Tuple
import math

from ..catalog.abstraction import Connector
from .geometry import Point
from .model import PlacedPiece


@dataclass
class IndexedConnector:
    """A placed connector with its absolute position and enumeration order."""
    piece_order: int  # index of the piece in the placed-piece list
    connector_order: int  # index of the connector on its piece
    placed: PlacedPiece
    connector: Connector
    x: float
    y: float

    @property
    def order(self) -> Tuple[int, int]:
        return (self.piece_order, self.connector_order)


@dataclass
class ConnectorIndex:
    """Grid-based spatial hash of placed connector positions.

    Cell size should be close to the snap threshold: a query then touches at
    most nine cells.
    """
    cell_size: float = 50.0
    cells: Dict[Tuple[int, int], List[IndexedConnector]] = field(default_factory=dict)
    count: int = 0

    def __post_init__(self):
        if not 0 < self.cell_size < math.inf:
            raise ValueError(f"Cell size must be positive and finite: {self.cell_size}")

    def _get_cell(self, x: float, y: float) -> Tuple[int, int]:
        """Hash position to cell coordinates."""
        return (int(math.floor(x / self.cell_size)),
                int(math.floor(y / self.cell_size)))

    def _get_cells_for_rect(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> Set[Tuple[int, int]]:
        """Get all cells that a rectangle overlaps."""
        start_x, start_y = self._get_cell(min_x, min_y)
        end_x, end_y = self._get_cell(max_x, max_y)
        return {
            (cx, cy)
            for cx in range(start_x, end_x + 1)
            for cy in range(start_y, end_y + 1)
        }

    def add(self, entry: IndexedConnector):
        cell = self._get_cell(entry.x, entry.y)
        self.cells.setdefault(cell, []).append(entry)
        self.count += 1

    @classmethod
    def build(cls, placed_pieces: Sequence[PlacedPiece],
              cell_size: float = 50.0) -> "ConnectorIndex":
        """Index every connector of every placed piece."""
        # Local import: snapping imports this module for type hints
        from .snapping import absolute_connector_position

        index = cls(cell_size=cell_size)
        for piece_order, placed in enumerate(placed_pieces):
            for connector_order, conn in enumerate(placed.piece.connections):
                x, y = absolute_connector_position(placed, conn)
                index.add(IndexedConnector(
                    piece_order=piece_order,
                    connector_order=connector_order,
                    placed=placed,
                    connector=conn,
                    x=x,
                    y=y,
                ))
        return index

    def query(self, point: Point, radius: float) -> List[IndexedConnector]:
        """
        Connectors in cells overlapping the square around a circle.

        Results are candidates only (callers still check exact distance) and
        come back in enumeration order so ties resolve as in a full scan.
        """
        x, y = point
        found: List[IndexedConnector] = []
        for cell in self._get_cells_for_rect(x - radius, y - radius,
                                             x + radius, y + radius):
            found.extend(self.cells.get(cell, ()))
        found.sort(key=lambda e: e.order)
        return found

    def __len__(self) -> int:
        return self.count
