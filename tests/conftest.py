"""
Shared test fixtures for TrackPlan tests.

Provides reusable track pieces, placed pieces and catalog directories.
"""

import pytest
from pathlib import Path
from typing import List, Optional

from trackplan.catalog.abstraction import (
    BoundingBox,
    Connector,
    ConnectorType,
    Dimensions,
    Geometry,
    LinePath,
    TrackCategory,
    TrackPiece,
)
from trackplan.layout.model import PlacedPiece

EXAMPLE_CATALOG = Path(__file__).parent.parent / "examples" / "catalog"


def make_straight(piece_id: str = "straight-standard", length: float = 200.0,
                  height: float = 0.0,
                  end_compatible: Optional[List[str]] = None) -> TrackPiece:
    """Straight piece: female 'start' at the origin facing back, male 'end' facing forward."""
    return TrackPiece(
        id=piece_id,
        name=piece_id.replace("-", " ").title(),
        category=TrackCategory.STRAIGHT,
        type=piece_id,
        dimensions=Dimensions(
            height=12.0,
            length=length,
            width=40.0,
            bounding_box=BoundingBox(width=length, height=40.0),
        ),
        connections=[
            Connector(id="start", type=ConnectorType.FEMALE, x=0.0, y=0.0,
                      angle=180.0, height=height),
            Connector(id="end", type=ConnectorType.MALE, x=length, y=0.0,
                      angle=0.0, height=height,
                      compatible=list(end_compatible or [])),
        ],
        geometry=Geometry(type="line", path=LinePath(start=(0.0, 0.0), end=(length, 0.0))),
    )


def make_socket(piece_id: str = "socket") -> TrackPiece:
    """Single female connector at the origin facing back (-x)."""
    return TrackPiece(
        id=piece_id,
        name="Socket",
        category=TrackCategory.SPECIAL,
        type="terminal",
        dimensions=Dimensions(height=12.0, length=50.0, width=40.0),
        connections=[
            Connector(id="in", type=ConnectorType.FEMALE, x=0.0, y=0.0,
                      angle=180.0, height=0.0),
        ],
    )


@pytest.fixture
def straight_piece() -> TrackPiece:
    """A 200 mm straight."""
    return make_straight()


@pytest.fixture
def short_piece() -> TrackPiece:
    """A 100 mm straight."""
    return make_straight("straight-short", length=100.0)


@pytest.fixture
def curve_piece() -> TrackPiece:
    """A 45 degree curve whose male end faces 45 degrees."""
    return TrackPiece(
        id="curve-standard",
        name="Standard Curve",
        category=TrackCategory.CURVED,
        type="curve-standard",
        dimensions=Dimensions(height=12.0, radius=200.0, angle=45.0, width=40.0),
        connections=[
            Connector(id="start", type=ConnectorType.FEMALE, x=0.0, y=0.0,
                      angle=180.0, height=0.0),
            Connector(id="end", type=ConnectorType.MALE, x=141.42, y=58.58,
                      angle=45.0, height=0.0),
        ],
    )


@pytest.fixture
def socket_piece() -> TrackPiece:
    return make_socket()


@pytest.fixture
def placed_straight(straight_piece) -> PlacedPiece:
    """A straight placed at the origin, unrotated. Its male end is at (200, 0)."""
    return PlacedPiece(id="straight-standard-1", piece=straight_piece, x=0.0, y=0.0,
                       rotation=0.0)


@pytest.fixture
def example_catalog() -> Path:
    """The sample catalog shipped in examples/."""
    return EXAMPLE_CATALOG
