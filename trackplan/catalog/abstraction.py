"""
Track Catalog Abstraction Layer

Plain data classes describing track pieces as they come out of the catalog.
The snapping engine only reads connectors and bounding boxes; the geometry,
visual and metadata records are carried along for renderers and listings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import math


class ConnectorType(Enum):
    """Physical connector gender."""
    MALE = "male"
    FEMALE = "female"


class TrackCategory(Enum):
    """Catalog categories."""
    STRAIGHT = "straight"
    CURVED = "curved"
    SWITCH = "switch"
    SPECIAL = "special"
    ELEVATION = "elevation"
    ACCESSORY = "accessory"


# Fallback body size when a piece declares neither bounding box nor length
DEFAULT_PIECE_LENGTH = 200.0  # mm
DEFAULT_PIECE_WIDTH = 50.0
DEFAULT_TRACK_WIDTH = 45.0


def read_key(data: Dict[str, Any], snake: str, camel: Optional[str] = None,
             default: Any = None) -> Any:
    """Read a key that may be spelled in snake_case or camelCase."""
    if snake in data:
        return data[snake]
    if camel and camel in data:
        return data[camel]
    return default


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


@dataclass
class Connector:
    """A physical attachment point on a track piece."""
    id: str
    type: ConnectorType
    x: float  # Relative to piece placement anchor (mm)
    y: float
    angle: float = 0.0  # Facing direction in the local frame (degrees)
    height: float = 0.0  # Coarse vertical channel, not true 3-D
    compatible: List[str] = field(default_factory=list)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Connector":
        position = data.get("position") or {}
        compatible = data.get("compatible") or []
        if not isinstance(compatible, list):
            raise ValueError(
                f"Connector '{data.get('id')}' compatible must be a list, "
                f"got {type(compatible).__name__}"
            )
        return cls(
            id=str(data["id"]),
            type=ConnectorType(data["type"]),
            x=float(position.get("x", 0.0)),
            y=float(position.get("y", 0.0)),
            angle=float(data.get("angle", 0.0)),
            height=float(data.get("height", 0.0)),
            compatible=[str(c) for c in compatible],
        )


@dataclass
class BoundingBox:
    """Axis-aligned extent of a piece in its local frame (mm)."""
    width: float
    height: float


@dataclass
class Dimensions:
    """Physical dimensions of a track piece."""
    height: float = 0.0
    length: Optional[float] = None
    width: Optional[float] = None
    radius: Optional[float] = None
    angle: Optional[float] = None
    arc_length: Optional[float] = None
    clearance_height: Optional[float] = None
    bounding_box: Optional[BoundingBox] = None
    unit: str = "mm"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dimensions":
        bbox = read_key(data, "bounding_box", "boundingBox")
        return cls(
            height=float(data.get("height", 0.0)),
            length=_optional_float(data.get("length")),
            width=_optional_float(data.get("width")),
            radius=_optional_float(data.get("radius")),
            angle=_optional_float(data.get("angle")),
            arc_length=_optional_float(read_key(data, "arc_length", "arcLength")),
            clearance_height=_optional_float(
                read_key(data, "clearance_height", "clearanceHeight")),
            bounding_box=(BoundingBox(float(bbox["width"]), float(bbox["height"]))
                          if bbox else None),
            unit=data.get("unit", "mm"),
        )


@dataclass
class LinePath:
    """Straight segment from start to end."""
    start: Tuple[float, float]
    end: Tuple[float, float]
    type: str = "line"


@dataclass
class ArcPath:
    """Circular arc around center; angles in degrees."""
    center: Tuple[float, float]
    radius: float
    start_angle: float
    end_angle: float
    clockwise: bool = False
    type: str = "arc"


@dataclass
class CompositePath:
    """Sequence of line and arc segments."""
    segments: List[Union[LinePath, ArcPath]] = field(default_factory=list)
    type: str = "composite"


@dataclass
class SVGPath:
    """Raw SVG path data."""
    d: str
    type: str = "svg"


PathDefinition = Union[LinePath, ArcPath, CompositePath, SVGPath]


def _point(data: Dict[str, Any]) -> Tuple[float, float]:
    return (float(data.get("x", 0.0)), float(data.get("y", 0.0)))


def parse_path(data: Dict[str, Any]) -> PathDefinition:
    """Build a path definition from its catalog record."""
    kind = data.get("type")
    if kind == "line":
        return LinePath(start=_point(data["start"]), end=_point(data["end"]))
    if kind == "arc":
        return ArcPath(
            center=_point(data["center"]),
            radius=float(data["radius"]),
            start_angle=float(read_key(data, "start_angle", "startAngle", 0.0)),
            end_angle=float(read_key(data, "end_angle", "endAngle", 0.0)),
            clockwise=bool(data.get("clockwise", False)),
        )
    if kind == "composite":
        segments = [parse_path(s) for s in data.get("segments", [])]
        return CompositePath(segments=segments)
    if kind == "svg":
        return SVGPath(d=str(data.get("d", "")))
    raise ValueError(f"Unknown path type: {kind}")


@dataclass
class Geometry:
    """Rendering geometry of a track piece."""
    type: str = "line"
    path: Optional[PathDefinition] = None
    collision_path: Optional[PathDefinition] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Geometry":
        path = data.get("path")
        collision = read_key(data, "collision_path", "collisionPath")
        return cls(
            type=data.get("type", "line"),
            path=parse_path(path) if path else None,
            collision_path=parse_path(collision) if collision else None,
        )


@dataclass
class VisualProperties:
    """How a piece should be drawn."""
    color: str = "#8B5A2B"
    render_style: str = "simple"
    texture: Optional[str] = None
    icon: Optional[str] = None
    model_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VisualProperties":
        return cls(
            color=data.get("color", "#8B5A2B"),
            render_style=read_key(data, "render_style", "renderStyle", "simple"),
            texture=data.get("texture"),
            icon=data.get("icon"),
            model_url=read_key(data, "model_url", "modelUrl"),
        )


@dataclass
class Metadata:
    """Product information; not used by the engine."""
    manufacturer: str = ""
    product_line: str = ""
    availability: str = "current"
    sku: Optional[str] = None
    set_includes: List[str] = field(default_factory=list)
    year_introduced: Optional[int] = None
    discontinued: bool = False
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Metadata":
        year = read_key(data, "year_introduced", "yearIntroduced")
        return cls(
            manufacturer=data.get("manufacturer", ""),
            product_line=read_key(data, "product_line", "productLine", ""),
            availability=data.get("availability", "current"),
            sku=data.get("sku"),
            set_includes=list(read_key(data, "set_includes", "setIncludes") or []),
            year_introduced=int(year) if year is not None else None,
            discontinued=bool(data.get("discontinued", False)),
            notes=data.get("notes"),
        )


@dataclass
class TrackPiece:
    """A catalog track piece. Read-only to the snapping engine."""
    id: str
    name: str
    category: TrackCategory
    type: str  # e.g. "straight-short", "curve-standard"
    dimensions: Dimensions = field(default_factory=Dimensions)
    connections: List[Connector] = field(default_factory=list)
    geometry: Geometry = field(default_factory=Geometry)
    visual: VisualProperties = field(default_factory=VisualProperties)
    metadata: Metadata = field(default_factory=Metadata)

    def get_connector(self, connector_id: str) -> Optional[Connector]:
        """Get a connector by its id."""
        for conn in self.connections:
            if conn.id == connector_id:
                return conn
        return None

    @property
    def identifiers(self) -> Tuple[str, str, str]:
        """Names a connector's compatibility list may refer to this piece by."""
        return (self.id, self.type, self.category.value)

    def get_footprint(self) -> Tuple[float, float]:
        """
        Get (width, height) used by the coarse collision check.

        Uses the declared bounding box, otherwise the nominal length and
        track width.
        """
        bbox = self.dimensions.bounding_box
        if bbox:
            return (bbox.width, bbox.height)
        return (self.dimensions.length or DEFAULT_PIECE_LENGTH,
                self.dimensions.width or DEFAULT_PIECE_WIDTH)

    def get_bounding_box(self) -> BoundingBox:
        """
        Get the piece extent for drawing and selection outlines.

        Falls back to an estimate from the geometry when the catalog does not
        declare a bounding box.
        """
        if self.dimensions.bounding_box:
            return self.dimensions.bounding_box

        path = self.geometry.path
        if isinstance(path, LinePath):
            return BoundingBox(abs(path.end[0] - path.start[0]),
                               abs(path.end[1] - path.start[1]))
        if isinstance(path, ArcPath):
            return BoundingBox(path.radius * 2, path.radius * 2)

        return BoundingBox(DEFAULT_PIECE_LENGTH, DEFAULT_PIECE_LENGTH)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrackPiece":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            category=TrackCategory(data["category"]),
            type=str(data.get("type", "")),
            dimensions=Dimensions.from_dict(data.get("dimensions") or {}),
            connections=[Connector.from_dict(c) for c in data.get("connections") or []],
            geometry=Geometry.from_dict(data.get("geometry") or {}),
            visual=VisualProperties.from_dict(data.get("visual") or {}),
            metadata=Metadata.from_dict(data.get("metadata") or {}),
        )

    def __repr__(self) -> str:
        return (f"TrackPiece({self.id!r}, category={self.category.value}, "
                f"connections={len(self.connections)})")


def is_finite_connector(conn: Connector) -> bool:
    """Check that a connector's pose and height are finite numbers."""
    return all(math.isfinite(v) for v in (conn.x, conn.y, conn.angle, conn.height))
