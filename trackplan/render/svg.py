"""SVG rendering of track pieces and layouts.

Produces plain SVG text from the catalog and layout data. Coordinates are
drawn as-is (y grows downwards, positive rotation turns clockwise on screen),
which is the frame the snapping engine works in.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape
import math

from ..catalog.abstraction import (
    ArcPath,
    CompositePath,
    ConnectorType,
    DEFAULT_TRACK_WIDTH,
    LinePath,
    PathDefinition,
    SVGPath,
    TrackPiece,
)
from ..layout.geometry import Point
from ..layout.model import Layout
from ..layout.snapping import SnapCandidate, absolute_connector_position

MALE_COLOR = "#4A90E2"
FEMALE_COLOR = "#E24A4A"
SNAP_COLOR = "#4AE2A4"
SELECTION_COLOR = "#4A90E2"


@dataclass
class RenderOptions:
    """Drawing options."""
    width: int = 1200
    height: int = 800
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    show_connections: bool = True
    show_grid: bool = True
    grid_size: float = 50.0
    grid_color: str = "#f0f0f0"
    background: str = "#ffffff"
    show_indicators: bool = True
    preview_opacity: float = 0.6


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _path_data(path: PathDefinition) -> str:
    """Convert a path definition to SVG path data."""
    if isinstance(path, LinePath):
        return (f"M {_fmt(path.start[0])} {_fmt(path.start[1])} "
                f"L {_fmt(path.end[0])} {_fmt(path.end[1])}")

    if isinstance(path, ArcPath):
        cx, cy = path.center
        start = math.radians(path.start_angle)
        end = math.radians(path.end_angle)
        sx, sy = cx + path.radius * math.cos(start), cy + path.radius * math.sin(start)
        ex, ey = cx + path.radius * math.cos(end), cy + path.radius * math.sin(end)
        # Sweep flag 1 runs towards increasing angles
        sweep = 1 if path.clockwise else 0
        if sweep:
            extent = (path.end_angle - path.start_angle) % 360
        else:
            extent = (path.start_angle - path.end_angle) % 360
        large_arc = 1 if extent > 180 else 0
        return (f"M {_fmt(sx)} {_fmt(sy)} "
                f"A {_fmt(path.radius)} {_fmt(path.radius)} 0 {large_arc} {sweep} "
                f"{_fmt(ex)} {_fmt(ey)}")

    if isinstance(path, CompositePath):
        return " ".join(_path_data(segment) for segment in path.segments)

    if isinstance(path, SVGPath):
        return path.d

    return ""


def _piece_elements(piece: TrackPiece, show_connections: bool) -> List[str]:
    """SVG elements for a piece in its local frame."""
    parts = []
    if piece.geometry.path is not None:
        stroke_width = piece.dimensions.width or DEFAULT_TRACK_WIDTH
        parts.append(
            f'<path d="{_path_data(piece.geometry.path)}" fill="none" '
            f'stroke="{escape(piece.visual.color)}" stroke-width="{_fmt(stroke_width)}" '
            f'stroke-linecap="round" stroke-linejoin="round" class="track"/>'
        )

    if show_connections:
        for conn in piece.connections:
            color = MALE_COLOR if conn.type == ConnectorType.MALE else FEMALE_COLOR
            rad = math.radians(conn.angle)
            tip_x = conn.x + math.cos(rad) * 15
            tip_y = conn.y + math.sin(rad) * 15
            parts.append(
                f'<circle cx="{_fmt(conn.x)}" cy="{_fmt(conn.y)}" r="8" fill="{color}" '
                f'stroke="#333" stroke-width="2" class="connector {conn.type.value}"/>'
            )
            parts.append(
                f'<line x1="{_fmt(conn.x)}" y1="{_fmt(conn.y)}" '
                f'x2="{_fmt(tip_x)}" y2="{_fmt(tip_y)}" stroke="#333" stroke-width="2"/>'
            )
    return parts


def _placed_group(piece: TrackPiece, position: Point, rotation: float,
                  show_connections: bool, extra: str = "") -> str:
    x, y = position
    inner = "".join(_piece_elements(piece, show_connections))
    return (f'<g transform="translate({_fmt(x)} {_fmt(y)}) rotate({_fmt(rotation)})"'
            f'{extra}>{inner}</g>')


def _grid(options: RenderOptions) -> List[str]:
    parts = []
    if options.grid_size <= 0:
        return parts
    x = 0.0
    while x <= options.width:
        parts.append(f'<line x1="{_fmt(x)}" y1="0" x2="{_fmt(x)}" y2="{options.height}" '
                     f'stroke="{options.grid_color}" stroke-width="1" class="grid-line"/>')
        x += options.grid_size
    y = 0.0
    while y <= options.height:
        parts.append(f'<line x1="0" y1="{_fmt(y)}" x2="{options.width}" y2="{_fmt(y)}" '
                     f'stroke="{options.grid_color}" stroke-width="1" class="grid-line"/>')
        y += options.grid_size
    return parts


def _document(parts: List[str], options: RenderOptions) -> str:
    transform = (f'translate({_fmt(options.offset_x)} {_fmt(options.offset_y)}) '
                 f'scale({_fmt(options.scale)})')
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{options.width}" height="{options.height}" '
        f'viewBox="0 0 {options.width} {options.height}">'
        f'<rect width="100%" height="100%" fill="{options.background}"/>'
        f'<g transform="{transform}">{"".join(parts)}</g>'
        f'</svg>'
    )


def render_piece_svg(piece: TrackPiece, options: Optional[RenderOptions] = None) -> str:
    """Render a single catalog piece around its local origin."""
    options = options or RenderOptions()
    parts = _grid(options) if options.show_grid else []
    parts.extend(_piece_elements(piece, options.show_connections))
    return _document(parts, options)


def render_layout_svg(
    layout: Layout,
    options: Optional[RenderOptions] = None,
    preview: Optional[Tuple[TrackPiece, Point, float]] = None,
    candidate: Optional[SnapCandidate] = None,
) -> str:
    """
    Render a layout.

    Args:
        layout: Placed pieces to draw
        options: Drawing options
        preview: (piece, position, rotation) of the piece being placed
        candidate: Current snap candidate; its target connector is ringed
            when ``options.show_indicators`` is set

    Returns:
        SVG string
    """
    options = options or RenderOptions()
    parts = _grid(options) if options.show_grid else []

    for placed in layout.pieces:
        parts.append(_placed_group(placed.piece, placed.position, placed.rotation,
                                   options.show_connections,
                                   f' id="{escape(placed.id)}"'))

        if placed.id == layout.selected_id:
            bbox = placed.piece.get_bounding_box()
            parts.append(
                f'<rect x="{_fmt(placed.x - bbox.width / 2)}" '
                f'y="{_fmt(placed.y - bbox.height / 2)}" '
                f'width="{_fmt(bbox.width)}" height="{_fmt(bbox.height)}" fill="none" '
                f'stroke="{SELECTION_COLOR}" stroke-width="3" stroke-dasharray="5 5" '
                f'class="selection"/>'
            )

    if candidate is not None and options.show_indicators:
        tx, ty = absolute_connector_position(candidate.placed_piece,
                                             candidate.placed_connection)
        parts.append(
            f'<circle cx="{_fmt(tx)}" cy="{_fmt(ty)}" r="20" '
            f'fill="rgba(74, 226, 164, 0.3)" stroke="{SNAP_COLOR}" stroke-width="3" '
            f'class="snap-target"/>'
        )

    if preview is not None:
        piece, position, rotation = preview
        if candidate is not None:
            position, rotation = candidate.snap_position, candidate.snap_rotation
        parts.append(_placed_group(piece, position, rotation, True,
                                   f' opacity="{_fmt(options.preview_opacity)}" '
                                   f'class="preview"'))

    return _document(parts, options)
