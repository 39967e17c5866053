"""Tests for SVG output."""

import xml.etree.ElementTree as ET

from trackplan.catalog.abstraction import ArcPath, CompositePath, LinePath, SVGPath
from trackplan.layout.model import Layout
from trackplan.layout.snapping import find_snap_candidate
from trackplan.render.svg import (
    RenderOptions,
    _path_data,
    render_layout_svg,
    render_piece_svg,
)


class TestPathData:
    """Tests for path definition to SVG path data."""

    def test_line(self):
        assert _path_data(LinePath(start=(0.0, 0.0), end=(200.0, 0.0))) == "M 0 0 L 200 0"

    def test_clockwise_arc(self):
        arc = ArcPath(center=(0.0, 200.0), radius=200.0, start_angle=-90.0,
                      end_angle=-45.0, clockwise=True)
        assert _path_data(arc) == "M 0 0 A 200 200 0 0 1 141.42 58.58"

    def test_large_counter_clockwise_arc(self):
        arc = ArcPath(center=(0.0, 0.0), radius=10.0, start_angle=0.0,
                      end_angle=90.0, clockwise=False)
        # Counter-clockwise from 0 to 90 sweeps 270 degrees
        assert " 0 1 0 " in _path_data(arc)

    def test_composite_and_raw(self):
        composite = CompositePath(segments=[
            LinePath(start=(0.0, 0.0), end=(10.0, 0.0)),
            LinePath(start=(0.0, 0.0), end=(10.0, -5.0)),
        ])
        assert _path_data(composite) == "M 0 0 L 10 0 M 0 0 L 10 -5"
        assert _path_data(SVGPath(d="M 1 1 L 2 2")) == "M 1 1 L 2 2"


class TestRenderPiece:
    """Tests for single piece rendering."""

    def test_well_formed(self, straight_piece):
        root = ET.fromstring(render_piece_svg(straight_piece))
        assert root.tag == "{http://www.w3.org/2000/svg}svg"

    def test_connectors_drawn_by_gender(self, straight_piece):
        svg = render_piece_svg(straight_piece)
        assert 'class="connector male"' in svg
        assert 'class="connector female"' in svg
        assert 'd="M 0 0 L 200 0"' in svg

    def test_options(self, straight_piece):
        svg = render_piece_svg(straight_piece, RenderOptions(
            width=300, height=200, show_grid=False, show_connections=False))
        assert 'width="300"' in svg
        assert "grid-line" not in svg
        assert "connector" not in svg

    def test_grid(self, straight_piece):
        svg = render_piece_svg(straight_piece, RenderOptions(width=100, height=100,
                                                             grid_size=50))
        # Three vertical and three horizontal lines
        assert svg.count("grid-line") == 6


class TestRenderLayout:
    """Tests for layout rendering."""

    def test_placed_pieces_transformed(self, straight_piece):
        layout = Layout()
        layout.place(straight_piece, 200, 0, 90)

        svg = render_layout_svg(layout, RenderOptions(show_grid=False))

        assert 'id="straight-standard-1"' in svg
        assert 'transform="translate(200 0) rotate(90)"' in svg
        ET.fromstring(svg)

    def test_selection_outline(self, straight_piece):
        layout = Layout()
        placed = layout.place(straight_piece, 0, 0)
        assert 'class="selection"' not in render_layout_svg(layout)

        layout.select(placed.id)
        assert 'class="selection"' in render_layout_svg(layout)

    def test_snap_indicator_and_preview(self, straight_piece):
        layout = Layout()
        layout.place(straight_piece, 0, 0)
        candidate = find_snap_candidate(straight_piece, (210.0, 5.0), 0.0, layout.pieces)

        svg = render_layout_svg(layout, preview=(straight_piece, (210.0, 5.0), 0.0),
                                candidate=candidate)

        assert 'class="snap-target"' in svg
        assert 'cx="200" cy="0" r="20"' in svg
        # Preview is drawn at the snapped pose, not at the pointer
        assert 'translate(200 0) rotate(0)" opacity="0.6" class="preview"' in svg

    def test_indicators_can_be_hidden(self, straight_piece):
        layout = Layout()
        layout.place(straight_piece, 0, 0)
        candidate = find_snap_candidate(straight_piece, (210.0, 5.0), 0.0, layout.pieces)

        svg = render_layout_svg(layout, RenderOptions(show_indicators=False),
                                candidate=candidate)

        assert "snap-target" not in svg

    def test_preview_at_pointer_without_candidate(self, straight_piece):
        svg = render_layout_svg(Layout(), preview=(straight_piece, (33.0, 44.0), 180.0))
        assert 'translate(33 44) rotate(180)' in svg
