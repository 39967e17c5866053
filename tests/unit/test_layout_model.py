"""Tests for placed pieces and the layout collection."""

import pytest

from trackplan.layout.model import Layout, PlacedPiece


class TestPlacedPiece:
    """Tests for PlacedPiece."""

    def test_rotation_normalized(self, straight_piece):
        assert PlacedPiece(id="a", piece=straight_piece, rotation=450).rotation == 90.0
        assert PlacedPiece(id="b", piece=straight_piece, rotation=-180).rotation == 180.0

    def test_position_and_piece_id(self, placed_straight):
        assert placed_straight.position == (0.0, 0.0)
        assert placed_straight.piece_id == "straight-standard"


class TestLayout:
    """Tests for Layout."""

    def test_place_allocates_ids(self, straight_piece, short_piece):
        layout = Layout()

        a = layout.place(straight_piece, 0, 0)
        b = layout.place(straight_piece, 200, 0)
        c = layout.place(short_piece, 400, 0)

        assert [a.id, b.id, c.id] == [
            "straight-standard-1", "straight-standard-2", "straight-short-3",
        ]
        assert len(layout) == 3
        assert list(layout) == [a, b, c]

    def test_next_id_skips_taken(self, straight_piece):
        layout = Layout(pieces=[PlacedPiece(id="straight-standard-1", piece=straight_piece)])
        assert layout.next_id(straight_piece) == "straight-standard-2"

    def test_get_and_remove(self, straight_piece):
        layout = Layout()
        placed = layout.place(straight_piece, 0, 0)

        assert layout.get(placed.id) is placed
        assert layout.remove(placed.id) is placed
        assert layout.get(placed.id) is None
        assert layout.remove(placed.id) is None

    def test_remove_clears_selection(self, straight_piece):
        layout = Layout()
        placed = layout.place(straight_piece, 0, 0)
        layout.select(placed.id)

        layout.remove(placed.id)

        assert layout.selected_id is None
        assert layout.selected is None

    def test_select_unknown(self, straight_piece):
        layout = Layout()
        layout.place(straight_piece, 0, 0)
        assert layout.select("ghost") is False
        assert layout.selected_id is None
        assert layout.select(None) is True

    def test_find_piece_at_nearest(self, straight_piece):
        layout = Layout()
        layout.place(straight_piece, 0, 0)
        near = layout.place(straight_piece, 60, 0)

        assert layout.find_piece_at(50, 0) is near

    def test_find_piece_at_is_strict(self, straight_piece):
        layout = Layout()
        layout.place(straight_piece, 0, 0)

        assert layout.find_piece_at(100, 0) is None
        assert layout.find_piece_at(99.9, 0) is not None
        assert layout.find_piece_at(30, 0, max_distance=20) is None

    def test_clear(self, straight_piece):
        layout = Layout()
        placed = layout.place(straight_piece, 0, 0)
        layout.select(placed.id)

        layout.clear()

        assert len(layout) == 0
        assert layout.selected_id is None

    def test_stats(self, straight_piece, short_piece):
        layout = Layout()
        layout.place(straight_piece, 0, 0)
        layout.place(straight_piece, 200, 0)
        layout.place(short_piece, 400, 0)

        stats = layout.get_stats()

        assert stats["pieces"] == 3
        assert stats["by_piece"] == {"straight-standard": 2, "straight-short": 1}
        assert stats["selected"] is None
