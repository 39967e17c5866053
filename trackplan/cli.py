#!/usr/bin/env python3
"""
TrackPlan CLI

Command-line interface for inspecting a track catalog and trying out snaps.

Usage:
    trackplan list <catalog_dir> [--category curved]
    trackplan show <catalog_dir> <piece_id>
    trackplan snap <catalog_dir> <placed_id> <new_id> --at X Y [options]
    trackplan render <catalog_dir> <piece_id> -o piece.svg
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .catalog.loader import CatalogError, CatalogLoader
from .layout.collision import find_collisions
from .layout.model import Layout
from .layout.settings import DEFAULT_SNAP_SETTINGS, SnapSettings, load_snap_settings
from .layout.snapping import (
    absolute_connector_angle,
    absolute_connector_position,
    find_snap_candidates,
)


def cmd_list(args):
    """List catalog pieces."""
    loader = CatalogLoader(Path(args.catalog))
    catalog = loader.load_catalog()

    if args.category:
        pieces = loader.load_track_pieces_by_category(args.category)
    else:
        pieces = loader.load_all_track_pieces()

    print(f"Catalog {catalog.version or '(unversioned)'}: {len(catalog.pieces)} pieces")
    for category, count in sorted(catalog.category_counts().items()):
        print(f"  {category}: {count}")
    print()

    for piece in pieces:
        print(f"  {piece.id:<24} {piece.category.value:<10} "
              f"{len(piece.connections)} connectors  {piece.name}")
    return 0


def cmd_show(args):
    """Show one piece and its connectors."""
    loader = CatalogLoader(Path(args.catalog))
    piece = loader.load_track_piece(args.piece)

    width, height = piece.get_footprint()
    print(f"{piece.name} ({piece.id})")
    print(f"  Category: {piece.category.value}")
    print(f"  Type: {piece.type}")
    print(f"  Footprint: {width:.1f} x {height:.1f} {piece.dimensions.unit}")
    print(f"  Connectors: {len(piece.connections)}")
    for conn in piece.connections:
        line = (f"    {conn.id:<10} {conn.type.value:<6} "
                f"at ({conn.x:.1f}, {conn.y:.1f}) facing {conn.angle:.0f}° "
                f"height {conn.height:.1f}")
        if conn.compatible:
            line += f"  compatible: {', '.join(conn.compatible)}"
        print(line)
    return 0


def cmd_snap(args):
    """Place one piece at the origin and look for snaps for a second one."""
    loader = CatalogLoader(Path(args.catalog))
    placed_piece = loader.load_track_piece(args.placed)
    new_piece = loader.load_track_piece(args.new)

    settings = load_snap_settings(Path(args.settings)) if args.settings else DEFAULT_SNAP_SETTINGS
    if args.threshold is not None:
        settings = SnapSettings.from_dict({**settings.to_dict(), "threshold": args.threshold})
    if args.strict:
        settings = settings.with_overrides(strict_compatibility=True)

    layout = Layout()
    anchor = layout.place(placed_piece, 0.0, 0.0, args.placed_rotation)
    position = (args.at[0], args.at[1])

    print(f"Placed {anchor.id} at (0, 0) rot {anchor.rotation:.0f}°")
    for conn in placed_piece.connections:
        x, y = absolute_connector_position(anchor, conn)
        print(f"  {conn.id}: ({x:.1f}, {y:.1f}) facing "
              f"{absolute_connector_angle(anchor, conn):.0f}°")

    candidates = find_snap_candidates(new_piece, position, args.rotation,
                                      layout.pieces, settings)
    print(f"\n{new_piece.id} at ({position[0]:.1f}, {position[1]:.1f}) "
          f"rot {args.rotation:.0f}°: {len(candidates)} candidate(s)")
    if not candidates:
        return 0

    best = min(candidates, key=lambda c: c.distance)
    for candidate in candidates:
        marker = "*" if candidate is best else " "
        x, y = candidate.snap_position
        print(f"  {marker} {candidate.new_piece_connection.id} -> "
              f"{candidate.placed_connection.id}: distance {candidate.distance:.2f}, "
              f"snap to ({x:.2f}, {y:.2f}) rot {candidate.snap_rotation:.0f}°")

    collisions = find_collisions(new_piece, best.snap_position, layout.pieces)
    if collisions:
        print(f"\nWarning: snapped placement overlaps {', '.join(collisions)}")
    return 0


def cmd_render(args):
    """Render a catalog piece to SVG."""
    from .render.svg import RenderOptions, render_piece_svg

    loader = CatalogLoader(Path(args.catalog))
    piece = loader.load_track_piece(args.piece)

    options = RenderOptions(
        width=args.width,
        height=args.height,
        offset_x=args.width / 2,
        offset_y=args.height / 2,
        show_grid=not args.no_grid,
    )
    output = Path(args.output)
    output.write_text(render_piece_svg(piece, options), encoding="utf-8")
    print(f"Wrote {output}")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="TrackPlan - model train track layout tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  trackplan list data/
  trackplan list data/ --category curved
  trackplan show data/ straight-short
  trackplan snap data/ straight-short curve-standard --at 230 0
  trackplan snap data/ straight-short straight-short --at 220 5 --threshold 30
  trackplan render data/ curve-standard -o curve.svg
        """,
    )

    parser.add_argument('--version', action='version', version=f'trackplan {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    list_parser = subparsers.add_parser('list', help='List catalog pieces')
    list_parser.add_argument('catalog', help='Catalog directory')
    list_parser.add_argument('--category', help='Only list one category')

    show_parser = subparsers.add_parser('show', help='Show a piece and its connectors')
    show_parser.add_argument('catalog', help='Catalog directory')
    show_parser.add_argument('piece', help='Piece id')

    snap_parser = subparsers.add_parser('snap', help='Try snapping one piece to another')
    snap_parser.add_argument('catalog', help='Catalog directory')
    snap_parser.add_argument('placed', help='Id of the piece placed at the origin')
    snap_parser.add_argument('new', help='Id of the piece being previewed')
    snap_parser.add_argument('--at', nargs=2, type=float, required=True,
                             metavar=('X', 'Y'), help='Preview position')
    snap_parser.add_argument('--rotation', type=float, default=0.0,
                             help='Preview rotation in degrees (default: 0)')
    snap_parser.add_argument('--placed-rotation', type=float, default=0.0,
                             help='Rotation of the placed piece (default: 0)')
    snap_parser.add_argument('--settings', help='YAML snap settings file')
    snap_parser.add_argument('--threshold', type=float,
                             help='Snap distance threshold (overrides settings)')
    snap_parser.add_argument('--strict', action='store_true',
                             help='Honour per-connector compatible lists')

    render_parser = subparsers.add_parser('render', help='Render a piece to SVG')
    render_parser.add_argument('catalog', help='Catalog directory')
    render_parser.add_argument('piece', help='Piece id')
    render_parser.add_argument('-o', '--output', required=True, help='Output SVG path')
    render_parser.add_argument('--width', type=int, default=600)
    render_parser.add_argument('--height', type=int, default=400)
    render_parser.add_argument('--no-grid', action='store_true', help='Omit the grid')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        'list': cmd_list,
        'show': cmd_show,
        'snap': cmd_snap,
        'render': cmd_render,
    }

    try:
        return commands[args.command](args)
    except (CatalogError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
