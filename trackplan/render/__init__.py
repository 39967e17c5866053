"""SVG rendering of catalog pieces and layouts."""

from .svg import RenderOptions, render_piece_svg, render_layout_svg

__all__ = [
    "RenderOptions",
    "render_piece_svg",
    "render_layout_svg",
]
