"""Measure the extent of a glyph sequence."""

from collections.abc import Iterable

from emone.types import Glyph, Size

# Template drawing geometry: pixels between neighbouring grid cells, and
# the extent of a single cell including its margin.
STRIDE = Size(x=200, y=162)
CELL_EXTENT = 500


def measure(glyphs: Iterable[Glyph]) -> Size:
    """Return (max column + 1, max row + 1), never less than 1x1."""
    glyphs = list(glyphs)
    return Size(
        x=max([1, *(g.x + 1 for g in glyphs)]),
        y=max([1, *(g.y + 1 for g in glyphs)]),
    )


def canvas_extent(size: Size, stride: Size = STRIDE) -> tuple[int, int]:
    """Pixel width and height a renderer needs for a model of this size."""
    return (
        CELL_EXTENT + (size.x - 1) * stride.x,
        CELL_EXTENT + (size.y - 1) * stride.y,
    )
