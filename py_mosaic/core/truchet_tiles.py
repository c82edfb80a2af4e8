"""
Truchet tile geometry.

Each style maps one cell ``(x, y, size, state)`` to path descriptors. The
state picks one of two mirrored motifs so that neighbouring tiles join
into continuous lines or curves.
"""

from dataclasses import dataclass
from typing import List, Union

import structlog

from ..config.pattern_settings import ConcentricSmithParams, TilePattern, TruchetTileParams
from .paths import ArcWedge, CircularArc, Polyline
from .truchet_grid import TruchetGrid
from .vector import Vector

logger = structlog.get_logger()

TileShape = Union[Polyline, CircularArc, ArcWedge]


@dataclass(frozen=True)
class TruchetTile:
    """Descriptors for one grid cell."""

    row: int
    col: int
    x: float
    y: float
    size: float
    state: bool
    shapes: List[TileShape]


def _v(x: float, y: float) -> Vector:
    return Vector(float(x), float(y))


def diagonal_tile(x: float, y: float, size: float, state: bool) -> List[TileShape]:
    """A single diagonal; set cells run top-left to bottom-right."""
    if state:
        return [Polyline((_v(x, y), _v(x + size, y + size)), closed=False)]
    return [Polyline((_v(x, y + size), _v(x + size, y)), closed=False)]


def triangle_tile(x: float, y: float, size: float, state: bool) -> List[TileShape]:
    """Upper-left triangle when set, lower-right when clear."""
    if state:
        return [Polyline((_v(x, y), _v(x + size, y), _v(x, y + size)))]
    return [Polyline((_v(x + size, y), _v(x + size, y + size), _v(x, y + size)))]


def solid_tile(x: float, y: float, size: float, state: bool) -> List[TileShape]:
    if not state:
        return []
    return [Polyline((_v(x, y), _v(x + size, y), _v(x + size, y + size), _v(x, y + size)))]


def smith_tile(x: float, y: float, size: float, state: bool) -> List[TileShape]:
    """Two quarter circles joining the midpoints of adjacent edges."""
    r = 0.5 * size
    top = _v(x + r, y)
    right = _v(x + size, y + r)
    bottom = _v(x + r, y + size)
    left = _v(x, y + r)

    if state:
        return [CircularArc(r, left, top), CircularArc(r, right, bottom)]
    return [CircularArc(r, top, right), CircularArc(r, bottom, left)]


def concentric_radii(size: float, num_circles: int, gap: float) -> List[float]:
    """Ring radii centred on half the cell size, ``gap * size`` apart."""
    gap = gap * size
    first = abs(0.5 * (size - gap * (num_circles - 1)))
    return [first + i * gap for i in range(num_circles)]


def concentric_smith_tile(x: float, y: float, size: float, num_circles: int,
                          gap: float, state: bool) -> List[TileShape]:
    """
    Nested quarter-circle rings around two opposite corners.

    Each corner gets a background wedge bounded by its innermost and
    outermost ring, followed by the rings themselves, so the background
    between ring endpoints is covered when tiles overlap.
    """
    if num_circles < 1:
        return []

    radii = concentric_radii(size, num_circles, gap)
    ds = radii[0]
    de = radii[-1]
    shapes: List[TileShape] = []

    if state:
        # Top-left and bottom-right corners
        corners = [
            (lambda t: _v(x, y + t), lambda t: _v(x + t, y)),
            (lambda t: _v(x + size, y + size - t), lambda t: _v(x + size - t, y + size)),
        ]
    else:
        # Top-right and bottom-left corners
        corners = [
            (lambda t: _v(x + size - t, y), lambda t: _v(x + size, y + t)),
            (lambda t: _v(x + t, y + size), lambda t: _v(x, y + size - t)),
        ]

    for arc_start, arc_end in corners:
        wedge = ArcWedge(
            inner=CircularArc(ds, arc_start(ds), arc_end(ds)),
            outer=CircularArc(de, arc_end(de), arc_start(de), sweep=True),
        )
        shapes.append(wedge)
        shapes.extend(CircularArc(t, arc_start(t), arc_end(t)) for t in radii)

    return shapes


def tile_shapes(x: float, y: float, size: float, state: bool,
                params: TruchetTileParams) -> List[TileShape]:
    """Descriptors for one cell in the selected style."""
    pattern = params.pattern

    if pattern == TilePattern.CONCENTRIC_SMITH:
        cs: ConcentricSmithParams = params.concentric_smith
        return concentric_smith_tile(x, y, size, cs.num_circles, cs.gap, state)
    if pattern == TilePattern.DIAGONAL:
        return diagonal_tile(x, y, size, state)
    if pattern == TilePattern.SMITH:
        return smith_tile(x, y, size, state)
    if pattern == TilePattern.SOLID:
        return solid_tile(x, y, size, state)
    if pattern == TilePattern.TRIANGLE:
        return triangle_tile(x, y, size, state)

    logger.error("Invalid truchet pattern", pattern=pattern)
    return []


def generate_tiles(grid: TruchetGrid, params: TruchetTileParams) -> List[TruchetTile]:
    """
    Walk the grid row-major and build every cell's tile.

    Args:
        grid: Synthesized grid
        params: Tile style settings

    Returns:
        One TruchetTile per grid cell
    """
    tiles = []
    spacing = grid.spacing
    col_count = grid.col_count

    for i, state in enumerate(grid.states):
        row, col = divmod(i, col_count)
        x = col * spacing
        y = row * spacing
        state = bool(state)
        tiles.append(TruchetTile(
            row=row,
            col=col,
            x=x,
            y=y,
            size=spacing,
            state=state,
            shapes=tile_shapes(x, y, spacing, state, params),
        ))

    return tiles
