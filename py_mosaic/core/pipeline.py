"""
End-to-end Truchet and Voronoi pattern generation.

Both pipelines are pure functions of their parameters (plus explicit
random draws) and are re-run wholesale whenever a parameter changes.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import structlog

from ..config.pattern_settings import TruchetParams, VoronoiParams
from .alea_prng import AleaPRNG
from .cell_refinement import RefinedCell, refine_cell
from .truchet_grid import TruchetGrid, create_grid
from .truchet_tiles import TruchetTile, generate_tiles
from .vector import PointLike, Vector
from .voronoi_cells import transform_cells
from .voronoi_diagram import (
    BoundingBox,
    Diagram,
    DiagramEdge,
    PlanarSubdivision,
    ScipyVoronoiSolver,
    finite_edges,
)

logger = structlog.get_logger()


@dataclass
class TruchetPattern:
    grid: TruchetGrid
    tiles: List[TruchetTile] = field(default_factory=list)


@dataclass
class VoronoiPattern:
    """Refined cells plus the raw diagram pieces some layers draw."""

    width: float
    height: float
    sites: List[Vector] = field(default_factory=list)
    cells: List[RefinedCell] = field(default_factory=list)
    edges: List[DiagramEdge] = field(default_factory=list)


def generate_truchet(params: TruchetParams, prng: Optional[AleaPRNG] = None) -> TruchetPattern:
    """
    Synthesize the grid and build every tile's descriptors.

    Args:
        params: Grid and tile settings
        prng: Random source for random grids and automaton seeds

    Returns:
        The grid and one tile per cell
    """
    grid = create_grid(params.grid, prng)
    tiles = generate_tiles(grid, params.tile)
    logger.info("Truchet pattern generated", grid_pattern=params.grid.pattern.value,
                tile_pattern=params.tile.pattern.value, tiles=len(tiles))
    return TruchetPattern(grid=grid, tiles=tiles)


def refine_diagram(diagram: Diagram, params: VoronoiParams) -> List[RefinedCell]:
    """Order and refine every renderable cell of ``diagram``."""
    border_width = 0.5 * params.border_width
    refined = []

    for vcell in transform_cells(diagram.cells):
        if not vcell.is_renderable():
            continue
        refined.append(refine_cell(
            vcell,
            border_width=border_width,
            step=params.parallel_path_step,
            simplify_radius=params.simplify_radius,
            bezier_factor=params.bezier_factor,
        ))

    return refined


def generate_voronoi(params: VoronoiParams, points: Sequence[PointLike],
                     solver: Optional[PlanarSubdivision] = None) -> VoronoiPattern:
    """
    Compute the diagram of ``points`` and refine its cells.

    Args:
        params: Cell refinement settings and canvas size
        points: Voronoi sites
        solver: Planar subdivision implementation (scipy by default)

    Returns:
        VoronoiPattern ready for rendering
    """
    solver = solver or ScipyVoronoiSolver()
    bounds = BoundingBox(left=0, right=params.width, top=0, bottom=params.height)
    diagram = solver.compute(points, bounds)
    cells = refine_diagram(diagram, params)

    logger.info("Voronoi pattern generated", sites=len(points), cells=len(diagram.cells),
                renderable=len(cells))
    return VoronoiPattern(
        width=params.width,
        height=params.height,
        sites=[Vector(cell.site.x, cell.site.y) for cell in diagram.cells],
        cells=cells,
        edges=finite_edges(diagram.edges),
    )
