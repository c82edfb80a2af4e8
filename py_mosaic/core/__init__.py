"""
Core pattern generation functionality.
"""

from .alea_prng import AleaPRNG
from .vector import Line, Vector
from .truchet_grid import TruchetGrid, create_grid
from .truchet_tiles import TruchetTile, generate_tiles
from .voronoi_diagram import BoundingBox, Diagram, PlanarSubdivision, ScipyVoronoiSolver
from .voronoi_cells import VCell, transform_cells
from .cell_refinement import RefinedCell, compute_bezier_points, inset_vertices, simplify_path
from .point_sampling import generate_points
from .pipeline import TruchetPattern, VoronoiPattern, generate_truchet, generate_voronoi

__all__ = ['AleaPRNG', 'Line', 'Vector',
           'TruchetGrid', 'create_grid', 'TruchetTile', 'generate_tiles',
           'BoundingBox', 'Diagram', 'PlanarSubdivision', 'ScipyVoronoiSolver',
           'VCell', 'transform_cells',
           'RefinedCell', 'compute_bezier_points', 'inset_vertices', 'simplify_path',
           'generate_points',
           'TruchetPattern', 'VoronoiPattern', 'generate_truchet', 'generate_voronoi']
