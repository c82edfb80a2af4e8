"""
Planar subdivision (Voronoi diagram) interface and scipy-backed solver.

The geometry core only needs ``compute(sites, bounds) -> Diagram``. Any
object with that method can be injected; ``ScipyVoronoiSolver`` wraps
``scipy.spatial.Voronoi`` and clips cells to the bounds by mirroring the
sites across the four bounding edges.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

import numpy as np
import structlog
from scipy.spatial import QhullError, Voronoi

from .vector import PointLike, Vector

logger = structlog.get_logger()


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular bound with +y pointing down."""

    left: float
    right: float
    top: float
    bottom: float

    def contains(self, p: PointLike) -> bool:
        """Strictly inside the bound."""
        return self.left < p.x < self.right and self.top < p.y < self.bottom


@dataclass(frozen=True)
class Site:
    """Diagram seed point."""

    x: float
    y: float
    voronoi_id: int


@dataclass
class DiagramEdge:
    """
    Edge shared by two cells.

    ``right_site`` is None for edges on the bounding box. Endpoints are
    None (or carry NaN coordinates) when the edge is unbounded.
    """

    left_site: Site
    right_site: Optional[Site]
    va: Optional[Vector]
    vb: Optional[Vector]


@dataclass
class HalfEdge:
    """One side of a DiagramEdge, owned by the cell of ``site``."""

    site: Site
    edge: DiagramEdge


@dataclass
class DiagramCell:
    site: Site
    halfedges: List[HalfEdge] = field(default_factory=list)


@dataclass
class Diagram:
    cells: List[DiagramCell] = field(default_factory=list)
    edges: List[DiagramEdge] = field(default_factory=list)
    vertices: List[Vector] = field(default_factory=list)


class PlanarSubdivision(Protocol):
    def compute(self, sites: Sequence[PointLike], bounds: BoundingBox) -> Diagram:
        ...


def is_point(p: Optional[PointLike]) -> bool:
    """True for a finite endpoint."""
    if p is None or p.x is None or p.y is None:
        return False
    return math.isfinite(p.x) and math.isfinite(p.y)


def finite_edges(edges: Sequence[DiagramEdge]) -> List[DiagramEdge]:
    """Edges with both endpoints defined; the others are logged and skipped."""
    kept = []
    for edge in edges:
        if is_point(edge.va) and is_point(edge.vb):
            kept.append(edge)
        else:
            logger.debug("Edge not defined", left_site=edge.left_site.voronoi_id)
    return kept


def mirror_sites(points: np.ndarray, bounds: BoundingBox) -> np.ndarray:
    """Reflections of ``points`` across each of the four bounding edges."""
    x = points[:, 0]
    y = points[:, 1]
    return np.vstack([
        np.column_stack([2 * bounds.left - x, y]),
        np.column_stack([2 * bounds.right - x, y]),
        np.column_stack([x, 2 * bounds.top - y]),
        np.column_stack([x, 2 * bounds.bottom - y]),
    ])


class ScipyVoronoiSolver:
    """PlanarSubdivision backed by ``scipy.spatial.Voronoi``."""

    def compute(self, sites: Sequence[PointLike], bounds: BoundingBox) -> Diagram:
        """
        Compute the bounded Voronoi diagram of ``sites``.

        Sites on or outside the bound, and repeated sites, are dropped.

        Args:
            sites: Seed points
            bounds: Clipping rectangle

        Returns:
            Diagram with one cell per kept site, in input order
        """
        kept = self._filter_sites(sites, bounds)
        if not kept:
            return Diagram()

        n_sites = len(kept)
        points = np.array([[s.x, s.y] for s in kept], dtype=float)
        all_points = np.vstack([points, mirror_sites(points, bounds)])

        try:
            vor = Voronoi(all_points)
        except QhullError as exc:
            logger.error("Voronoi computation failed", sites=n_sites, error=str(exc))
            return Diagram()

        # Vertices land on the bounds up to floating point noise
        coords = vor.vertices.copy()
        if len(coords):
            coords[:, 0] = np.clip(coords[:, 0], bounds.left, bounds.right)
            coords[:, 1] = np.clip(coords[:, 1], bounds.top, bounds.bottom)

        cells = [DiagramCell(site=s) for s in kept]
        edges: List[DiagramEdge] = []
        used_vertices: Dict[int, Vector] = {}

        def vertex(index: int) -> Optional[Vector]:
            if index < 0:
                return None
            if index not in used_vertices:
                used_vertices[index] = Vector(float(coords[index, 0]), float(coords[index, 1]))
            return used_vertices[index]

        for (p, q), (a, b) in zip(vor.ridge_points, vor.ridge_vertices):
            if p >= n_sites and q >= n_sites:
                continue
            if p >= n_sites:
                p, q = q, p

            left = kept[p]
            right = kept[q] if q < n_sites else None
            edge = DiagramEdge(left_site=left, right_site=right, va=vertex(a), vb=vertex(b))
            edges.append(edge)

            cells[p].halfedges.append(HalfEdge(site=left, edge=edge))
            if right is not None:
                cells[q].halfedges.append(HalfEdge(site=right, edge=edge))

        logger.debug("Voronoi diagram calculated", sites=n_sites, edges=len(edges),
                     vertices=len(used_vertices))
        return Diagram(cells=cells, edges=edges, vertices=list(used_vertices.values()))

    @staticmethod
    def _filter_sites(sites: Sequence[PointLike], bounds: BoundingBox) -> List[Site]:
        kept: List[Site] = []
        seen = set()
        for p in sites:
            key = (float(p.x), float(p.y))
            if not bounds.contains(p):
                logger.warning("Site outside bounds dropped", x=p.x, y=p.y)
                continue
            if key in seen:
                logger.warning("Duplicate site dropped", x=p.x, y=p.y)
                continue
            seen.add(key)
            kept.append(Site(x=key[0], y=key[1], voronoi_id=len(kept)))
        return kept
