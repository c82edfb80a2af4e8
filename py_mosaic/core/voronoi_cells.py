"""
Conversion of diagram cells into ordered polygons.

A diagram cell is an unordered bag of half-edges. ``VCell`` holds the
same boundary as a counter-clockwise (on screen, +y down) vertex list
with one edge per consecutive vertex pair.
"""

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from .vector import EPSILON, Line, PointLike, Vector
from .voronoi_diagram import DiagramCell, is_point


@dataclass
class VCell:
    """Ordered polygon of one Voronoi site."""

    vertices: List[Vector] = field(default_factory=list)
    edges: List[Line] = field(default_factory=list)

    def is_renderable(self) -> bool:
        return len(self.vertices) >= 3


def add_vertex(vertices: List[Vector], vertex: PointLike) -> None:
    """Append ``vertex`` unless a point within EPSILON on both axes exists."""
    candidate = Vector.from_point(vertex)
    for v in vertices:
        if v.is_close(candidate, EPSILON):
            return
    vertices.append(candidate)


def order_cell_vertices(cell: DiagramCell) -> List[Vector]:
    """
    Finite, deduplicated cell vertices sorted counter-clockwise.

    Vertices are sorted by angle around the site, descending, which is
    counter-clockwise on a +y-down screen.
    """
    vertices: List[Vector] = []

    for halfedge in cell.halfedges:
        edge = halfedge.edge
        if is_point(edge.va):
            add_vertex(vertices, edge.va)
        if is_point(edge.vb):
            add_vertex(vertices, edge.vb)

    site = cell.site
    return sorted(vertices, key=lambda v: math.atan2(v.y - site.y, v.x - site.x), reverse=True)


def edges_from_ordered_vertices(vertices: Sequence[Vector]) -> List[Line]:
    """Edges between consecutive vertices, starting with last -> first."""
    if not vertices:
        return []
    edges = []
    prev = vertices[-1]
    for curr in vertices:
        edges.append(Line(prev, curr))
        prev = curr
    return edges


def build_vcell(cell: DiagramCell) -> VCell:
    """Ordered VCell for one diagram cell; empty when fewer than 3 vertices."""
    vertices = order_cell_vertices(cell)
    if len(vertices) < 3:
        return VCell()
    return VCell(vertices=vertices, edges=edges_from_ordered_vertices(vertices))


def transform_cells(cells: Sequence[DiagramCell]) -> List[VCell]:
    """One VCell per diagram cell, in diagram order."""
    return [build_vcell(cell) for cell in cells]


def signed_area(vertices: Sequence[PointLike]) -> float:
    """Shoelace signed area; negative for the counter-clockwise order above."""
    n = len(vertices)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += vertices[i].x * vertices[j].y - vertices[j].x * vertices[i].y
    return 0.5 * area
