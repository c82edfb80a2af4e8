"""
Voronoi cell boundary refinement.

Turns a hard-edged VCell into an organic blob in three stages:

1. Inset: move every edge inward by half the border width, marching along
   the edge until the offset point clears all other edges.
2. Simplify: merge clusters of inset points closer than a radius.
3. Smooth: one cubic Bezier per vertex, running between the midpoints of
   the two edges that meet there.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
import structlog

from .paths import BezierParams
from .vector import Line, Vector
from .voronoi_cells import VCell

logger = structlog.get_logger()

INSET_EPSILON = 0.1

# Probes in the first batch of a march; later batches double
_FIRST_BATCH = 32


@dataclass
class RefinedCell:
    """A cell with every refinement stage kept for rendering."""

    cell: VCell
    inset: List[Vector] = field(default_factory=list)
    simplified: List[Vector] = field(default_factory=list)
    bezier: Optional[List[BezierParams]] = None


def _segment_array(edges: Sequence[Line]) -> np.ndarray:
    return np.array([[[e.p1.x, e.p1.y], [e.p2.x, e.p2.y]] for e in edges], dtype=float)


def distances_to_segments(points: np.ndarray, segments: np.ndarray) -> np.ndarray:
    """
    Distance from each point to its closest segment.

    Args:
        points: ``(N, 2)`` array
        segments: ``(M, 2, 2)`` array of segment endpoints

    Returns:
        ``(N,)`` array of minimum distances
    """
    starts = segments[:, 0, :]
    deltas = segments[:, 1, :] - starts
    lengths_sq = np.einsum("ij,ij->i", deltas, deltas)

    rel = points[:, np.newaxis, :] - starts[np.newaxis, :, :]
    projections = np.einsum("nmk,mk->nm", rel, deltas)
    t = np.divide(projections, lengths_sq, out=np.zeros_like(projections), where=lengths_sq > 0)
    t = np.clip(t, 0.0, 1.0)

    closest = starts[np.newaxis, :, :] + t[:, :, np.newaxis] * deltas[np.newaxis, :, :]
    distances = np.linalg.norm(points[:, np.newaxis, :] - closest, axis=2)
    return distances.min(axis=1)


def distance_to_any_edge(point: Vector, edges: Sequence[Line]) -> float:
    """Distance from ``point`` to the nearest edge segment."""
    if not edges:
        return float("inf")
    return min(edge.distance_to_segment(point) for edge in edges)


def _march(origin: Vector, direction: Vector, length: float, step: float,
           normal: Vector, segments: np.ndarray, limit: float) -> Optional[Vector]:
    """First probe ``origin + k * step * direction + normal`` at least ``limit`` from every segment."""
    count = int(np.floor(length / step)) + 1
    base = np.array([origin.x + normal.x, origin.y + normal.y])
    heading = np.array([direction.x, direction.y]) * step

    first = 0
    batch = _FIRST_BATCH
    while first < count:
        ticks = np.arange(first, min(first + batch, count), dtype=float)
        probes = base + ticks[:, np.newaxis] * heading
        hits = np.flatnonzero(distances_to_segments(probes, segments) >= limit)
        if hits.size:
            x, y = probes[hits[0]]
            return Vector(float(x), float(y))
        first += batch
        batch *= 2

    return None


def _is_new(point: Vector, accepted: Sequence[Vector], tolerance: float) -> bool:
    return not any(point.is_close(t, tolerance) for t in accepted)


def inset_vertices(cell: VCell, border_width: float, step: float) -> List[Vector]:
    """
    Offset the cell boundary inward by ``border_width``.

    For each edge ``prev -> curr`` a probe is moved from ``prev`` toward
    ``curr`` in ``step`` increments and pushed inward along the edge normal;
    the first probe at least ``border_width - 0.1`` from every edge becomes
    the edge's start point. The same search from ``curr`` backward gives
    its end point. Edges with no qualifying probe contribute nothing.

    Args:
        cell: Ordered cell polygon
        border_width: Inset distance (half the border stroke width)
        step: Marching step along each edge

    Returns:
        Inset points, deduplicated within ``step + 0.1``
    """
    ticks: List[Vector] = []
    if not cell.is_renderable():
        return ticks
    if step <= 0:
        logger.warning("Non-positive inset step", step=step)
        return ticks

    segments = _segment_array(cell.edges)
    limit = border_width - INSET_EPSILON
    tolerance = step + INSET_EPSILON
    prev = cell.vertices[-1]

    for curr in cell.vertices:
        line = Line(prev, curr)
        length = line.length()
        if length == 0:
            prev = curr
            continue

        direction = line.parallel_vector().normalize()
        normal = line.normal_right().normalize() * border_width

        start = _march(prev, direction, length, step, normal, segments, limit)
        if start is not None:
            end = _march(curr, -direction, length, step, normal, segments, limit)

            if _is_new(start, ticks, tolerance):
                ticks.append(start)
            if end is not None and _is_new(end, ticks, tolerance):
                ticks.append(end)

        prev = curr

    return ticks


def simplify_path(vertices: Sequence[Vector], radius: float) -> List[Vector]:
    """
    Merge vertex clusters until no two vertices are within ``radius``.

    The first vertex found with close neighbours is replaced by the
    centroid of itself and those neighbours, the neighbours are removed
    and the scan restarts. Closeness is tested per axis.
    """
    path = list(vertices)
    modified = True

    while modified:
        modified = False

        for index, v in enumerate(path):
            neighbors = [i for i, other in enumerate(path) if i != index and other.is_close(v, radius)]
            if not neighbors:
                continue

            total = v
            for i in neighbors:
                total = total + path[i]
            path[index] = total * (1 / (len(neighbors) + 1))

            for i in reversed(neighbors):
                del path[i]

            modified = True
            break

    return path


def compute_bezier_points(vertices: Sequence[Vector], bezier_factor: float) -> Optional[List[BezierParams]]:
    """
    Closed corner-cutting Bezier curve around ``vertices``.

    Segment ``i`` runs from the midpoint of the edge entering vertex
    ``i - 1`` to the midpoint of the edge leaving it, with both control
    points pulled toward that vertex by ``edge half-length * bezier_factor``.

    Returns:
        One segment per vertex, or None for fewer than 3 vertices
    """
    if len(vertices) < 3:
        return None

    bezier_params = []
    prev = vertices[-1]
    prev_mid = Line(vertices[-2], prev).midpoint()

    for v in vertices:
        mid = Line(prev, v).midpoint()

        l1 = Line(prev_mid, prev)
        c1 = prev_mid + l1.parallel_vector().normalize() * (l1.length() * bezier_factor)

        l2 = Line(mid, prev)
        c2 = mid + l2.parallel_vector().normalize() * (l2.length() * bezier_factor)

        bezier_params.append(BezierParams(start=prev_mid, c1=c1, c2=c2, end=mid))
        prev = v
        prev_mid = mid

    return bezier_params


def refine_cell(cell: VCell, border_width: float, step: float, simplify_radius: float,
                bezier_factor: float) -> RefinedCell:
    """Run inset, simplification and smoothing on one cell."""
    inset = inset_vertices(cell, border_width, step)
    simplified = simplify_path(inset, simplify_radius)
    return RefinedCell(
        cell=cell,
        inset=inset,
        simplified=simplified,
        bezier=compute_bezier_points(simplified, bezier_factor),
    )
