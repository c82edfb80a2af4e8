"""
Voronoi site sampling.

Three generators seed the diagram: a rotated, optionally staggered
lattice, rejection-sampled random points with a minimum spacing, and the
Cairo lattice whose Voronoi diagram approximates the Cairo pentagonal
tiling. Every loop is capped by ``settings.sampling_loop_limit``; when
the cap is hit the points gathered so far are returned.
"""

import math
from typing import List, Optional

import structlog

from ..config import settings
from ..config.pattern_settings import (
    CairoPointsParams,
    GridPointsParams,
    PointsParams,
    PointsSource,
    RandomPointsParams,
)
from ..utils import random as prng_utils
from .alea_prng import AleaPRNG
from .vector import Vector

logger = structlog.get_logger()


def _inside_border(x: float, y: float, width: float, height: float, border: float) -> bool:
    return border <= x < width - border and border <= y < height - border


def _loop_limit(loop_limit: Optional[int]) -> int:
    return settings.sampling_loop_limit if loop_limit is None else loop_limit


def grid_points(width: float, height: float, params: GridPointsParams,
                prng: Optional[AleaPRNG] = None, loop_limit: Optional[int] = None) -> List[Vector]:
    """
    Generate lattice sites.

    The lattice is laid out over a square larger than the canvas so that
    it still covers the canvas after rotation by ``params.angle`` degrees.

    Args:
        width: Canvas width
        height: Canvas height
        params: Lattice settings
        prng: Random source for jitter
        loop_limit: Iteration cap (defaults to the configured limit)

    Returns:
        Sites inside the border
    """
    prng = prng_utils.resolve_prng(prng)
    limit = _loop_limit(loop_limit)
    x_spacing = params.x_spacing
    y_spacing = params.y_spacing
    if x_spacing <= 0 or y_spacing <= 0:
        logger.warning("Non-positive grid spacing", x_spacing=x_spacing, y_spacing=y_spacing)
        return []

    max_dimension = max(width, height)
    angle = -math.radians(params.angle)
    cos = math.cos(angle)
    sin = math.sin(angle)

    nx = math.floor(max_dimension / x_spacing)
    ny = math.floor(max_dimension / y_spacing)
    x_start = x_spacing - nx * x_spacing
    x = x_start
    y = y_spacing - ny * y_spacing
    is_even = nx % 2 == 0

    points = []
    n = 0

    while y < height + max_dimension:
        n += 1
        if n > limit:
            logger.warning("Too many loops; aborting", sampler="grid", points=len(points))
            break

        xj = x - x_spacing + prng.jitter(params.jitter)
        yj = y - y_spacing + prng.jitter(params.jitter)
        xx = xj * cos - yj * sin + x_spacing
        yy = yj * cos + xj * sin + y_spacing

        if _inside_border(xx, yy, width, height, params.border):
            points.append(Vector(xx, yy))

        x += x_spacing
        if x >= width + max_dimension:
            y += y_spacing
            is_even = not is_even
            x = x_start
            if params.is_staggered and not is_even:
                x += 0.5 * x_spacing

    return points


def random_points(width: float, height: float, params: RandomPointsParams,
                  prng: Optional[AleaPRNG] = None, loop_limit: Optional[int] = None) -> List[Vector]:
    """
    Rejection-sample sites at least ``params.min_spacing`` apart.

    Returns fewer than ``params.num_points`` sites when the loop cap is
    reached first.
    """
    prng = prng_utils.resolve_prng(prng)
    limit = _loop_limit(loop_limit)
    border = params.border
    r_squared = params.min_spacing * params.min_spacing

    points: List[Vector] = []
    n = 0

    while len(points) < params.num_points:
        n += 1
        if n > limit:
            logger.warning("Too many loops; aborting", sampler="random", points=len(points),
                           wanted=params.num_points)
            break

        candidate = Vector(
            prng.uniform(border, width - border),
            prng.uniform(border, height - border),
        )
        if not any(p.distance_squared_to(candidate) < r_squared for p in points):
            points.append(candidate)

    return points


def cairo_points(width: float, height: float, params: CairoPointsParams,
                 prng: Optional[AleaPRNG] = None, loop_limit: Optional[int] = None) -> List[Vector]:
    """
    Generate sites whose Voronoi diagram is a Cairo pentagonal tiling.

    Sites alternate between a ``spacing * sqrt(3) / 2`` diagonal step and
    a ``spacing`` horizontal step along each row; consecutive rows are
    offset alternately.
    """
    prng = prng_utils.resolve_prng(prng)
    limit = _loop_limit(loop_limit)
    spacing = params.spacing
    if spacing <= 0:
        logger.warning("Non-positive cairo spacing", spacing=spacing)
        return []

    max_dimension = max(width, height)
    angle = -math.radians(params.angle)
    cos = math.cos(angle)
    sin = math.sin(angle)

    d1 = spacing * math.sqrt(3) / 2
    d2 = spacing + d1
    k = math.floor((max_dimension + d2) / d2)
    x0 = y0 = -k * d2
    x, y = x0, y0
    col_alt = False
    row_alt = False

    points = []
    n = 0

    while y < height + max_dimension:
        n += 1
        if n > limit:
            logger.warning("Too many loops; aborting", sampler="cairo", points=len(points))
            break

        xj = x + prng.jitter(params.jitter)
        yj = y + prng.jitter(params.jitter)
        xx = xj * cos - yj * sin
        yy = yj * cos + xj * sin

        if _inside_border(xx, yy, width, height, params.border):
            points.append(Vector(xx, yy))

        if x >= width + max_dimension:
            if row_alt:
                x0 -= 0.5 * spacing
                y0 += d1
            else:
                y0 += spacing
            col_alt = False
            x, y = x0, y0
            row_alt = not row_alt
        else:
            x += spacing if col_alt else d1
            y += 0 if col_alt else 0.5 * spacing
            col_alt = not col_alt

    return points


def generate_points(width: float, height: float, params: PointsParams,
                    prng: Optional[AleaPRNG] = None, loop_limit: Optional[int] = None) -> List[Vector]:
    """Sites from the selected source."""
    if params.source == PointsSource.CAIRO:
        return cairo_points(width, height, params.cairo, prng, loop_limit)
    if params.source == PointsSource.GRID:
        return grid_points(width, height, params.grid, prng, loop_limit)
    if params.source == PointsSource.RANDOM:
        return random_points(width, height, params.random, prng, loop_limit)

    logger.error("Invalid points source", source=params.source)
    return []
