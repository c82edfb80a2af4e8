"""Path descriptors handed from the geometry core to the rendering layer."""

from dataclasses import dataclass
from typing import Tuple

from .vector import Vector


@dataclass(frozen=True)
class Polyline:
    """Straight segments through ``vertices``, optionally closed."""

    vertices: Tuple[Vector, ...]
    closed: bool = True


@dataclass(frozen=True)
class CircularArc:
    """Circular arc of ``radius`` from ``start`` to ``end`` (SVG arc flags)."""

    radius: float
    start: Vector
    end: Vector
    large_arc: bool = False
    sweep: bool = False


@dataclass(frozen=True)
class ArcWedge:
    """
    Closed region between two arcs.

    Drawn as ``inner``, a straight line to ``outer.start``, ``outer`` and a
    closing line back to ``inner.start``.
    """

    inner: CircularArc
    outer: CircularArc


@dataclass(frozen=True)
class BezierParams:
    """One cubic Bezier segment."""

    start: Vector
    c1: Vector
    c2: Vector
    end: Vector
