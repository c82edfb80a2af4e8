"""
SVG export of Truchet and Voronoi patterns.

Only formats descriptors produced by the geometry core; no geometry is
computed here.
"""

from typing import Iterable, List, Sequence

import svgwrite

from ..config.pattern_settings import TilePattern, TruchetTileParams, VoronoiParams
from ..core.paths import ArcWedge, BezierParams, CircularArc, Polyline
from ..core.pipeline import TruchetPattern, VoronoiPattern
from ..core.vector import PointLike

SEED_RADIUS = 8
CONTROL_POINT_RADIUS = 4


def fmt(value: float) -> str:
    """Compact decimal for path data."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _xy(p: PointLike) -> str:
    return f"{fmt(p.x)} {fmt(p.y)}"


def polyline_path_data(vertices: Sequence[PointLike], closed: bool = True) -> str:
    if not vertices:
        return ""
    d = f"M {_xy(vertices[0])}"
    for v in vertices[1:]:
        d += f" L {_xy(v)}"
    if closed and len(vertices) > 1:
        d += " Z"
    return d


def arc_command(arc: CircularArc) -> str:
    large = "1" if arc.large_arc else "0"
    sweep = "1" if arc.sweep else "0"
    return f"A {fmt(arc.radius)} {fmt(arc.radius)} 0 {large} {sweep} {_xy(arc.end)}"


def arc_path_data(arc: CircularArc) -> str:
    return f"M {_xy(arc.start)} {arc_command(arc)}"


def wedge_path_data(wedge: ArcWedge) -> str:
    return (f"M {_xy(wedge.inner.start)} {arc_command(wedge.inner)}"
            f" L {_xy(wedge.outer.start)} {arc_command(wedge.outer)} Z")


def bezier_path_data(bezier_params: Sequence[BezierParams], closed: bool = True) -> str:
    if not bezier_params:
        return ""
    d = f"M {_xy(bezier_params[0].start)}"
    for b in bezier_params:
        d += f" C {_xy(b.c1)} {_xy(b.c2)} {_xy(b.end)}"
    if closed:
        d += " Z"
    return d


def shape_path_data(shape) -> str:
    if isinstance(shape, Polyline):
        return polyline_path_data(shape.vertices, shape.closed)
    if isinstance(shape, CircularArc):
        return arc_path_data(shape)
    if isinstance(shape, ArcWedge):
        return wedge_path_data(shape)
    raise TypeError(f"Unsupported shape: {type(shape).__name__}")


def veins_path_data(pattern: VoronoiPattern) -> str:
    """Canvas rectangle with every smooth cell cut out as a hole."""
    w = fmt(pattern.width)
    h = fmt(pattern.height)
    d = f"M 0 0 L {w} 0 L {w} {h} L 0 {h} Z"
    for cell in pattern.cells:
        if cell.bezier:
            d += " " + bezier_path_data(cell.bezier, closed=False)
    return d


def create_drawing(width: float, height: float) -> svgwrite.Drawing:
    drawing = svgwrite.Drawing(size=(width, height), profile="full", debug=False)
    drawing["viewBox"] = f"0 0 {fmt(width)} {fmt(height)}"
    return drawing


def render_truchet(pattern: TruchetPattern, params: TruchetTileParams) -> svgwrite.Drawing:
    """
    SVG document for a Truchet pattern.

    Triangle and solid tiles are filled; the other styles are stroked, with
    concentric Smith background wedges filled white.
    """
    grid = pattern.grid
    drawing = create_drawing(grid.width, grid.height)

    if params.pattern in (TilePattern.TRIANGLE, TilePattern.SOLID):
        # stroke prevents gaps at seams
        tiles = drawing.g(stroke="black", stroke_width=1, fill="black")
    elif params.pattern == TilePattern.CONCENTRIC_SMITH:
        tiles = drawing.g(stroke="black", stroke_width=params.concentric_smith.stroke_width, fill="none")
    else:
        tiles = drawing.g(stroke="black", stroke_width=2, fill="none")
    drawing.add(tiles)

    for tile in pattern.tiles:
        for shape in tile.shapes:
            if isinstance(shape, ArcWedge):
                tiles.add(drawing.path(d=wedge_path_data(shape), stroke="none", fill="white"))
            else:
                tiles.add(drawing.path(d=shape_path_data(shape)))

    return drawing


def _control_point_circles(drawing: svgwrite.Drawing, bezier_params: Iterable[BezierParams]) -> List:
    circles = []
    for b in bezier_params:
        circles.append(drawing.circle(center=(b.start.x, b.start.y), r=SEED_RADIUS, fill="black"))
        circles.append(drawing.circle(center=(b.c1.x, b.c1.y), r=CONTROL_POINT_RADIUS, fill="darkred"))
        circles.append(drawing.circle(center=(b.c2.x, b.c2.y), r=CONTROL_POINT_RADIUS, fill="darkred"))
    return circles


def render_voronoi(pattern: VoronoiPattern, params: VoronoiParams) -> svgwrite.Drawing:
    """SVG document with the layers enabled by the ``show_*`` toggles."""
    drawing = create_drawing(pattern.width, pattern.height)

    if params.show_veins:
        drawing.add(drawing.path(d=veins_path_data(pattern), stroke="none", fill="black"))

    if params.show_hard_cells:
        hard_cells = drawing.add(drawing.g(stroke="none", fill="chartreuse"))
        for cell in pattern.cells:
            if cell.simplified:
                hard_cells.add(drawing.path(d=polyline_path_data(cell.simplified)))

    if params.show_smooth_cells:
        smooth_cells = drawing.add(drawing.g(stroke="none", fill="palevioletred"))
        for cell in pattern.cells:
            if cell.bezier:
                smooth_cells.add(drawing.path(d=bezier_path_data(cell.bezier)))

    if params.show_control_points:
        control_points = drawing.add(drawing.g())
        for cell in pattern.cells:
            if cell.bezier:
                for circle in _control_point_circles(drawing, cell.bezier):
                    control_points.add(circle)

    if params.show_edges:
        edges = drawing.add(drawing.g(stroke="black"))
        for edge in pattern.edges:
            edges.add(drawing.line(start=(edge.va.x, edge.va.y), end=(edge.vb.x, edge.vb.y)))

    if params.show_seeds:
        seeds = drawing.add(drawing.g(fill="blue"))
        for site in pattern.sites:
            seeds.add(drawing.circle(center=(site.x, site.y), r=SEED_RADIUS))

    return drawing
