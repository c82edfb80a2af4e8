"""Tests for the scipy-backed planar subdivision."""

import pytest
from py_mosaic.core.alea_prng import AleaPRNG
from py_mosaic.core.vector import Vector
from py_mosaic.core.voronoi_cells import order_cell_vertices, signed_area
from py_mosaic.core.voronoi_diagram import (
    BoundingBox,
    DiagramEdge,
    ScipyVoronoiSolver,
    Site,
    finite_edges,
    is_point,
)

BOUNDS = BoundingBox(left=0, right=100, top=0, bottom=100)


@pytest.fixture
def random_sites():
    prng = AleaPRNG("diagram")
    return [Vector(prng.uniform(5, 95), prng.uniform(5, 95)) for _ in range(25)]


class TestScipyVoronoiSolver:
    """Test diagram computation and clipping."""

    def test_single_site_fills_bounds(self):
        diagram = ScipyVoronoiSolver().compute([Vector(30, 60)], BOUNDS)

        assert len(diagram.cells) == 1
        vertices = order_cell_vertices(diagram.cells[0])
        assert len(vertices) == 4
        assert abs(signed_area(vertices)) == pytest.approx(100 * 100)

    def test_cells_tile_the_bounds(self, random_sites):
        """Test that clipped cells cover the bounding box exactly."""
        diagram = ScipyVoronoiSolver().compute(random_sites, BOUNDS)

        assert len(diagram.cells) == len(random_sites)
        total = sum(abs(signed_area(order_cell_vertices(c))) for c in diagram.cells)
        assert total == pytest.approx(100 * 100)

    def test_vertices_stay_in_bounds(self, random_sites):
        diagram = ScipyVoronoiSolver().compute(random_sites, BOUNDS)
        for v in diagram.vertices:
            assert 0 <= v.x <= 100
            assert 0 <= v.y <= 100

    def test_cell_sites_match_input_order(self, random_sites):
        diagram = ScipyVoronoiSolver().compute(random_sites, BOUNDS)
        for i, (cell, site) in enumerate(zip(diagram.cells, random_sites)):
            assert (cell.site.x, cell.site.y) == (site.x, site.y)
            assert cell.site.voronoi_id == i
            assert all(h.site is cell.site for h in cell.halfedges)

    def test_border_edges_have_no_right_site(self, random_sites):
        diagram = ScipyVoronoiSolver().compute(random_sites, BOUNDS)
        border = [e for e in diagram.edges if e.right_site is None]
        shared = [e for e in diagram.edges if e.right_site is not None]

        assert border and shared
        for edge in border:
            on_x = any(edge.va.x == pytest.approx(b) == edge.vb.x for b in (0, 100))
            on_y = any(edge.va.y == pytest.approx(b) == edge.vb.y for b in (0, 100))
            assert on_x or on_y

    def test_halfedges_reference_each_edge(self, random_sites):
        """Test that shared edges belong to two cells and border edges to one."""
        diagram = ScipyVoronoiSolver().compute(random_sites, BOUNDS)
        owners = {}
        for cell in diagram.cells:
            for halfedge in cell.halfedges:
                owners.setdefault(id(halfedge.edge), []).append(halfedge.site)

        assert len(owners) == len(diagram.edges)
        for edge in diagram.edges:
            expected = [edge.left_site] if edge.right_site is None else [edge.left_site, edge.right_site]
            assert sorted(s.voronoi_id for s in owners[id(edge)]) == sorted(s.voronoi_id for s in expected)

    def test_invalid_sites_are_dropped(self):
        sites = [Vector(10, 10), Vector(10, 10), Vector(150, 50), Vector(0, 50), Vector(70, 80)]
        diagram = ScipyVoronoiSolver().compute(sites, BOUNDS)
        assert [(c.site.x, c.site.y) for c in diagram.cells] == [(10, 10), (70, 80)]

    def test_no_sites(self):
        diagram = ScipyVoronoiSolver().compute([], BOUNDS)
        assert diagram.cells == []
        assert diagram.edges == []


class TestEdgeHelpers:
    """Test finite-endpoint helpers."""

    def test_is_point(self):
        assert is_point(Vector(1, 2))
        assert not is_point(None)
        assert not is_point(Vector(float("nan"), 2))

    def test_finite_edges_skips_unbounded(self):
        site = Site(1, 1, 0)
        bounded = DiagramEdge(site, None, Vector(0, 0), Vector(0, 5))
        unbounded = DiagramEdge(site, None, Vector(0, 0), None)
        assert finite_edges([bounded, unbounded]) == [bounded]
