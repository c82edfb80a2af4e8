"""Tests for Voronoi site sampling."""

import math

import pytest
from py_mosaic.config.pattern_settings import (
    CairoPointsParams,
    GridPointsParams,
    PointsParams,
    PointsSource,
    RandomPointsParams,
)
from py_mosaic.core.alea_prng import AleaPRNG
from py_mosaic.core.point_sampling import cairo_points, generate_points, grid_points, random_points
from py_mosaic.utils.random import set_random_seed


def coords(points):
    return [(p.x, p.y) for p in points]


def assert_inside(points, width, height, border):
    for p in points:
        assert border <= p.x < width - border
        assert border <= p.y < height - border


class TestGridPoints:
    """Test rectangular lattice sampling."""

    def test_plain_lattice(self):
        params = GridPointsParams(border=1, is_staggered=False, x_spacing=50, y_spacing=50)
        points = grid_points(200, 100, params, prng=AleaPRNG("grid"))
        assert coords(points) == [(50, 50), (100, 50), (150, 50)]

    def test_staggered_rows(self):
        params = GridPointsParams(border=1, is_staggered=True, x_spacing=50, y_spacing=50)
        points = grid_points(200, 150, params, prng=AleaPRNG("grid"))
        assert coords(points) == [
            (50, 50), (100, 50), (150, 50),
            (25, 100), (75, 100), (125, 100), (175, 100),
        ]

    def test_rotated_lattice_keeps_spacing(self):
        params = GridPointsParams(angle=30, border=10, is_staggered=False)
        points = grid_points(400, 300, params, prng=AleaPRNG("grid"))

        assert len(points) > 10
        assert_inside(points, 400, 300, 10)
        nearest = min(
            math.hypot(a.x - b.x, a.y - b.y)
            for i, a in enumerate(points) for b in points[i + 1:]
        )
        assert nearest == pytest.approx(50)

    def test_jitter_is_bounded(self):
        params = GridPointsParams(border=0, is_staggered=False, jitter=5)
        plain = grid_points(300, 300, GridPointsParams(border=0, is_staggered=False), prng=AleaPRNG("grid"))
        moved = grid_points(300, 300, params, prng=AleaPRNG("grid"))

        assert moved != plain
        for p in moved:
            assert abs(p.x - 50 * round(p.x / 50)) <= 5 + 1e-9
            assert abs(p.y - 50 * round(p.y / 50)) <= 5 + 1e-9

    def test_non_positive_spacing(self):
        assert grid_points(100, 100, GridPointsParams(x_spacing=0)) == []

    def test_loop_limit(self):
        params = GridPointsParams(border=0, is_staggered=False)
        points = grid_points(1000, 1000, params, prng=AleaPRNG("grid"), loop_limit=10)
        assert len(points) <= 10


class TestRandomPoints:
    """Test rejection sampling."""

    def test_spacing_and_border(self):
        params = RandomPointsParams(border=20, min_spacing=40, num_points=50)
        points = random_points(800, 600, params, prng=AleaPRNG("random"))

        assert len(points) == 50
        assert_inside(points, 800, 600, 20)
        for i, a in enumerate(points):
            for b in points[i + 1:]:
                assert a.distance_to(b) >= 40

    def test_deterministic_for_seed(self):
        params = RandomPointsParams(num_points=20)
        a = random_points(800, 600, params, prng=AleaPRNG("same"))
        b = random_points(800, 600, params, prng=AleaPRNG("same"))
        assert a == b

    def test_module_prng_is_reseedable(self):
        params = RandomPointsParams(num_points=10)
        set_random_seed("module")
        a = random_points(800, 600, params)
        set_random_seed("module")
        b = random_points(800, 600, params)
        assert a == b

    def test_overfull_canvas_gives_up(self):
        params = RandomPointsParams(border=0, min_spacing=60, num_points=100)
        points = random_points(100, 100, params, prng=AleaPRNG("full"), loop_limit=2000)
        assert 0 < len(points) < 100


class TestCairoPoints:
    """Test Cairo lattice sampling."""

    def test_inside_border(self):
        params = CairoPointsParams(border=20, spacing=80)
        points = cairo_points(800, 600, params, prng=AleaPRNG("cairo"))

        assert len(points) > 20
        assert_inside(points, 800, 600, 20)

    def test_rotation_keeps_points_inside(self):
        params = CairoPointsParams(angle=17, border=5, spacing=60, jitter=3)
        points = cairo_points(500, 400, params, prng=AleaPRNG("cairo"))

        assert points
        assert_inside(points, 500, 400, 5)

    def test_deterministic_for_seed(self):
        a = cairo_points(800, 600, CairoPointsParams(jitter=4), prng=AleaPRNG("cairo"))
        b = cairo_points(800, 600, CairoPointsParams(jitter=4), prng=AleaPRNG("cairo"))
        assert a == b

    def test_non_positive_spacing(self):
        assert cairo_points(100, 100, CairoPointsParams(spacing=-1)) == []


class TestGeneratePoints:
    @pytest.mark.parametrize("source,sampler,key", [
        (PointsSource.CAIRO, cairo_points, "cairo"),
        (PointsSource.GRID, grid_points, "grid"),
        (PointsSource.RANDOM, random_points, "random"),
    ])
    def test_dispatch(self, source, sampler, key):
        params = PointsParams(source=source, random=RandomPointsParams(num_points=25))
        expected = sampler(600, 400, getattr(params, key), prng=AleaPRNG("dispatch"))
        assert generate_points(600, 400, params, prng=AleaPRNG("dispatch")) == expected
