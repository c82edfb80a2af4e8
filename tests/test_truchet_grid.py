"""Tests for Truchet grid synthesis."""

import numpy as np
import pytest
from py_mosaic.config.pattern_settings import (
    CheckerboardParams,
    EacParams,
    EacSeed,
    GridPattern,
    TruchetGridParams,
)
from py_mosaic.core.alea_prng import AleaPRNG
from py_mosaic.core.cellular_automaton import run_automaton
from py_mosaic.core.truchet_grid import create_grid, grid_dimension


class TestGridDimensions:
    """Test row and column counts."""

    def test_default_grid_size(self):
        grid = create_grid(TruchetGridParams(), AleaPRNG("size"))
        assert grid.row_count == 7
        assert grid.col_count == 16
        assert len(grid.states) == 112

    def test_partial_cells_are_counted(self):
        assert grid_dimension(150, 100) == 2
        assert grid_dimension(100, 100) == 1

    @pytest.mark.parametrize("width,height,spacing", [
        (0, 100, 10),
        (100, 0, 10),
        (100, 100, 0),
    ])
    def test_zero_extent_gives_empty_grid(self, width, height, spacing):
        """Test that empty grids are returned instead of errors."""
        for pattern in GridPattern:
            params = TruchetGridParams(width=width, height=height, spacing=spacing, pattern=pattern)
            grid = create_grid(params)
            assert len(grid.states) == 0


class TestCheckerboard:
    """Test checkerboard periodicity."""

    def test_size_one_alternates(self):
        params = TruchetGridParams(width=90, height=70, spacing=10, pattern=GridPattern.CHECKERBOARD)
        rows = create_grid(params).rows()

        assert not rows[0, 0]
        assert np.all(rows[:, 1:] != rows[:, :-1])
        assert np.all(rows[1:, :] != rows[:-1, :])

    @pytest.mark.parametrize("size", [2, 3])
    def test_blocks(self, size):
        params = TruchetGridParams(width=120, height=120, spacing=10, pattern=GridPattern.CHECKERBOARD,
                                   checkerboard=CheckerboardParams(size=size))
        grid = create_grid(params)
        rows = grid.rows()

        for r in range(grid.row_count):
            for c in range(grid.col_count):
                block_r, block_c = r // size, c // size
                assert rows[r, c] == rows[block_r * size, block_c * size]
                assert rows[r, c] == ((block_r + block_c) % 2 == 1)

    def test_state_at_matches_row_major_layout(self):
        params = TruchetGridParams(width=50, height=30, spacing=10, pattern=GridPattern.CHECKERBOARD)
        grid = create_grid(params)
        assert grid.state_at(0, 1) is True
        assert grid.state_at(1, 1) is False
        assert grid.state_at(2, 4) == bool(grid.states[2 * 5 + 4])


class TestRandomAndEac:
    """Test the random and automaton patterns."""

    def test_random_is_reproducible(self):
        params = TruchetGridParams(width=100, height=100, spacing=10, pattern=GridPattern.RANDOM)
        a = create_grid(params, AleaPRNG("grid"))
        b = create_grid(params, AleaPRNG("grid"))

        np.testing.assert_array_equal(a.states, b.states)
        assert a.states.any() and not a.states.all()

    def test_eac_pattern_uses_automaton(self):
        eac = EacParams(rule=30, seed=EacSeed.FIRST)
        params = TruchetGridParams(width=100, height=50, spacing=10, pattern=GridPattern.EAC, eac=eac)
        grid = create_grid(params)
        np.testing.assert_array_equal(grid.states, run_automaton(eac, 5, 10))
