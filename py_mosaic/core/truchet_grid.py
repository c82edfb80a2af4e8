"""
Truchet grid state synthesis.

A grid holds one boolean per cell, row-major. The state only selects which
of a tile's two mirrored motifs is drawn; the motif itself comes from
``truchet_tiles``.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import structlog

from ..config.pattern_settings import GridPattern, TruchetGridParams
from ..utils import random as prng_utils
from .alea_prng import AleaPRNG
from .cellular_automaton import run_automaton

logger = structlog.get_logger()


@dataclass
class TruchetGrid:
    """Per-cell boolean states for a grid of square tiles."""

    width: float
    height: float
    spacing: float
    pattern: GridPattern
    states: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=bool))

    @property
    def row_count(self) -> int:
        return grid_dimension(self.height, self.spacing)

    @property
    def col_count(self) -> int:
        return grid_dimension(self.width, self.spacing)

    def state_at(self, row: int, col: int) -> bool:
        return bool(self.states[row * self.col_count + col])

    def rows(self) -> np.ndarray:
        """States as a ``(row_count, col_count)`` array."""
        return self.states.reshape(self.row_count, self.col_count)


def grid_dimension(extent: float, spacing: float) -> int:
    """Number of cells needed to cover ``extent``; 0 for empty grids."""
    if extent <= 0 or spacing <= 0:
        return 0
    return math.ceil(extent / spacing)


def checkerboard_states(row_count: int, col_count: int, size: int) -> np.ndarray:
    """
    Checkerboard with ``size`` x ``size`` blocks.

    The first block of row 0 is clear; state flips every ``size`` columns
    and each row's starting state flips every ``size`` rows.
    """
    size = max(int(size), 1)
    rows = np.arange(row_count)[:, np.newaxis] // size
    cols = np.arange(col_count)[np.newaxis, :] // size
    return ((rows + cols) % 2 == 1).reshape(-1)


def random_states(count: int, prng: AleaPRNG) -> np.ndarray:
    """Each cell independently set with probability 0.5."""
    return np.array([prng.random() > 0.5 for _ in range(count)], dtype=bool)


def create_grid(params: TruchetGridParams, prng: Optional[AleaPRNG] = None) -> TruchetGrid:
    """
    Synthesize a Truchet grid from its parameters.

    A zero width, height or spacing produces an empty state array.

    Args:
        params: Grid settings
        prng: Random source for the random pattern and random EAC seed

    Returns:
        A freshly built TruchetGrid
    """
    grid = TruchetGrid(
        width=params.width,
        height=params.height,
        spacing=params.spacing,
        pattern=params.pattern,
    )

    row_count = grid.row_count
    col_count = grid.col_count
    if row_count == 0 or col_count == 0:
        logger.debug("Empty grid", width=params.width, height=params.height, spacing=params.spacing)
        return grid

    if params.pattern == GridPattern.CHECKERBOARD:
        grid.states = checkerboard_states(row_count, col_count, params.checkerboard.size)
    elif params.pattern == GridPattern.EAC:
        grid.states = run_automaton(params.eac, row_count, col_count, prng)
    elif params.pattern == GridPattern.RANDOM:
        grid.states = random_states(row_count * col_count, prng_utils.resolve_prng(prng))
    else:
        logger.error("Invalid grid pattern", pattern=params.pattern)

    logger.debug("Grid created", pattern=params.pattern, rows=row_count, cols=col_count)
    return grid
