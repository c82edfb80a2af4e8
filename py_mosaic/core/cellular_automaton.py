"""
Elementary cellular automaton evaluator for Truchet grids.

Each grid row is one generation of a 1-D binary automaton. The working
row is wider than the grid when edges are "infinite" so growth from the
padding never reaches the recorded window within the grid's row count.
"""

from typing import List, Optional

import numpy as np
import structlog

from ..config.pattern_settings import EacEdgeBehavior, EacParams, EacSeed
from ..utils import random as prng_utils
from .alea_prng import AleaPRNG

logger = structlog.get_logger()

RULE_MIN = 0
RULE_MAX = 255


def clamp_rule(rule: int) -> int:
    """Clamp a rule number to 0-255, logging out-of-range values."""
    if rule < RULE_MIN:
        logger.warning("Invalid rule number", rule=rule, clamped_to=RULE_MIN)
        return RULE_MIN
    if rule > RULE_MAX:
        logger.warning("Invalid rule number", rule=rule, clamped_to=RULE_MAX)
        return RULE_MAX
    return int(rule)


def build_rule_table(rule: int) -> List[bool]:
    """
    Build the 8-entry lookup table for a rule number.

    The rule's bits are read LSB-first and then reversed, so table index 0
    holds the rule's most significant bit. Combined with the inverted
    neighborhood code used by ``next_generation`` this reproduces the
    standard Wolfram numbering.
    """
    rule = clamp_rule(rule)
    table = []
    for _ in range(8):
        table.append((rule & 1) > 0)
        rule >>= 1
    table.reverse()
    return table


def neighborhood_codes(row: np.ndarray) -> np.ndarray:
    """
    Lookup index of every cell in ``row``.

    A neighbor contributes its bit when it is OFF:
    ``4 * (left OFF) + 2 * (mid OFF) + (right OFF)``. Neighbors are read
    circularly over the working row.
    """
    off = ~row
    left = np.roll(off, 1)
    right = np.roll(off, -1)
    return 4 * left.astype(np.int8) + 2 * off.astype(np.int8) + right.astype(np.int8)


def next_generation(row: np.ndarray, table: np.ndarray) -> np.ndarray:
    return table[neighborhood_codes(row)]


def seed_row(seed: EacSeed, width: int, window_offset: int, size: int,
             prng: Optional[AleaPRNG] = None) -> np.ndarray:
    """
    Build generation 0 of the working row.

    Args:
        seed: Seed variant
        width: Working row width
        window_offset: Index of the first recorded column in the working row
        size: Run length for ``alternating``, block width for ``center``
        prng: Random source for the ``random`` seed

    Returns:
        Boolean array of length ``width``
    """
    columns = np.arange(width)

    if seed == EacSeed.ALL_CLEAR:
        return np.zeros(width, dtype=bool)
    if seed == EacSeed.ALL_SET:
        return np.ones(width, dtype=bool)
    if seed == EacSeed.ALTERNATING:
        return (columns // max(size, 1)) % 2 == 1
    if seed == EacSeed.CENTER:
        start = int(np.floor(0.5 * width - size))
        return (columns >= start) & (columns < start + size)
    if seed == EacSeed.FIRST:
        return columns == window_offset + 1
    if seed == EacSeed.RANDOM:
        prng = prng_utils.resolve_prng(prng)
        return np.array([prng.random() > 0.5 for _ in range(width)], dtype=bool)

    logger.error("Invalid EAC seed", seed=seed)
    return np.zeros(width, dtype=bool)


def run_automaton(params: EacParams, row_count: int, col_count: int,
                  prng: Optional[AleaPRNG] = None) -> np.ndarray:
    """
    Evaluate the automaton into a row-major state array.

    Generations ``offset .. offset + row_count - 1`` are recorded, one per
    grid row; earlier generations are computed and discarded.

    Args:
        params: Automaton settings
        row_count: Number of grid rows
        col_count: Number of grid columns
        prng: Random source for the ``random`` seed

    Returns:
        Boolean array of length ``row_count * col_count``
    """
    if row_count <= 0 or col_count <= 0:
        return np.zeros(0, dtype=bool)

    offset = params.offset
    if offset < 0:
        logger.warning("Negative EAC offset", offset=offset, clamped_to=0)
        offset = 0

    if params.edge_behavior == EacEdgeBehavior.WRAP:
        width = col_count
        window_offset = 0
    else:
        width = col_count + 2 * row_count + 2
        window_offset = row_count + 1

    table = np.array(build_rule_table(params.rule), dtype=bool)
    row = seed_row(params.seed, width, window_offset, params.size, prng)
    states = np.zeros((row_count, col_count), dtype=bool)

    for generation in range(offset + row_count):
        if generation >= offset:
            states[generation - offset] = row[window_offset:window_offset + col_count]
        if generation + 1 < offset + row_count:
            row = next_generation(row, table)

    if params.invert:
        states = ~states

    logger.debug("Automaton evaluated", rule=params.rule, seed=params.seed.value,
                 rows=row_count, cols=col_count, offset=offset)
    return states.reshape(-1)
