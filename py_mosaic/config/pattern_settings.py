"""
Parameter settings for Truchet and Voronoi pattern generation.

This module defines the live-editable parameter set with the defaults of
the interactive editor, plus helpers that validate enumerated choices
coming from the form layer without ever raising.
"""

from enum import Enum
from typing import Callable, Type, TypeVar

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger()

E = TypeVar("E", bound=Enum)
M = TypeVar("M", bound=BaseModel)


class GridPattern(str, Enum):
    """How the Truchet grid states are synthesized."""

    CHECKERBOARD = "checkerboard"
    EAC = "eac"
    RANDOM = "random"


class EacSeed(str, Enum):
    """Initial row of the elementary cellular automaton."""

    ALL_CLEAR = "allClear"
    ALL_SET = "allSet"
    ALTERNATING = "alternating"
    CENTER = "center"
    FIRST = "first"
    RANDOM = "random"


class EacEdgeBehavior(str, Enum):
    """Neighbor lookup at the automaton row edges."""

    INFINITE = "infinite"
    WRAP = "wrap"


class TilePattern(str, Enum):
    """Tile motif drawn in each Truchet cell."""

    CONCENTRIC_SMITH = "concentricSmith"
    DIAGONAL = "diagonal"
    SMITH = "smith"
    SOLID = "solid"
    TRIANGLE = "triangle"


class PointsSource(str, Enum):
    """Strategy used to seed Voronoi sites."""

    CAIRO = "cairo"
    GRID = "grid"
    RANDOM = "random"


class CheckerboardParams(BaseModel):
    """Checkerboard grid settings."""

    size: int = Field(default=1, description="Cells per checkerboard block along each axis")


class EacParams(BaseModel):
    """Elementary cellular automaton settings."""

    edge_behavior: EacEdgeBehavior = Field(default=EacEdgeBehavior.INFINITE, description="Edge handling")
    invert: bool = Field(default=False, description="Flip every recorded cell")
    offset: int = Field(default=0, description="Number of generations to fast-forward")
    rule: int = Field(default=30, description="Wolfram rule number (0-255)")
    seed: EacSeed = Field(default=EacSeed.CENTER, description="Initial row")
    size: int = Field(default=1, description="Run length for alternating, block width for center")


class TruchetGridParams(BaseModel):
    """Settings for the Truchet grid synthesizer."""

    width: float = Field(default=1600, description="Grid width")
    height: float = Field(default=700, description="Grid height")
    spacing: float = Field(default=100, description="Cell pitch")
    pattern: GridPattern = Field(default=GridPattern.RANDOM, description="Grid state pattern")
    checkerboard: CheckerboardParams = Field(default_factory=CheckerboardParams)
    eac: EacParams = Field(default_factory=EacParams)


class ConcentricSmithParams(BaseModel):
    """Concentric Smith tile settings."""

    gap: float = Field(default=0.15, description="Ring spacing as a fraction of the cell edge length")
    num_circles: int = Field(default=7, description="Number of concentric rings")
    stroke_width: float = Field(default=3, description="Ring stroke width")


class TruchetTileParams(BaseModel):
    """Settings for the Truchet tile geometry generator."""

    pattern: TilePattern = Field(default=TilePattern.CONCENTRIC_SMITH, description="Tile motif")
    concentric_smith: ConcentricSmithParams = Field(default_factory=ConcentricSmithParams)


class TruchetParams(BaseModel):
    """Complete Truchet parameter set."""

    grid: TruchetGridParams = Field(default_factory=TruchetGridParams)
    tile: TruchetTileParams = Field(default_factory=TruchetTileParams)


class VoronoiParams(BaseModel):
    """Settings for the organic Voronoi mosaic."""

    width: float = Field(default=1600, description="Canvas width")
    height: float = Field(default=700, description="Canvas height")
    bezier_factor: float = Field(default=1.0, description="Control point reach along each edge")
    border_width: float = Field(default=3, description="Stroke width between cells")
    parallel_path_step: float = Field(default=0.05, description="Marching step of the inset search")
    simplify_radius: float = Field(default=4.0, description="Vertex clustering radius")

    # Layer toggles
    show_control_points: bool = Field(default=False)
    show_edges: bool = Field(default=False)
    show_hard_cells: bool = Field(default=False)
    show_seeds: bool = Field(default=True)
    show_smooth_cells: bool = Field(default=True)
    show_veins: bool = Field(default=False)


class CairoPointsParams(BaseModel):
    """Cairo lattice site settings."""

    angle: float = Field(default=0, description="Lattice rotation in degrees")
    border: float = Field(default=20, description="Margin kept free of sites")
    jitter: float = Field(default=0, description="Maximum random displacement")
    spacing: float = Field(default=80, description="Lattice pitch")


class GridPointsParams(BaseModel):
    """Rectangular lattice site settings."""

    angle: float = Field(default=0, description="Lattice rotation in degrees")
    border: float = Field(default=1, description="Margin kept free of sites")
    is_staggered: bool = Field(default=True, description="Shift every other row by half a pitch")
    jitter: float = Field(default=0, description="Maximum random displacement")
    x_spacing: float = Field(default=50, description="Horizontal pitch")
    y_spacing: float = Field(default=50, description="Vertical pitch")


class RandomPointsParams(BaseModel):
    """Rejection-sampled site settings."""

    border: float = Field(default=20, description="Margin kept free of sites")
    min_spacing: float = Field(default=40, description="Minimum distance between sites")
    num_points: int = Field(default=300, description="Number of sites wanted")


class PointsParams(BaseModel):
    """Voronoi site source selection."""

    source: PointsSource = Field(default=PointsSource.CAIRO)
    cairo: CairoPointsParams = Field(default_factory=CairoPointsParams)
    grid: GridPointsParams = Field(default_factory=GridPointsParams)
    random: RandomPointsParams = Field(default_factory=RandomPointsParams)


def with_choice(enum_type: Type[E], value: str, apply: Callable[[E], None]) -> bool:
    """
    Call ``apply`` with ``value`` converted to ``enum_type``.

    Unknown values are logged and ignored so the caller keeps its
    previous state.

    Returns:
        True if ``apply`` was called
    """
    try:
        choice = enum_type(value)
    except ValueError:
        logger.error("Invalid choice ignored", choice_type=enum_type.__name__, value=value)
        return False
    apply(choice)
    return True


def with_grid_pattern(value: str, apply: Callable[[GridPattern], None]) -> bool:
    return with_choice(GridPattern, value, apply)


def with_eac_seed(value: str, apply: Callable[[EacSeed], None]) -> bool:
    return with_choice(EacSeed, value, apply)


def with_eac_edge_behavior(value: str, apply: Callable[[EacEdgeBehavior], None]) -> bool:
    return with_choice(EacEdgeBehavior, value, apply)


def with_tile_pattern(value: str, apply: Callable[[TilePattern], None]) -> bool:
    return with_choice(TilePattern, value, apply)


def with_points_source(value: str, apply: Callable[[PointsSource], None]) -> bool:
    return with_choice(PointsSource, value, apply)


def update_choice(model: M, field_name: str, value: str) -> M:
    """
    Return a copy of ``model`` with an enumerated field set to ``value``.

    The field's enum type is taken from the model annotation. An unknown
    value leaves the model unchanged.
    """
    enum_type = type(model).model_fields[field_name].annotation
    updated = []
    with_choice(enum_type, value, updated.append)
    if not updated:
        return model
    return model.model_copy(update={field_name: updated[0]})
