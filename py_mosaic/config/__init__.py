"""
Configuration modules for pattern generation.
"""

from .config import Settings, settings
from .pattern_settings import (
    CairoPointsParams,
    CheckerboardParams,
    ConcentricSmithParams,
    EacEdgeBehavior,
    EacParams,
    EacSeed,
    GridPattern,
    GridPointsParams,
    PointsParams,
    PointsSource,
    RandomPointsParams,
    TilePattern,
    TruchetGridParams,
    TruchetParams,
    TruchetTileParams,
    VoronoiParams,
    update_choice,
    with_choice,
)

__all__ = [
    'Settings', 'settings',
    'CairoPointsParams', 'CheckerboardParams', 'ConcentricSmithParams',
    'EacEdgeBehavior', 'EacParams', 'EacSeed', 'GridPattern', 'GridPointsParams',
    'PointsParams', 'PointsSource', 'RandomPointsParams', 'TilePattern',
    'TruchetGridParams', 'TruchetParams', 'TruchetTileParams', 'VoronoiParams',
    'update_choice', 'with_choice',
]
