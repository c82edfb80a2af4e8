"""Export of generated patterns."""

from .svg import render_truchet, render_voronoi

__all__ = ['render_truchet', 'render_voronoi']
