"""Procedural Truchet tile and organic Voronoi mosaic generator."""

__version__ = "0.1.0"
