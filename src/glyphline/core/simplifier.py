"""Polygon simplification for vectorized glyphs.

Flattened outlines carry more vertices than a label needs. The simplifier
reduces vertex count within a tolerance while keeping every polygon a valid
outer-then-holes structure with clockwise exteriors.
"""

from typing import Protocol

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.polygon import orient


class Simplifier(Protocol):
    """Reduces the vertex count of a multi-polygon within a tolerance."""

    def simplify(
        self,
        geometry: MultiPolygon,
        tolerance: float,
        preserve_topology: bool = True,
    ) -> MultiPolygon: ...


class ShapelySimplifier:
    """Simplifier backed by shapely (GEOS Douglas-Peucker variants).

    shapely geometries are immutable, so the simplified geometry is returned
    rather than written back into the input.
    """

    def simplify(
        self,
        geometry: MultiPolygon,
        tolerance: float,
        preserve_topology: bool = True,
    ) -> MultiPolygon:
        """Simplify a glyph multi-polygon.

        Polygons that collapse during simplification are dropped, and ring
        orientation is normalised afterwards (clockwise exterior,
        counter-clockwise holes).

        Args:
            geometry: Glyph multi-polygon
            tolerance: Maximum deviation, in geometry units; 0 skips simplification
            preserve_topology: Use the topology preserving algorithm

        Returns:
            Simplified multi-polygon with point counts no larger than the input
        """
        if geometry.is_empty:
            return MultiPolygon()

        simplified = geometry
        if tolerance > 0:
            simplified = geometry.simplify(tolerance, preserve_topology=preserve_topology)

        polygons = [
            orient(part, sign=-1.0)
            for part in getattr(simplified, "geoms", [simplified])
            if isinstance(part, Polygon) and not part.is_empty
        ]
        if not polygons:
            return MultiPolygon()
        return MultiPolygon(polygons)
