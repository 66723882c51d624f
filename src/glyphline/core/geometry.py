"""Geometric operations for glyph placement.

This module provides the mathematical utilities for glyph placement:
- Distance and heading between points
- Composing the per-glyph placement transform

All functions are pure and stateless.
"""

import math

from shapely import affinity
from shapely.geometry import MultiPolygon

from glyphline.domain import Coordinate


def distance(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def heading(a: Coordinate, b: Coordinate) -> float:
    """Angle in radians of the direction from a to b, measured from +x."""
    return math.atan2(b[1] - a[1], b[0] - a[0])


def placement_matrix(
    origin: Coordinate,
    angle: float,
    mid_y: float,
) -> list[float]:
    """Compose translate(origin) * rotate(angle) * translate(0, -mid_y).

    The midline shift is applied in local glyph space, before rotation, so a
    glyph ends up vertically centred on the line at the origin.

    Args:
        origin: Position the glyph's local (0, mid_y) is moved to
        angle: Rotation in radians, counter-clockwise
        mid_y: Vertical midline offset of the glyph

    Returns:
        Coefficients [a, b, d, e, xoff, yoff] for shapely's affine_transform
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return [
        cos_a,
        -sin_a,
        sin_a,
        cos_a,
        origin[0] + mid_y * sin_a,
        origin[1] - mid_y * cos_a,
    ]


def transform_multipolygon(geometry: MultiPolygon, matrix: list[float]) -> MultiPolygon:
    """Apply an affine placement matrix to every coordinate of a multi-polygon.

    Args:
        geometry: Glyph geometry in local glyph space
        matrix: Coefficients from placement_matrix()

    Returns:
        Transformed multi-polygon (empty input stays empty)
    """
    if geometry.is_empty:
        return MultiPolygon()
    return affinity.affine_transform(geometry, matrix)
