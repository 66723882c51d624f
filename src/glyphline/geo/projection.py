"""Coordinate projection between label line and rendering systems.

Labels are laid out in a planar rendering system (metres by default) while
their reference lines may be geographic (longitude/latitude) or planar in a
different unit. This module provides the projection collaborator used by the
label placer:
- ProjectionService: Protocol for projecting geometries between systems
- LocalProjection: Local equirectangular projection about an origin
"""

import math
from typing import Protocol, TypeVar

from shapely.geometry.base import BaseGeometry
from shapely.ops import transform

from glyphline.domain import Coordinate, CoordinateSystem

# Approximate metres per degree of latitude (and of longitude at the equator)
METERS_PER_DEGREE = 111320.0

# Mean Earth radius in metres
EARTH_RADIUS = 6371000.0

G = TypeVar("G", bound=BaseGeometry)


class ProjectionService(Protocol):
    """Projects points and geometries between coordinate systems.

    Implementations must be deterministic and inverse consistent: projecting
    A to B and back to A returns the input within floating point tolerance.
    """

    def project_point(
        self, point: Coordinate, source: CoordinateSystem, target: CoordinateSystem
    ) -> Coordinate: ...

    def project(self, geometry: G, source: CoordinateSystem, target: CoordinateSystem) -> G: ...

    def unit_and_scale_factor(self, system: CoordinateSystem) -> tuple[str, float]: ...


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Calculate the great circle distance between two lon/lat points in metres."""
    lon1, lat1 = a
    lon2, lat2 = b
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    return EARTH_RADIUS * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


class LocalProjection:
    """Local equirectangular projection about a fixed origin.

    Geographic coordinates are mapped to metres east/north of the origin with
    longitude scaled by cos(origin latitude); planar systems convert between
    each other through their metres-per-unit scale factors. Accurate for
    label-sized extents, and exactly invertible.

    Example:
        projection = LocalProjection(origin=(13.4, 52.5))
        x, y = projection.project_point((13.41, 52.5), WGS84, PLANAR)
    """

    def __init__(self, origin: Coordinate = (0.0, 0.0)) -> None:
        """Initialize the projection.

        Args:
            origin: (longitude, latitude) mapped to planar (0, 0)
        """
        self.origin = (float(origin[0]), float(origin[1]))
        self._meters_per_degree_lon = METERS_PER_DEGREE * math.cos(math.radians(self.origin[1]))

    def unit_and_scale_factor(self, system: CoordinateSystem) -> tuple[str, float]:
        """Look up the measurement unit and metres-per-unit factor of a system.

        Geographic systems report metres per degree of latitude.
        """
        if system.geographic:
            return (system.unit, METERS_PER_DEGREE)
        return (system.unit, system.scale_factor)

    def project_point(
        self, point: Coordinate, source: CoordinateSystem, target: CoordinateSystem
    ) -> Coordinate:
        """Project one (x, y) position from source to target."""
        if source == target:
            return (float(point[0]), float(point[1]))
        x, y = self._to_meters(float(point[0]), float(point[1]), source)
        return self._from_meters(x, y, target)

    def project(self, geometry: G, source: CoordinateSystem, target: CoordinateSystem) -> G:
        """Project every coordinate of a shapely geometry from source to target."""
        if source == target or geometry.is_empty:
            return geometry

        def _project(xs, ys, zs=None):
            projected = [self.project_point((x, y), source, target) for x, y in zip(xs, ys)]
            return tuple(p[0] for p in projected), tuple(p[1] for p in projected)

        return transform(_project, geometry)

    def _to_meters(self, x: float, y: float, system: CoordinateSystem) -> Coordinate:
        if system.geographic:
            return (
                (x - self.origin[0]) * self._meters_per_degree_lon,
                (y - self.origin[1]) * METERS_PER_DEGREE,
            )
        return (x * system.scale_factor, y * system.scale_factor)

    def _from_meters(self, x: float, y: float, system: CoordinateSystem) -> Coordinate:
        if system.geographic:
            return (
                self.origin[0] + x / self._meters_per_degree_lon,
                self.origin[1] + y / METERS_PER_DEGREE,
            )
        return (x / system.scale_factor, y / system.scale_factor)
