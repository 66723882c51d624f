"""Projection and sampling collaborators for label placement.

Key classes:
- ProjectionService: Protocol for projecting between coordinate systems
- LocalProjection: Local equirectangular implementation
- PathSampler: Protocol for arc-length queries on label lines
- LineSampler: Planar/geographic implementation with endpoint clamping
"""

from glyphline.geo.projection import (
    METERS_PER_DEGREE,
    LocalProjection,
    ProjectionService,
    haversine_distance,
)
from glyphline.geo.sampler import LineSampler, PathSampler

__all__ = [
    "METERS_PER_DEGREE",
    "LineSampler",
    "LocalProjection",
    "PathSampler",
    "ProjectionService",
    "haversine_distance",
]
