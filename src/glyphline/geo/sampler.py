"""Arc-length sampling along label lines.

Distances along a label line are measured in metres: great circle distance
for geographic lines and coordinate distance times the system's scale factor
for planar lines. Queries outside ``[0, total_length]`` clamp to the line's
endpoints.
"""

from typing import Protocol

from glyphline.domain import Coordinate, LabelLine
from glyphline.geo.projection import ProjectionService, haversine_distance


class PathSampler(Protocol):
    """Total length and point-at-distance queries on a label line."""

    def total_length(self, line: LabelLine) -> float: ...

    def point_at_distance(self, line: LabelLine, distance: float) -> Coordinate: ...


class LineSampler:
    """Path sampler for planar and geographic label lines.

    Example:
        sampler = LineSampler(projection)
        length = sampler.total_length(line)
        midpoint = sampler.point_at_distance(line, length / 2)
    """

    def __init__(self, projection: ProjectionService) -> None:
        """Initialize the sampler.

        Args:
            projection: Projection service used to look up unit scale factors
        """
        self.projection = projection

    def total_length(self, line: LabelLine) -> float:
        """Length of the line in metres."""
        if line.system.geographic:
            return sum(self._segment_lengths(line))
        _, factor = self.projection.unit_and_scale_factor(line.system)
        return line.linestring.length * factor

    def point_at_distance(self, line: LabelLine, distance: float) -> Coordinate:
        """Position at ``distance`` metres along the line, in the line's system.

        Args:
            line: The label line
            distance: Distance from the start in metres; clamped to the line

        Returns:
            (x, y) in the line's coordinate system
        """
        if not line.system.geographic:
            _, factor = self.projection.unit_and_scale_factor(line.system)
            point = line.linestring.interpolate(max(0.0, distance / factor))
            return (point.x, point.y)

        if distance <= 0:
            return line.start

        remaining = distance
        coordinates = line.coordinates
        for index, length in enumerate(self._segment_lengths(line)):
            if length > 0 and remaining <= length:
                fraction = remaining / length
                (x0, y0), (x1, y1) = coordinates[index], coordinates[index + 1]
                return (x0 + (x1 - x0) * fraction, y0 + (y1 - y0) * fraction)
            remaining -= length

        return line.end

    def _segment_lengths(self, line: LabelLine) -> list[float]:
        coordinates = line.coordinates
        return [
            haversine_distance(coordinates[i], coordinates[i + 1])
            for i in range(len(coordinates) - 1)
        ]
