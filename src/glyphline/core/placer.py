"""Curve-following glyph placement.

A LabelPlacer walks a sequence of glyphs along a label line. For every glyph
it measures how far the glyph's advance reaches in the rendering system,
corrects the advance for local curvature and projection distortion, and
rotates the glyph to the heading of the line between its start and end.

Lifecycle:
    EMPTY -> ACCUMULATING -> FINALIZED

Once get_label() has been called the placement state is consumed and no
further glyphs are accepted.
"""

from enum import Enum

import structlog
from shapely.geometry import MultiPolygon, Polygon

from glyphline.config import PlacementConfig
from glyphline.core.geometry import distance, heading, placement_matrix, transform_multipolygon
from glyphline.domain import PLANAR, Coordinate, CoordinateSystem, Glyph, LabelFeature, LabelLine
from glyphline.exceptions import PlacerFinalizedError
from glyphline.geo import LineSampler, PathSampler, ProjectionService

logger = structlog.get_logger(__name__)


class PlacerState(Enum):
    """Lifecycle state of a label placer."""

    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


class LabelPlacer:
    """Places glyphs one by one along a label line.

    Not thread-safe: glyph order is significant, so callers must serialize
    accept_glyph() calls for one label.

    Example:
        placer = LabelPlacer.along_line(line, projection)
        for char in "Main St":
            placer.accept_glyph(font.get_glyph(char))
        label = placer.get_label()
    """

    def __init__(
        self,
        line: LabelLine,
        projection: ProjectionService,
        render_system: CoordinateSystem = PLANAR,
        advance_multiplier: float = 1.0,
        sampler: PathSampler | None = None,
    ) -> None:
        """Initialize the placer.

        Args:
            line: Reference line the label follows
            projection: Projection between the line's and the rendering system
            render_system: Planar system glyph geometry is composed in
            advance_multiplier: Factor applied to every glyph advance
            sampler: Arc-length sampler (defaults to LineSampler)

        Raises:
            ValueError: If advance_multiplier is not positive
        """
        if advance_multiplier <= 0:
            raise ValueError(f"advance_multiplier must be positive, got {advance_multiplier}")

        self.line = line
        self.projection = projection
        self.render_system = render_system
        self.advance_multiplier = advance_multiplier
        self.sampler = sampler or LineSampler(projection)

        self._line_length = self.sampler.total_length(line)
        self._distance = 0.0
        self._polygons: list[Polygon] = []
        self._glyph_count = 0
        self._heading: float | None = None
        self._state = PlacerState.EMPTY
        self._label: LabelFeature | None = None

    @classmethod
    def from_position(
        cls,
        position: Coordinate,
        projection: ProjectionService,
        system: CoordinateSystem = PLANAR,
        render_system: CoordinateSystem = PLANAR,
        advance_multiplier: float = 1.0,
        config: PlacementConfig | None = None,
        sampler: PathSampler | None = None,
    ) -> "LabelPlacer":
        """Place glyphs along a straight line extending in +x from a position.

        Args:
            position: Anchor position in ``system``
            projection: Projection service
            system: Coordinate system of the anchor
            render_system: Planar system glyph geometry is composed in
            advance_multiplier: Factor applied to every glyph advance
            config: Anchor line ground length (metres) and point count
            sampler: Arc-length sampler (defaults to LineSampler)

        Returns:
            LabelPlacer following the synthesized line
        """
        config = config or PlacementConfig()
        # The line length is a ground distance; express it in the anchor's units
        _, meters_per_unit = projection.unit_and_scale_factor(system)
        length = config.anchor_line_length / meters_per_unit
        steps = config.anchor_line_points - 1
        x, y = float(position[0]), float(position[1])
        coordinates = tuple(
            (x + length * i / steps, y)
            for i in range(config.anchor_line_points)
        )
        return cls(
            LabelLine(coordinates, system),
            projection,
            render_system=render_system,
            advance_multiplier=advance_multiplier,
            sampler=sampler,
        )

    @classmethod
    def along_line(
        cls,
        line: LabelLine,
        projection: ProjectionService,
        render_system: CoordinateSystem = PLANAR,
        advance_multiplier: float = 1.0,
        sampler: PathSampler | None = None,
    ) -> "LabelPlacer":
        """Place glyphs along an explicit curved or straight line."""
        return cls(
            line,
            projection,
            render_system=render_system,
            advance_multiplier=advance_multiplier,
            sampler=sampler,
        )

    @property
    def state(self) -> PlacerState:
        return self._state

    @property
    def distance(self) -> float:
        """Cumulative distance travelled along the line, in metres."""
        return self._distance

    @property
    def line_length(self) -> float:
        return self._line_length

    @property
    def glyph_count(self) -> int:
        return self._glyph_count

    def calculate_advance(self, glyph: Glyph) -> float:
        """Predict how far a glyph advances without placing it.

        Args:
            glyph: The glyph to measure

        Returns:
            Glyph advance times the advance multiplier
        """
        return glyph.advance * self.advance_multiplier

    def accept_glyph(self, glyph: Glyph) -> None:
        """Place the next glyph of the label.

        Args:
            glyph: Glyph to append at the current distance

        Raises:
            PlacerFinalizedError: If get_label() was already called
        """
        if self._state == PlacerState.FINALIZED:
            raise PlacerFinalizedError(glyph.char)

        advance = glyph.advance
        start = self._project(self.sampler.point_at_distance(self.line, self._distance))
        trial_end = self._project(
            self.sampler.point_at_distance(self.line, self._distance + advance)
        )

        # Ratio between the advance and how far it reaches once projected
        measured = distance(start, trial_end)
        ratio = advance / measured if measured > 0 else 1.0
        self._distance += advance * ratio * self.advance_multiplier

        end = self._project(self.sampler.point_at_distance(self.line, self._distance))
        if distance(start, end) > 0:
            angle = heading(start, end)
        else:
            angle = self._fallback_heading()
        self._heading = angle

        placed = transform_multipolygon(glyph.geometry, placement_matrix(start, angle, glyph.mid_y))
        self._polygons.extend(placed.geoms)
        self._glyph_count += 1
        self._state = PlacerState.ACCUMULATING

        logger.debug(
            "Glyph placed",
            char=glyph.char,
            distance=round(self._distance, 4),
            ratio=round(ratio, 6),
            angle=round(angle, 6),
        )

    def get_label(self) -> LabelFeature:
        """Finalize the label and return it in the line's coordinate system.

        Repeated calls return the same feature.

        Returns:
            LabelFeature with the combined glyph polygons
        """
        if self._label is not None:
            return self._label

        geometry = MultiPolygon(self._polygons) if self._polygons else MultiPolygon()
        projected = self.projection.project(geometry, self.render_system, self.line.system)

        self._label = LabelFeature(
            geometry=projected,
            properties={
                "system": self.line.system.code,
                "unit": self.line.system.unit,
                "renderSystem": self.render_system.code,
                "glyphs": self._glyph_count,
                "distance": self._distance,
                "lineLength": self._line_length,
            },
        )
        self._state = PlacerState.FINALIZED
        self._polygons = []

        logger.debug(
            "Label finalized",
            glyphs=self._glyph_count,
            distance=round(self._distance, 4),
            line_length=round(self._line_length, 4),
        )
        return self._label

    def _project(self, point: Coordinate) -> Coordinate:
        return self.projection.project_point(point, self.line.system, self.render_system)

    def _fallback_heading(self) -> float:
        """Heading used when a glyph's start and end coincide.

        Happens when the label overruns the line and both positions clamp to
        its end: keep the previous heading, or use the line's last segment.
        """
        if self._heading is not None:
            return self._heading

        coordinates = self.line.coordinates
        end = self._project(coordinates[-1])
        for coordinate in reversed(coordinates[:-1]):
            start = self._project(coordinate)
            if distance(start, end) > 0:
                return heading(start, end)
        return 0.0
