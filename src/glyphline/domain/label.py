"""Label line and placed label types.

This module defines the reference geometry labels are placed along and the
feature a finished label is returned as:
- CoordinateSystem: A coordinate system with its measurement unit
- LabelLine: The immutable reference path for a label
- LabelFeature: A finalized label geometry with its properties
"""

from dataclasses import dataclass, field
from typing import Any

from shapely.geometry import LineString, MultiPolygon, mapping

from glyphline.domain.ring import Coordinate
from glyphline.exceptions import LabelLineError


@dataclass(frozen=True)
class CoordinateSystem:
    """A coordinate system positions are expressed in.

    Attributes:
        code: Identifier (e.g. "EPSG:4326", "local")
        unit: Name of the coordinate unit ("degree", "m", ...)
        scale_factor: Metres per coordinate unit (ignored for geographic systems)
        geographic: True for longitude/latitude systems
    """

    code: str
    unit: str = "m"
    scale_factor: float = 1.0
    geographic: bool = False


WGS84 = CoordinateSystem(code="EPSG:4326", unit="degree", scale_factor=1.0, geographic=True)
PLANAR = CoordinateSystem(code="local", unit="m", scale_factor=1.0, geographic=False)


@dataclass(frozen=True)
class LabelLine:
    """Reference path a label is placed along.

    Attributes:
        coordinates: Ordered positions in the line's coordinate system
        system: Coordinate system of the positions

    Raises:
        LabelLineError: If fewer than two distinct positions are given
    """

    coordinates: tuple[Coordinate, ...]
    system: CoordinateSystem = PLANAR

    def __post_init__(self) -> None:
        coordinates = tuple((float(x), float(y)) for x, y in self.coordinates)
        if len(set(coordinates)) < 2:
            raise LabelLineError(
                f"Label line needs at least 2 distinct positions, got {len(set(coordinates))}"
            )
        object.__setattr__(self, "coordinates", coordinates)

    @property
    def linestring(self) -> LineString:
        return LineString(self.coordinates)

    @property
    def start(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def end(self) -> Coordinate:
        return self.coordinates[-1]


@dataclass
class LabelFeature:
    """A finalized label.

    Attributes:
        geometry: Combined glyph polygons in the label line's coordinate system
        properties: Label metadata (system, unit, glyph count, distance)
    """

    geometry: MultiPolygon
    properties: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a GeoJSON feature dictionary."""
        return {
            "type": "Feature",
            "geometry": mapping(self.geometry),
            "properties": dict(self.properties),
        }
