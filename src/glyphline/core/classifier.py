"""Ring classification into outer boundaries and holes.

This module groups the flattened rings of a glyph into polygons:
- Clockwise rings are outer boundaries and open a new polygon
- Counter-clockwise rings are holes of the most recently opened polygon

Classification uses the signed area of each ring, so it depends only on the
winding the outline was authored with, never on containment tests.
"""

from dataclasses import dataclass, field

import structlog
from shapely.geometry import MultiPolygon, Polygon

from glyphline.domain import Ring

logger = structlog.get_logger(__name__)


@dataclass
class RingHierarchy:
    """Classification of a glyph's rings.

    Attributes:
        groups: One list per polygon, outer ring first then its holes
        outer_rings: Indices of rings that opened a polygon
        hole_rings: Indices of rings attached as holes
        containment: Maps hole ring index to the index of its outer ring
        dropped: Indices of degenerate rings that were discarded
        orphans: Indices of counter-clockwise rings seen before any outer
            ring; these were reversed and promoted to outer boundaries
    """

    groups: list[list[Ring]] = field(default_factory=list)
    outer_rings: list[int] = field(default_factory=list)
    hole_rings: list[int] = field(default_factory=list)
    containment: dict[int, int] = field(default_factory=dict)
    dropped: list[int] = field(default_factory=list)
    orphans: list[int] = field(default_factory=list)

    def has_holes(self) -> bool:
        """Check if any polygon has at least one hole."""
        return len(self.hole_rings) > 0

    def to_multipolygon(self) -> MultiPolygon:
        """Build a shapely multi-polygon, one polygon per group.

        Returns:
            MultiPolygon preserving the outer-then-holes structure (empty when
            there are no groups)
        """
        if not self.groups:
            return MultiPolygon()
        polygons = [
            Polygon(group[0].points, [hole.points for hole in group[1:]])
            for group in self.groups
        ]
        return MultiPolygon(polygons)


class RingClassifier:
    """Groups rings into polygons by winding direction.

    The classifier is stateless and runs identically for every ring, whether
    it was closed by ``z``, by a following ``m`` or by the end of the
    command stream.
    """

    def classify(self, rings: list[Ring], char: str | None = None) -> RingHierarchy:
        """Classify rings in encounter order.

        Args:
            rings: Flattened rings from the outline parser
            char: Character being classified, for log context

        Returns:
            RingHierarchy with the polygon groups
        """
        hierarchy = RingHierarchy()
        current_outer: int | None = None

        for index, ring in enumerate(rings):
            if ring.is_degenerate():
                hierarchy.dropped.append(index)
                logger.debug(
                    "Degenerate ring dropped",
                    char=char,
                    ring=index,
                    points=len(ring.points),
                )
                continue

            if ring.is_clockwise():
                hierarchy.groups.append([ring])
                hierarchy.outer_rings.append(index)
                current_outer = index
                continue

            if current_outer is None:
                # Hole without an enclosing outer ring
                hierarchy.groups.append([ring.reversed()])
                hierarchy.outer_rings.append(index)
                hierarchy.orphans.append(index)
                current_outer = index
                logger.warning("Orphan hole promoted to outer ring", char=char, ring=index)
                continue

            hierarchy.groups[-1].append(ring)
            hierarchy.hole_rings.append(index)
            hierarchy.containment[index] = current_outer

        return hierarchy

    def build(self, rings: list[Ring], char: str | None = None) -> MultiPolygon:
        """Classify rings and return the resulting multi-polygon.

        Args:
            rings: Flattened rings from the outline parser
            char: Character being classified, for log context

        Returns:
            MultiPolygon of outer boundaries with their holes
        """
        return self.classify(rings, char=char).to_multipolygon()
