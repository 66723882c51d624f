"""Unit tests for ring classification and simplification."""

import pytest
from shapely.geometry import MultiPolygon, Polygon

from glyphline.core.classifier import RingClassifier
from glyphline.core.parser import OutlineParser
from glyphline.core.simplifier import ShapelySimplifier
from glyphline.domain import Ring


def cw_square(x: float, y: float, size: float) -> Ring:
    """Clockwise (outer) square ring."""
    return Ring(points=[(x, y), (x, y + size), (x + size, y + size), (x + size, y), (x, y)])


def ccw_square(x: float, y: float, size: float) -> Ring:
    """Counter-clockwise (hole) square ring."""
    return cw_square(x, y, size).reversed()


class TestRingClassifier:
    """Tests for RingClassifier."""

    def test_outer_with_hole(self):
        """Test a clockwise ring followed by a counter-clockwise ring."""
        hierarchy = RingClassifier().classify([cw_square(0, 0, 10), ccw_square(2, 2, 6)])

        assert hierarchy.outer_rings == [0]
        assert hierarchy.hole_rings == [1]
        assert hierarchy.containment == {1: 0}
        assert hierarchy.has_holes()

        geometry = hierarchy.to_multipolygon()
        assert len(geometry.geoms) == 1
        assert len(geometry.geoms[0].interiors) == 1
        assert geometry.area == pytest.approx(100.0 - 36.0)

    def test_separate_outers(self):
        """Test every clockwise ring opens a new polygon."""
        hierarchy = RingClassifier().classify([cw_square(0, 0, 10), cw_square(20, 0, 10)])

        assert hierarchy.outer_rings == [0, 1]
        assert not hierarchy.has_holes()
        assert len(hierarchy.to_multipolygon().geoms) == 2

    def test_hole_attaches_to_most_recent_outer(self):
        """Test holes belong to the latest outer ring in encounter order."""
        rings = [cw_square(0, 0, 10), cw_square(20, 0, 10), ccw_square(22, 2, 6)]
        hierarchy = RingClassifier().classify(rings)

        assert hierarchy.containment == {2: 1}
        geometry = hierarchy.to_multipolygon()
        assert len(geometry.geoms[0].interiors) == 0
        assert len(geometry.geoms[1].interiors) == 1

    def test_degenerate_ring_dropped(self):
        """Test rings with fewer than 3 distinct points are dropped."""
        rings = [Ring(points=[(5.0, 5.0), (5.0, 5.0)]), cw_square(0, 0, 10)]
        hierarchy = RingClassifier().classify(rings, char="x")

        assert hierarchy.dropped == [0]
        assert hierarchy.outer_rings == [1]

    def test_orphan_hole_promoted(self):
        """Test a hole before any outer ring becomes a clockwise outer ring."""
        hierarchy = RingClassifier().classify([ccw_square(0, 0, 10), ccw_square(2, 2, 6)])

        assert hierarchy.orphans == [0]
        assert hierarchy.outer_rings == [0]
        assert hierarchy.groups[0][0].is_clockwise()
        assert hierarchy.containment == {1: 0}

    def test_empty(self):
        """Test no rings give an empty multi-polygon."""
        geometry = RingClassifier().build([])
        assert isinstance(geometry, MultiPolygon)
        assert geometry.is_empty

    def test_orientation_invariant(self):
        """Test every polygon has a clockwise exterior and counter-clockwise holes."""
        outline = (
            "m 0 0 l 0 700 l 500 700 l 500 0 z m 100 100 l 400 100 l 400 600 l 100 600 z "
            "m 600 0 l 600 300 l 900 300 l 900 0 z"
        )
        rings = OutlineParser().parse(outline, scale=0.01)
        geometry = RingClassifier().build(rings)

        assert len(geometry.geoms) == 2
        for polygon in geometry.geoms:
            assert not polygon.exterior.is_ccw
            for interior in polygon.interiors:
                assert interior.is_ccw


class TestShapelySimplifier:
    """Tests for ShapelySimplifier."""

    def _flattened_square(self) -> MultiPolygon:
        rings = OutlineParser().parse(
            "m 0 0 l 0 700 l 500 700 l 500 0 z m 100 100 l 400 100 l 400 600 l 100 600 z",
            scale=0.01,
        )
        return RingClassifier().build(rings)

    def test_removes_collinear_points(self):
        """Test flattened straight edges collapse to their corners."""
        geometry = self._flattened_square()
        simplified = ShapelySimplifier().simplify(geometry, tolerance=0.02)

        polygon = simplified.geoms[0]
        assert len(polygon.exterior.coords) == 5
        assert len(polygon.interiors[0].coords) == 5
        assert simplified.area == pytest.approx(geometry.area, rel=1e-6)

    def test_point_count_non_increasing(self):
        """Test simplification never adds points."""
        geometry = self._flattened_square()
        simplified = ShapelySimplifier().simplify(geometry, tolerance=0.02, preserve_topology=False)

        before = sum(len(p.exterior.coords) for p in geometry.geoms)
        after = sum(len(p.exterior.coords) for p in simplified.geoms)
        assert after <= before

    def test_orientation_restored(self):
        """Test output exteriors are clockwise and holes counter-clockwise."""
        simplified = ShapelySimplifier().simplify(self._flattened_square(), tolerance=0.02)

        polygon = simplified.geoms[0]
        assert not polygon.exterior.is_ccw
        assert polygon.interiors[0].is_ccw

    def test_zero_tolerance(self):
        """Test a zero tolerance keeps every point."""
        geometry = self._flattened_square()
        simplified = ShapelySimplifier().simplify(geometry, tolerance=0.0)
        assert len(simplified.geoms[0].exterior.coords) == len(geometry.geoms[0].exterior.coords)

    def test_collapsed_polygon_dropped(self):
        """Test polygons smaller than the tolerance disappear."""
        tiny = Polygon([(0, 0), (0, 0.001), (0.001, 0.001), (0.001, 0)])
        large = Polygon([(10, 10), (10, 20), (20, 20), (20, 10)])
        simplified = ShapelySimplifier().simplify(
            MultiPolygon([tiny, large]), tolerance=1.0, preserve_topology=False
        )
        assert len(simplified.geoms) == 1
        assert simplified.area == pytest.approx(100.0)

    def test_empty(self):
        """Test empty input returns an empty multi-polygon."""
        simplified = ShapelySimplifier().simplify(MultiPolygon(), tolerance=1.0)
        assert isinstance(simplified, MultiPolygon)
        assert simplified.is_empty
