"""Unit tests for LabelPlacer."""

import math
from unittest.mock import Mock

import pytest
from shapely.geometry import MultiPolygon, Polygon

from glyphline.config import PlacementConfig
from glyphline.core.geometry import placement_matrix
from glyphline.core.placer import LabelPlacer, PlacerState
from glyphline.domain import PLANAR, WGS84, CoordinateSystem, Glyph, LabelLine
from glyphline.exceptions import PlacerFinalizedError
from glyphline.geo import METERS_PER_DEGREE, LocalProjection


def box_glyph(char: str = "x", advance: float = 5.0, mid_y: float = 3.0) -> Glyph:
    """A 5 x 6 box glyph."""
    box = Polygon([(0, 0), (0, 6), (5, 6), (5, 0)])
    return Glyph(char=char, geometry=MultiPolygon([box]), advance=advance, mid_y=mid_y, scale=1.0)


def straight_placer(length: float = 100.0, **kwargs) -> LabelPlacer:
    line = LabelLine(((0.0, 0.0), (length, 0.0)))
    return LabelPlacer(line, LocalProjection(), **kwargs)


class TestPlacementMatrix:
    """Tests for the placement transform."""

    def test_identity_heading(self):
        """Test angle 0 only translates and shifts by the midline."""
        assert placement_matrix((10.0, 20.0), 0.0, 3.0) == pytest.approx(
            [1.0, 0.0, 0.0, 1.0, 10.0, 17.0]
        )

    def test_midline_maps_to_origin(self):
        """Test the local point (0, mid_y) lands on the origin for any heading."""
        a, b, d, e, xoff, yoff = placement_matrix((4.0, -2.0), 0.7, 3.0)
        x = a * 0.0 + b * 3.0 + xoff
        y = d * 0.0 + e * 3.0 + yoff
        assert (x, y) == pytest.approx((4.0, -2.0))


class TestLabelPlacer:
    """Tests for glyph placement along a line."""

    def test_straight_line(self):
        """Test two glyphs on a horizontal line sit side by side."""
        placer = straight_placer()
        placer.accept_glyph(box_glyph("a"))
        placer.accept_glyph(box_glyph("b"))

        label = placer.get_label()
        polygons = label.geometry.geoms
        assert len(polygons) == 2
        assert polygons[0].bounds == pytest.approx((0.0, -3.0, 5.0, 3.0), abs=1e-9)
        assert polygons[1].bounds == pytest.approx((5.0, -3.0, 10.0, 3.0), abs=1e-9)
        assert placer.distance == pytest.approx(10.0)

    def test_label_properties(self):
        """Test the label reports its system and placement metrics."""
        placer = straight_placer()
        placer.accept_glyph(box_glyph())
        properties = placer.get_label().properties

        assert properties["system"] == PLANAR.code
        assert properties["unit"] == "m"
        assert properties["glyphs"] == 1
        assert properties["distance"] == pytest.approx(5.0)
        assert properties["lineLength"] == pytest.approx(100.0)

    def test_state_transitions(self):
        """Test EMPTY -> ACCUMULATING -> FINALIZED."""
        placer = straight_placer()
        assert placer.state == PlacerState.EMPTY
        placer.accept_glyph(box_glyph())
        assert placer.state == PlacerState.ACCUMULATING
        placer.get_label()
        assert placer.state == PlacerState.FINALIZED

    def test_accept_after_finalize(self):
        """Test a finalized placer rejects further glyphs."""
        placer = straight_placer()
        placer.get_label()
        with pytest.raises(PlacerFinalizedError):
            placer.accept_glyph(box_glyph())

    def test_get_label_repeated(self):
        """Test repeated get_label() calls return the same feature."""
        placer = straight_placer()
        placer.accept_glyph(box_glyph())
        assert placer.get_label() is placer.get_label()

    def test_empty_label(self):
        """Test finalizing without glyphs gives an empty geometry."""
        label = straight_placer().get_label()
        assert label.geometry.is_empty
        assert label.properties["glyphs"] == 0

    def test_calculate_advance(self):
        """Test advance prediction is pure."""
        placer = straight_placer(advance_multiplier=1.5)
        assert placer.calculate_advance(box_glyph()) == pytest.approx(7.5)
        assert placer.distance == 0.0
        assert placer.state == PlacerState.EMPTY

    def test_advance_multiplier(self):
        """Test the multiplier stretches the distance between glyphs."""
        placer = straight_placer(advance_multiplier=2.0)
        placer.accept_glyph(box_glyph("a"))
        placer.accept_glyph(box_glyph("b"))

        assert placer.distance == pytest.approx(20.0)
        assert placer.get_label().geometry.geoms[1].bounds[0] == pytest.approx(10.0)

    def test_invalid_multiplier(self):
        """Test non-positive multipliers are rejected."""
        with pytest.raises(ValueError):
            straight_placer(advance_multiplier=0.0)

    def test_distance_monotonic_past_line_end(self):
        """Test overshooting glyphs clamp to the end and keep the heading."""
        placer = straight_placer(length=10.0)
        distances = []
        for char in "abcd":
            placer.accept_glyph(box_glyph(char))
            distances.append(placer.distance)

        assert distances == sorted(distances)
        assert distances[-1] == pytest.approx(20.0)

        polygons = placer.get_label().geometry.geoms
        # Third and fourth glyphs both start at the clamped end point
        assert polygons[2].bounds == pytest.approx((10.0, -3.0, 15.0, 3.0), abs=1e-9)
        assert polygons[3].bounds == pytest.approx((10.0, -3.0, 15.0, 3.0), abs=1e-9)

    def test_corner_rotates_glyph(self):
        """Test glyphs follow the heading of each line section."""
        line = LabelLine(((0.0, 0.0), (10.0, 0.0), (10.0, 10.0)))
        placer = LabelPlacer(line, LocalProjection())
        for char in "abc":
            placer.accept_glyph(box_glyph(char))

        third = placer.get_label().geometry.geoms[2]
        # Rotated by 90 degrees about (10, 0): x spans mid_y on each side
        assert third.bounds == pytest.approx((7.0, 0.0, 13.0, 5.0), abs=1e-9)

    def test_empty_glyph_advances(self):
        """Test blank glyphs advance without adding polygons."""
        blank = Glyph(char=" ", geometry=MultiPolygon(), advance=2.5, mid_y=3.0, scale=1.0)
        placer = straight_placer()
        placer.accept_glyph(blank)
        placer.accept_glyph(box_glyph())

        assert placer.glyph_count == 2
        polygons = placer.get_label().geometry.geoms
        assert len(polygons) == 1
        assert polygons[0].bounds[0] == pytest.approx(2.5)

    def test_uses_sampler(self):
        """Test positions come from the injected sampler."""
        sampler = Mock()
        sampler.total_length.return_value = 50.0
        sampler.point_at_distance.side_effect = lambda line, d: (d, 0.0)
        placer = straight_placer(sampler=sampler)

        placer.accept_glyph(box_glyph())

        assert placer.line_length == 50.0
        requested = [call.args[1] for call in sampler.point_at_distance.call_args_list]
        assert requested == [0.0, 5.0, 5.0]


class TestLabelPlacerProjection:
    """Tests for placement across coordinate systems."""

    def test_planar_scale_factor(self):
        """Test lines in scaled planar units are measured in metres."""
        feet = CoordinateSystem(code="local-ft", unit="ft", scale_factor=0.3048)
        line = LabelLine(((0.0, 0.0), (100.0, 0.0)), feet)
        placer = LabelPlacer(line, LocalProjection())

        placer.accept_glyph(box_glyph())
        label = placer.get_label()

        assert placer.line_length == pytest.approx(30.48)
        assert label.properties["unit"] == "ft"
        # 5 m wide glyph expressed in feet
        assert label.geometry.bounds[2] == pytest.approx(5.0 / 0.3048)

    def test_geographic_line(self):
        """Test advances are corrected for projection distortion."""
        line = LabelLine(((0.0, 0.0), (0.001, 0.0)), WGS84)
        placer = LabelPlacer(line, LocalProjection(origin=(0.0, 0.0)))

        placer.accept_glyph(box_glyph("a"))
        placer.accept_glyph(box_glyph("b"))
        label = placer.get_label()

        polygons = label.geometry.geoms
        assert polygons[0].bounds[0] == pytest.approx(0.0, abs=1e-12)
        assert polygons[0].bounds[2] == pytest.approx(5.0 / METERS_PER_DEGREE, rel=1e-6)
        # The second glyph starts exactly one rendered advance further
        assert polygons[1].bounds[0] == pytest.approx(5.0 / METERS_PER_DEGREE, rel=1e-6)
        assert polygons[1].bounds[2] == pytest.approx(10.0 / METERS_PER_DEGREE, rel=1e-6)
        assert label.properties["system"] == "EPSG:4326"


class TestFromPosition:
    """Tests for anchor based placers."""

    def test_synthesized_line(self):
        """Test an anchor becomes a straight line in +x, one degree of ground long."""
        placer = LabelPlacer.from_position((3.0, 4.0), LocalProjection())

        coordinates = placer.line.coordinates
        assert len(coordinates) == 100
        assert coordinates[0] == (3.0, 4.0)
        assert coordinates[-1] == pytest.approx((3.0 + METERS_PER_DEGREE, 4.0))
        assert all(y == 4.0 for _, y in coordinates)

    def test_geographic_line_is_one_degree(self):
        """Test the default anchor line spans one degree of longitude."""
        placer = LabelPlacer.from_position(
            (13.4, 52.5), LocalProjection(origin=(13.4, 52.5)), system=WGS84
        )
        assert placer.line.coordinates[-1] == pytest.approx((14.4, 52.5))

    def test_line_length_in_anchor_units(self):
        """Test the ground length is converted into the anchor's units."""
        feet = CoordinateSystem(code="local-ft", unit="ft", scale_factor=0.3048)
        config = PlacementConfig(anchor_line_length=30.48, anchor_line_points=2)
        placer = LabelPlacer.from_position((0.0, 0.0), LocalProjection(), system=feet, config=config)

        assert placer.line.coordinates[-1] == pytest.approx((100.0, 0.0))
        assert placer.line_length == pytest.approx(30.48)

    def test_configurable_line(self):
        """Test the anchor line length and point count are configurable."""
        config = PlacementConfig(anchor_line_length=50.0, anchor_line_points=11)
        placer = LabelPlacer.from_position((0.0, 0.0), LocalProjection(), config=config)

        assert len(placer.line.coordinates) == 11
        assert placer.line_length == pytest.approx(50.0)

    def test_glyph_at_anchor(self):
        """Test the first glyph is centred vertically on the anchor."""
        placer = LabelPlacer.from_position((3.0, 4.0), LocalProjection())
        placer.accept_glyph(box_glyph())
        bounds = placer.get_label().geometry.bounds

        assert bounds[0] == pytest.approx(3.0)
        assert (bounds[1] + bounds[3]) / 2 == pytest.approx(4.0)

    def test_glyphs_advance_from_anchor(self):
        """Test successive glyphs start one advance apart along +x."""
        placer = LabelPlacer.from_position((0.0, 0.0), LocalProjection())
        for char in "abc":
            placer.accept_glyph(box_glyph(char))

        polygons = placer.get_label().geometry.geoms
        assert [p.bounds[0] for p in polygons] == pytest.approx([0.0, 5.0, 10.0])
        for polygon in polygons:
            min_x, min_y, max_x, max_y = polygon.bounds
            assert max_x - min_x == pytest.approx(5.0)
            assert max_y - min_y == pytest.approx(6.0)

    def test_geographic_glyphs_advance_from_anchor(self):
        """Test anchor labels in degrees advance by the rendered glyph width."""
        origin = (13.4, 52.5)
        placer = LabelPlacer.from_position(origin, LocalProjection(origin=origin), system=WGS84)
        for char in "abc":
            placer.accept_glyph(box_glyph(char))

        polygons = placer.get_label().geometry.geoms
        meters_per_degree_lon = METERS_PER_DEGREE * math.cos(math.radians(52.5))
        expected = [13.4 + advance / meters_per_degree_lon for advance in (0.0, 5.0, 10.0)]
        assert [p.bounds[0] for p in polygons] == pytest.approx(expected, rel=1e-9)
