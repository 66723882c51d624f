"""Unit tests for the outline parser."""

import math

import pytest

from glyphline.config import OutlineConfig
from glyphline.core.parser import OutlineParser
from glyphline.exceptions import InvalidCommandError

SQUARE = "m 0 0 l 0 700 l 500 700 l 500 0 z"
SQUARE_WITH_HOLE = SQUARE + " m 100 100 l 400 100 l 400 600 l 100 600 z"


@pytest.fixture
def parser() -> OutlineParser:
    return OutlineParser()


def _segment_lengths(points):
    return [math.dist(points[i], points[i + 1]) for i in range(len(points) - 1)]


class TestOutlineParser:
    """Tests for OutlineParser.parse."""

    def test_square(self, parser):
        """Test a closed square becomes one closed clockwise ring."""
        rings = parser.parse(SQUARE, scale=1.0)

        assert len(rings) == 1
        ring = rings[0]
        assert ring.points[0] == pytest.approx(ring.points[-1])
        assert ring.is_clockwise()
        min_x, min_y, max_x, max_y = ring.bounding_box()
        assert (min_x, min_y) == pytest.approx((0.0, 0.0), abs=1e-9)
        assert (max_x, max_y) == pytest.approx((500.0, 700.0), abs=1e-9)

    def test_equal_arc_length_spacing(self, parser):
        """Test flattened points are equally spaced along the perimeter."""
        ring = parser.parse(SQUARE, scale=1.0)[0]

        # Perimeter 2400 at 25 units per segment
        assert len(ring.points) == 97
        for length in _segment_lengths(ring.points):
            assert length == pytest.approx(25.0, abs=1e-6)

    def test_scale_applied(self, parser):
        """Test coordinates are multiplied by the scale."""
        ring = parser.parse(SQUARE, scale=0.01)[0]
        min_x, min_y, max_x, max_y = ring.bounding_box()
        assert (max_x, max_y) == pytest.approx((5.0, 7.0), abs=1e-9)
        assert (min_x, min_y) == pytest.approx((0.0, 0.0), abs=1e-9)

    def test_point_count_independent_of_scale(self, parser):
        """Test flattening resolution scales with the font instance."""
        small = parser.parse(SQUARE, scale=0.01)[0]
        large = parser.parse(SQUARE, scale=2.0)[0]
        assert len(small.points) == len(large.points) == 97

    def test_segment_factor_from_config(self):
        """Test a coarser segment factor yields fewer points."""
        parser = OutlineParser(OutlineConfig(flatten_segment_factor=100.0))
        ring = parser.parse(SQUARE, scale=1.0)[0]
        assert len(ring.points) == 25

    def test_rings_in_encounter_order(self, parser):
        """Test every sub-path becomes a ring, in order."""
        rings = parser.parse(SQUARE_WITH_HOLE, scale=1.0)

        assert len(rings) == 2
        assert rings[0].is_clockwise()
        assert not rings[1].is_clockwise()
        assert rings[1].bounding_box() == pytest.approx((100.0, 100.0, 400.0, 600.0), abs=1e-9)

    def test_move_closes_previous_ring(self, parser):
        """Test 'm' flushes an open sub-path without 'z'."""
        rings = parser.parse("m 0 0 l 0 10 l 10 10 m 20 0 l 20 10 l 30 10", scale=1.0)
        assert len(rings) == 2
        assert rings[0].points[-1] == pytest.approx((0.0, 0.0))

    def test_final_ring_without_close(self, parser):
        """Test the last ring is flushed at the end of the stream."""
        rings = parser.parse("m 0 0 l 0 10 l 10 10", scale=1.0)
        assert len(rings) == 1
        assert rings[0].points[0] == pytest.approx(rings[0].points[-1])

    def test_empty_outline(self, parser):
        """Test an empty command string yields no rings."""
        assert parser.parse("", scale=1.0) == []
        assert parser.parse("   \n\t ", scale=1.0) == []

    def test_whitespace_runs(self, parser):
        """Test any run of whitespace separates tokens."""
        rings = parser.parse("m 0  0\nl 0\t700 l 500 700   l 500 0 z", scale=1.0)
        assert len(rings) == 1
        assert len(rings[0].points) == 97

    def test_zero_length_sub_path(self, parser):
        """Test a lone move produces a two point ring."""
        rings = parser.parse("m 5 5 z", scale=1.0)
        assert len(rings) == 1
        assert rings[0].points == [(5.0, 5.0), (5.0, 5.0)]
        assert rings[0].is_degenerate()

    def test_stray_close_ignored(self, parser):
        """Test 'z' without an open sub-path is a no-op."""
        rings = parser.parse("z " + SQUARE + " z", scale=1.0)
        assert len(rings) == 1

    def test_quadratic_end_point_first(self, parser):
        """Test 'q' operands are the end point then the control point."""
        ring = parser.parse("m 0 0 q 100 0 50 100", scale=1.0)[0]

        ys = [y for _, y in ring.points]
        xs = [x for x, _ in ring.points]
        # Peak of a quadratic is half way to its control point
        assert max(ys) == pytest.approx(50.0, abs=2.0)
        assert min(ys) == pytest.approx(0.0, abs=1e-9)
        assert min(xs) >= -1e-9
        assert max(xs) <= 100.0 + 1e-9

    def test_cubic_end_point_first(self, parser):
        """Test 'b' operands are the end point then both control points."""
        ring = parser.parse("m 0 0 b 100 0 0 100 100 100", scale=1.0)[0]

        ys = [y for _, y in ring.points]
        assert max(ys) == pytest.approx(75.0, abs=2.0)
        assert ring.points[0] == pytest.approx((0.0, 0.0))

    def test_curved_outline_orientation(self, parser):
        """Test a clockwise curved outline stays clockwise."""
        outline = "m 250 0 q 0 250 0 0 q 250 500 0 500 q 500 250 500 500 q 250 0 500 0 z"
        ring = parser.parse(outline, scale=1.0)[0]
        assert ring.is_clockwise()
        assert ring.bounding_box() == pytest.approx((0.0, 0.0, 500.0, 500.0), abs=1.0)

    def test_unknown_command(self, parser):
        """Test unknown tokens raise InvalidCommandError."""
        with pytest.raises(InvalidCommandError) as exc_info:
            parser.parse("m 0 0 x 1 2", scale=1.0)
        assert exc_info.value.token == "x"
        assert exc_info.value.position == 3

    def test_missing_operands(self, parser):
        """Test truncated commands raise InvalidCommandError."""
        with pytest.raises(InvalidCommandError, match="expected 4 operands, got 2"):
            parser.parse("m 0 0 q 1 2", scale=1.0)

    def test_non_numeric_operand(self, parser):
        """Test operands must be numbers."""
        with pytest.raises(InvalidCommandError, match="not a number"):
            parser.parse("m 0 a", scale=1.0)

    def test_non_finite_operand(self, parser):
        """Test operands must be finite."""
        with pytest.raises(InvalidCommandError, match="not finite"):
            parser.parse("m 0 inf", scale=1.0)

    def test_draw_before_move(self, parser):
        """Test drawing without a current point is rejected."""
        with pytest.raises(InvalidCommandError, match="no current point"):
            parser.parse("l 10 10", scale=1.0)

    def test_draw_after_close(self, parser):
        """Test 'z' resets the current point."""
        with pytest.raises(InvalidCommandError, match="no current point"):
            parser.parse(SQUARE + " l 10 10", scale=1.0)

    def test_float_operands(self, parser):
        """Test decimal operands are accepted."""
        ring = parser.parse("m 0.5 0.5 l 0.5 10.5 l 10.5 10.5 l 10.5 0.5 z", scale=1.0)[0]
        assert ring.bounding_box() == pytest.approx((0.5, 0.5, 10.5, 10.5), abs=1e-9)
