"""Outline parser turning glyph command strings into flattened rings.

The command language is the one written by typeface.json exporters:

- ``m x y``: start a new sub-path
- ``l x y``: straight line
- ``q x y cx cy``: quadratic curve to (x, y) with control (cx, cy)
- ``b x y c1x c1y c2x c2y``: cubic curve to (x, y) with controls (c1x, c1y), (c2x, c2y)
- ``z``: close the current sub-path

Every sub-path is accumulated into one composite svgpathtools path and
flattened into points equally spaced by arc length once it is complete.
"""

import math

from svgpathtools import CubicBezier, Line, Path, QuadraticBezier

from glyphline.config import OutlineConfig
from glyphline.domain import Ring
from glyphline.exceptions import InvalidCommandError

# Number of operands consumed by each command
COMMAND_ARITY: dict[str, int] = {
    "m": 2,
    "l": 2,
    "q": 4,
    "b": 6,
    "z": 0,
}


class _SubPath:
    """Segments of one sub-path in display coordinates (Y down)."""

    def __init__(self, start: complex) -> None:
        self.start = start
        self.current = start
        self.segments: list[Line | QuadraticBezier | CubicBezier] = []

    def line_to(self, end: complex) -> None:
        if end != self.current:
            self.segments.append(Line(self.current, end))
        self.current = end

    def quadratic_to(self, control: complex, end: complex) -> None:
        if control == self.current and end == self.current:
            return
        self.segments.append(QuadraticBezier(self.current, control, end))
        self.current = end

    def cubic_to(self, control1: complex, control2: complex, end: complex) -> None:
        if control1 == self.current and control2 == self.current and end == self.current:
            return
        self.segments.append(CubicBezier(self.current, control1, control2, end))
        self.current = end

    def close(self) -> None:
        self.line_to(self.start)


class OutlineParser:
    """Parses one glyph's outline command string into closed rings.

    The parser is stateless apart from its configuration and is safe to share
    between font instances.

    Example:
        parser = OutlineParser()
        rings = parser.parse("m 0 0 l 0 100 l 100 100 l 100 0 z", scale=0.1)
    """

    def __init__(self, config: OutlineConfig | None = None) -> None:
        """Initialize the parser.

        Args:
            config: Outline configuration (flattening resolution)
        """
        self.config = config or OutlineConfig()

    def parse(self, outline: str, scale: float) -> list[Ring]:
        """Parse a command string into flattened rings in encounter order.

        Coordinates are multiplied by ``scale``. Output rings use the font's
        Y-up orientation, i.e. ``(x * scale, y * scale)``.

        Args:
            outline: Whitespace separated command string
            scale: Font instance scale

        Returns:
            List of closed rings, one per sub-path

        Raises:
            InvalidCommandError: On unknown commands, missing or malformed
                operands, or drawing before the first ``m``
        """
        tokens = outline.split()
        rings: list[Ring] = []
        sub_path: _SubPath | None = None

        i = 0
        while i < len(tokens):
            action = tokens[i]
            position = i
            arity = COMMAND_ARITY.get(action)
            if arity is None:
                raise InvalidCommandError(action, position, "unknown command")
            available = len(tokens) - position - 1
            if available < arity:
                raise InvalidCommandError(
                    action, position, f"expected {arity} operands, got {available}"
                )

            values = [
                self._number(tokens[k], k) * scale
                for k in range(position + 1, position + 1 + arity)
            ]
            points = [complex(values[k], -values[k + 1]) for k in range(0, arity, 2)]
            i = position + 1 + arity

            if action == "m":
                if sub_path is not None:
                    rings.append(self._flatten(sub_path, scale))
                sub_path = _SubPath(points[0])
                continue

            if action == "z":
                if sub_path is not None:
                    rings.append(self._flatten(sub_path, scale))
                    sub_path = None
                continue

            if sub_path is None:
                raise InvalidCommandError(action, position, "no current point, expected 'm' first")

            if action == "l":
                sub_path.line_to(points[0])
            elif action == "q":
                end, control = points
                sub_path.quadratic_to(control, end)
            else:
                end, control1, control2 = points
                sub_path.cubic_to(control1, control2, end)

        # Path-final ring without trailing 'z'
        if sub_path is not None:
            rings.append(self._flatten(sub_path, scale))

        return rings

    def _number(self, token: str, position: int) -> float:
        try:
            value = float(token)
        except ValueError:
            raise InvalidCommandError(token, position, "operand is not a number") from None
        if not math.isfinite(value):
            raise InvalidCommandError(token, position, "operand is not finite")
        return value

    def _flatten(self, sub_path: _SubPath, scale: float) -> Ring:
        """Close a sub-path and sample it at equal arc-length spacing.

        The segment count is ceil(length / (flatten_segment_factor * scale)),
        at least 1, so even a zero-length sub-path yields its start and end.

        Args:
            sub_path: Accumulated sub-path
            scale: Font instance scale

        Returns:
            Ring in Y-up coordinates, first point repeated at the end
        """
        sub_path.close()

        if not sub_path.segments:
            start = (sub_path.start.real, -sub_path.start.imag)
            return Ring(points=[start, start])

        path = Path(*sub_path.segments)
        length = path.length()
        count = max(1, math.ceil(length / self.config.get_segment_length(scale)))
        step = length / count

        points: list[tuple[float, float]] = []
        for k in range(count + 1):
            s = k * step
            if k == 0 or s <= 0:
                t = 0.0
            elif k == count or s >= length:
                t = 1.0
            else:
                t = path.ilength(s)
            point = path.point(t)
            points.append((point.real, -point.imag))

        return Ring(points=points)
