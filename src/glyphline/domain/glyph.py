"""Glyph representation and lookup results.

This module defines the vectorized glyph, which represents one character of
a font instance at that instance's scale, and the explicit result of
resolving a character against a font definition.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from shapely.geometry import MultiPolygon, mapping

from glyphline.domain.outline import GlyphOutline


class LookupKind(str, Enum):
    """How a character was resolved against the font's glyph table."""

    FOUND = "found"
    FALLBACK = "fallback"
    MISSING = "missing"


@dataclass(frozen=True)
class GlyphLookup:
    """Result of resolving a character.

    Attributes:
        char: The requested character
        kind: Whether the character was found, substituted, or missing
        outline: The outline to vectorize (None when missing)
    """

    char: str
    kind: LookupKind
    outline: GlyphOutline | None = None

    @classmethod
    def found(cls, char: str, outline: GlyphOutline) -> "GlyphLookup":
        return cls(char=char, kind=LookupKind.FOUND, outline=outline)

    @classmethod
    def fallback(cls, char: str, outline: GlyphOutline) -> "GlyphLookup":
        return cls(char=char, kind=LookupKind.FALLBACK, outline=outline)

    @classmethod
    def missing(cls, char: str) -> "GlyphLookup":
        return cls(char=char, kind=LookupKind.MISSING)


@dataclass(frozen=True)
class Glyph:
    """A vectorized character at one font instance's scale.

    Immutable once built; the geometry is a shapely multi-polygon whose
    polygons each hold one clockwise outer ring and counter-clockwise holes.

    Attributes:
        char: The character this glyph was requested for
        geometry: Outline polygons in scaled font units, Y up
        advance: Horizontal advance, scale adjusted
        mid_y: Vertical midline offset, scale adjusted
        scale: Scale the glyph was computed at
        lookup: How the character was resolved
    """

    char: str
    geometry: MultiPolygon
    advance: float
    mid_y: float
    scale: float
    lookup: LookupKind = field(default=LookupKind.FOUND)

    def is_empty(self) -> bool:
        """Check if the glyph has no outline (spaces and other blanks).

        Returns:
            True if the multi-polygon is empty, False otherwise
        """
        return self.geometry.is_empty

    @property
    def polygon_count(self) -> int:
        return len(self.geometry.geoms)

    @property
    def ring_count(self) -> int:
        return sum(1 + len(polygon.interiors) for polygon in self.geometry.geoms)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a GeoJSON-like feature dictionary."""
        return {
            "type": "Feature",
            "geometry": mapping(self.geometry),
            "properties": {
                "char": self.char,
                "hadv": self.advance,
                "midY": self.mid_y,
                "scale": self.scale,
                "lookup": self.lookup.value,
            },
        }
