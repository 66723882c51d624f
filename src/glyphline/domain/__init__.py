"""Domain models for glyphline.

This module contains the core domain models representing font definitions,
flattened rings, vectorized glyphs and label geometry. All models are
designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries / GeoJSON
- Independent of outline source implementation details

Key classes:
- Ring: A closed flattened sub-path
- FontDefinition: Raw typeface data from an outline source
- Glyph: A vectorized character at one scale
- GlyphLookup: Found / fallback / missing resolution of a character
- LabelLine: The reference path a label follows
- LabelFeature: A finished label
"""

from glyphline.domain.glyph import Glyph, GlyphLookup, LookupKind
from glyphline.domain.label import PLANAR, WGS84, CoordinateSystem, LabelFeature, LabelLine
from glyphline.domain.outline import FontDefinition, GlyphOutline
from glyphline.domain.ring import Coordinate, Ring, WindingDirection

__all__: list[str] = [
    # Enums
    "WindingDirection",
    "LookupKind",
    # Core types
    "Coordinate",
    "Ring",
    "GlyphOutline",
    "FontDefinition",
    "Glyph",
    "GlyphLookup",
    "CoordinateSystem",
    "LabelLine",
    "LabelFeature",
    # Coordinate systems
    "PLANAR",
    "WGS84",
]
